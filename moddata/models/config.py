"""
配置模型

定义服务运行所需的配置项，支持从字典（TOML/JSON/YAML 解析结果）构建。
"""

import os
from dataclasses import dataclass, fields
from typing import Any, Dict, Optional

from loguru import logger

from moddata.exceptions import ConfigParseError, ConfigValidationError


DEFAULT_SLUG_LIST_URL = (
    "https://raw.githubusercontent.com/blockversemc/blockverse-mc/main/modrinth-slugs.json"
)
DEFAULT_API_BASE_URL = "https://api.modrinth.com/v2"
DEFAULT_CACHE_CONTROL = "s-maxage=3600, stale-while-revalidate"
DEFAULT_MAX_CONCURRENT = 5
DEFAULT_USER_AGENT = "moddata/0.1.0"

SLUG_LIST_FORMATS = ("auto", "json", "toml", "yaml")

# 环境变量 -> 配置字段
ENV_OVERRIDES = {
    "MODDATA_SLUG_LIST_URL": "slug_list_url",
    "MODDATA_HOST": "host",
    "MODDATA_PORT": "port",
}


@dataclass
class ServiceConfig:
    """服务配置"""

    slug_list_url: str = DEFAULT_SLUG_LIST_URL
    slug_list_format: str = "auto"
    api_base_url: str = DEFAULT_API_BASE_URL
    platform: str = "java"
    default_type: str = "mod"
    cache_control: str = DEFAULT_CACHE_CONTROL
    max_concurrent: int = DEFAULT_MAX_CONCURRENT
    timeout: float = 30.0
    user_agent: str = DEFAULT_USER_AGENT
    host: str = "0.0.0.0"
    port: int = 8080
    route: str = "/api/mod-data"

    def __post_init__(self):
        if not self.slug_list_url:
            raise ConfigValidationError("请配置 slug_list_url")

        if self.slug_list_format not in SLUG_LIST_FORMATS:
            raise ConfigValidationError(
                f"slug_list_format 必须为 {'/'.join(SLUG_LIST_FORMATS)}",
                context={"slug_list_format": self.slug_list_format},
            )

        if (
            not isinstance(self.max_concurrent, int)
            or isinstance(self.max_concurrent, bool)
            or self.max_concurrent <= 0
        ):
            logger.warning(
                f"[配置] max_concurrent 配置无效 ({self.max_concurrent!r})，"
                f"将使用默认值 {DEFAULT_MAX_CONCURRENT}。"
            )
            self.max_concurrent = DEFAULT_MAX_CONCURRENT

        try:
            self.port = int(self.port)
            self.timeout = float(self.timeout)
        except (TypeError, ValueError) as e:
            raise ConfigValidationError(
                "port/timeout 必须为数字", context={"error": str(e)}
            )

        self.api_base_url = self.api_base_url.rstrip("/")
        if not self.route.startswith("/"):
            self.route = "/" + self.route

    @classmethod
    def from_dict(
        cls, data: Optional[Dict[str, Any]], environ: Optional[Dict[str, str]] = None
    ) -> "ServiceConfig":
        """
        从字典创建配置

        既接受扁平字典，也接受带 ``moddata`` 表的字典。未知的键会被忽略。
        环境变量优先于文件中的值。

        Args:
            data: 配置字典
            environ: 环境变量，默认为 ``os.environ``
        """
        data = data or {}
        if not isinstance(data, dict):
            raise ConfigParseError("配置必须是一个字典")

        section = data.get("moddata", data)
        if not isinstance(section, dict):
            raise ConfigParseError("[moddata] 必须是一个表")

        known = {f.name for f in fields(cls)}
        values = {key: value for key, value in section.items() if key in known}

        unknown = set(section) - known - {"moddata"}
        if unknown:
            logger.debug(f"[配置] 忽略未知配置项: {', '.join(sorted(unknown))}")

        environ = os.environ if environ is None else environ
        for env_name, field_name in ENV_OVERRIDES.items():
            if environ.get(env_name):
                values[field_name] = environ[env_name]

        return cls(**values)
