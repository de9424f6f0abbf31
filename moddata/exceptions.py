"""
ModData 异常体系

每个异常都带错误代码和上下文；``public_message`` 是返回给 HTTP 调用方的固定文本，
内部细节只写入日志。
"""

from typing import Any, Dict, Optional
import aiohttp


UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred during data fetching."
SLUG_LIST_ERROR_MESSAGE = "Failed to fetch mod list from GitHub."


class ModDataError(Exception):
    """ModData 基础异常类"""

    default_code = "E000"
    public_message = UNEXPECTED_ERROR_MESSAGE

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.context = context or {}

    def to_dict(self) -> Dict[str, Any]:
        """日志与 dump 使用的结构化表示"""
        return {
            "error": True,
            "code": self.code,
            "message": self.message,
            "context": self.context,
            "type": self.__class__.__name__,
        }

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"


class ConfigError(ModDataError):
    """配置错误"""

    default_code = "E100"


class ConfigParseError(ConfigError):
    default_code = "E101"


class ConfigValidationError(ConfigError):
    default_code = "E102"


class APIError(ModDataError):
    """上游 HTTP 请求错误，带响应时记录状态码和 URL"""

    default_code = "E200"

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        response: Optional[aiohttp.ClientResponse] = None,
    ):
        super().__init__(message, code, context)
        self.response = response
        if response is not None:
            self.context["status_code"] = response.status
            self.context["url"] = str(response.url)


class APINotFoundError(APIError):
    """Modrinth 上不存在该项目"""

    default_code = "E404"


class SlugListError(APIError):
    """模组列表返回非 200 状态码"""

    default_code = "E210"
    public_message = SLUG_LIST_ERROR_MESSAGE


class SlugListFormatError(ModDataError):
    """模组列表下载成功但内容无法解析"""

    default_code = "E220"


__all__ = [
    "UNEXPECTED_ERROR_MESSAGE",
    "SLUG_LIST_ERROR_MESSAGE",
    "ModDataError",
    "ConfigError",
    "ConfigParseError",
    "ConfigValidationError",
    "APIError",
    "APINotFoundError",
    "SlugListError",
    "SlugListFormatError",
]
