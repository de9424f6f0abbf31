import json
from typing import Any, List
from urllib.parse import urlparse

import toml
import yaml


def detect_format(url: str) -> str:
    """根据 URL 后缀推断列表格式，无法识别时按 JSON 处理"""
    path = urlparse(url).path.lower()
    if path.endswith(".toml"):
        return "toml"
    if path.endswith((".yaml", ".yml")):
        return "yaml"
    return "json"


def decode_payload(text: str, format: str) -> Any:
    if format == "json":
        return json.loads(text)
    elif format == "toml":
        return toml.loads(text)
    elif format == "yaml":
        return yaml.safe_load(text)
    raise ValueError(f"不支持的格式: {format}")


def extract_mods(document: Any) -> List[Any]:
    """取出模组列表：既可以是顶层数组，也可以是 ``mods`` 键下的数组"""
    if isinstance(document, dict):
        document = document.get("mods")
    if not isinstance(document, list):
        raise ValueError("模组列表必须是数组或包含 mods 数组的对象")
    return document
