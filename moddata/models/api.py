"""
API 数据模型

定义模组列表条目以及 Modrinth 版本信息的数据类。
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from moddata.exceptions import ConfigValidationError


@dataclass
class ModListEntry:
    """模组列表中的一项"""

    slug: str
    post_id: Any = None
    type: str = "mod"

    @classmethod
    def from_dict(cls, data: Any, default_type: str = "mod") -> "ModListEntry":
        """
        从模组列表中的原始条目创建对象。

        ``type`` 缺失、为 null 或空字符串时使用 ``default_type``。
        """
        if not isinstance(data, dict):
            raise ConfigValidationError(
                "模组列表条目必须是一个对象", context={"entry": repr(data)}
            )

        slug = data.get("slug")
        if not slug or not isinstance(slug, str):
            raise ConfigValidationError(
                "模组列表条目缺少 slug", context={"entry": repr(data)}
            )

        return cls(
            slug=slug,
            post_id=data.get("post_id"),
            type=data.get("type") or default_type,
        )


@dataclass
class FileInfo:
    """文件信息"""

    url: str
    filename: str = ""
    primary: bool = False
    size: int = 0
    hashes: Optional[Dict[str, str]] = None


@dataclass
class VersionInfo:
    """
    模组版本信息。
    """

    id: str
    version: str
    game_versions: List[str] = field(default_factory=list)
    loaders: List[str] = field(default_factory=list)
    files: List[FileInfo] = field(default_factory=list)

    @classmethod
    def from_modrinth(cls, data: dict) -> "VersionInfo":
        """
        将 Modrinth API 返回的版本信息转换为 VersionInfo 对象。
        """
        files = [
            FileInfo(
                url=file.get("url") or "",
                filename=file.get("filename", ""),
                primary=file.get("primary", False),
                size=file.get("size", 0),
                hashes=file.get("hashes"),
            )
            for file in data.get("files") or []
        ]

        return cls(
            id=data.get("id", ""),
            version=data.get("version_number", ""),
            game_versions=list(data.get("game_versions") or []),
            loaders=list(data.get("loaders") or []),
            files=files,
        )
