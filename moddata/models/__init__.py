"""
ModData 数据模型包

包含配置模型、API 模型和输出记录定义。
"""

from moddata.models.config import ServiceConfig
from moddata.models.api import ModListEntry, FileInfo, VersionInfo
from moddata.models.record import ModRecord

__all__ = [
    # 配置模型
    "ServiceConfig",
    # API 模型
    "ModListEntry",
    "FileInfo",
    "VersionInfo",
    # 输出
    "ModRecord",
]
