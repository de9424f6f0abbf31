"""
ModData 服务层

包含业务逻辑服务：模组列表、API 客户端、数据整形、聚合。
"""

from moddata.services.api_client import ModrinthClient
from moddata.services.slug_list import SlugListClient
from moddata.services.formatter import format_versions
from moddata.services.aggregator import ModDataAggregator, CollectStats

__all__ = [
    "ModrinthClient",
    "SlugListClient",
    "format_versions",
    "ModDataAggregator",
    "CollectStats",
]
