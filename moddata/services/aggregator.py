"""
数据聚合服务

获取模组列表，并发查询每个模组的版本信息，汇总为扁平记录列表。
"""

import asyncio
from dataclasses import dataclass
from typing import List, Optional

import aiohttp
from loguru import logger

from moddata.models import ModListEntry, ModRecord, ServiceConfig
from moddata.services.api_client import ModrinthClient
from moddata.services.formatter import format_versions
from moddata.services.slug_list import SlugListClient


@dataclass
class CollectStats:
    """聚合统计"""

    mods: int = 0
    records: int = 0
    failed: int = 0


class ModDataAggregator:
    """模组数据聚合器"""

    def __init__(
        self,
        slug_list: SlugListClient,
        client: ModrinthClient,
        platform: str = "java",
        max_concurrent: int = 5,
    ):
        self.slug_list = slug_list
        self.client = client
        self.platform = platform
        self.max_concurrent = max_concurrent
        self.stats = CollectStats()

    @classmethod
    def from_config(
        cls,
        config: ServiceConfig,
        session: Optional[aiohttp.ClientSession] = None,
    ) -> "ModDataAggregator":
        """根据配置创建聚合器，传入的 session 由调用方负责关闭"""
        slug_list = SlugListClient(
            config.slug_list_url,
            format=config.slug_list_format,
            default_type=config.default_type,
            session=session,
            timeout=config.timeout,
            user_agent=config.user_agent,
        )
        client = ModrinthClient(
            session=session,
            base_url=config.api_base_url,
            timeout=config.timeout,
            user_agent=config.user_agent,
        )
        return cls(
            slug_list,
            client,
            platform=config.platform,
            max_concurrent=config.max_concurrent,
        )

    async def _collect_one(
        self, entry: ModListEntry, semaphore: asyncio.Semaphore
    ) -> List[ModRecord]:
        """处理单个模组，出错时记录日志并返回空列表"""
        try:
            async with semaphore:
                versions = await self.client.get_project_versions(entry.slug)
            return format_versions(entry, versions, self.platform)
        except Exception as e:
            self.stats.failed += 1
            logger.error(f"[错误] 处理模组 {entry.slug} 时出错: {e}")
            return []

    async def collect(self) -> List[ModRecord]:
        """
        运行完整的聚合流程

        Returns:
            按模组列表顺序展开的记录

        Raises:
            SlugListError: 模组列表返回非 200
            SlugListFormatError: 模组列表无法解析
        """
        self.stats = CollectStats()
        entries = await self.slug_list.fetch()
        # 列表中的无效条目也计为失败
        self.stats.failed = self.slug_list.skipped
        self.stats.mods = len(entries) + self.slug_list.skipped

        semaphore = asyncio.Semaphore(self.max_concurrent)
        results = await asyncio.gather(
            *(self._collect_one(entry, semaphore) for entry in entries)
        )

        records = [record for result in results for record in result]
        self.stats.records = len(records)

        logger.info(
            f"[完成] {self.stats.mods} 个模组, {self.stats.records} 条记录, "
            f"{self.stats.failed} 个失败"
        )
        return records

    async def close(self):
        """关闭聚合器持有的客户端"""
        await self.slug_list.close()
        await self.client.close()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
