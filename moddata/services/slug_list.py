"""
模组列表服务

从静态文件（通常是 GitHub raw 链接）获取需要展示的模组列表。
"""

import asyncio
from typing import List, Optional

import aiohttp
from loguru import logger

from moddata.models import ModListEntry
from moddata.models.config import DEFAULT_USER_AGENT
from moddata.exceptions import (
    APIError,
    ConfigValidationError,
    SLUG_LIST_ERROR_MESSAGE,
    SlugListError,
    SlugListFormatError,
)
from moddata.utils import decode_payload, detect_format, extract_mods


class SlugListClient:
    """模组列表客户端"""

    def __init__(
        self,
        url: str,
        format: str = "auto",
        default_type: str = "mod",
        session: Optional[aiohttp.ClientSession] = None,
        timeout: float = 30.0,
        user_agent: str = DEFAULT_USER_AGENT,
    ):
        self.url = url
        self.format = detect_format(url) if format == "auto" else format
        self.default_type = default_type
        self._session = session
        self._owned_session = session is None
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self.headers = {"User-Agent": user_agent}
        # 上一次 fetch 中被跳过的无效条目数
        self.skipped = 0

    @property
    def session(self) -> aiohttp.ClientSession:
        """获取或创建 aiohttp session"""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession()
            self._owned_session = True
        return self._session

    async def _download(self) -> str:
        try:
            async with self.session.get(
                self.url, headers=self.headers, timeout=self.timeout
            ) as response:
                if response.status != 200:
                    raise SlugListError(SLUG_LIST_ERROR_MESSAGE, response=response)
                return await response.text()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise APIError(
                f"模组列表请求异常: {e.__class__.__name__}",
                context={"url": self.url, "error": str(e)},
            )

    def _parse_entries(self, mods: list) -> List[ModListEntry]:
        entries = []
        for index, mod in enumerate(mods):
            try:
                entries.append(ModListEntry.from_dict(mod, self.default_type))
            except ConfigValidationError as e:
                self.skipped += 1
                logger.warning(f"[列表] 跳过第 {index} 项: {e.message} {e.context}")
        return entries

    async def fetch(self) -> List[ModListEntry]:
        """
        获取并解析模组列表

        无效条目会被跳过并记入 ``skipped``。

        Raises:
            SlugListError: 列表返回非 200 状态码
            APIError: 网络错误或超时
            SlugListFormatError: 内容无法解析
        """
        self.skipped = 0
        logger.info(f"[列表] 获取模组列表: {self.url}")
        text = await self._download()

        try:
            mods = extract_mods(decode_payload(text, self.format))
        except Exception as e:
            raise SlugListFormatError(
                "模组列表内容无法解析",
                context={"url": self.url, "format": self.format, "error": str(e)},
            )

        entries = self._parse_entries(mods)
        logger.info(f"[列表] 共 {len(entries)} 个模组, 跳过 {self.skipped} 项")
        return entries

    async def close(self):
        """关闭客户端"""
        if self._owned_session and self._session and not self._session.closed:
            await self._session.close()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
