"""
API 客户端

封装 Modrinth 版本查询接口。
"""

import asyncio
from typing import List, Optional

import aiohttp
from loguru import logger

from moddata.models import VersionInfo
from moddata.models.config import DEFAULT_API_BASE_URL, DEFAULT_USER_AGENT
from moddata.exceptions import APIError, APINotFoundError


class ModrinthClient:
    """Modrinth API 客户端"""

    def __init__(
        self,
        session: Optional[aiohttp.ClientSession] = None,
        base_url: str = DEFAULT_API_BASE_URL,
        timeout: float = 30.0,
        user_agent: str = DEFAULT_USER_AGENT,
    ):
        self._session = session
        self._owned_session = session is None
        self.base_url = base_url.rstrip("/")
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self.headers = {"User-Agent": user_agent}

    @property
    def session(self) -> aiohttp.ClientSession:
        """获取或创建 aiohttp session"""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession()
            self._owned_session = True
        return self._session

    async def _request(self, endpoint: str) -> Optional[list]:
        """
        发送 API 请求

        Returns:
            解析后的 JSON；404 以外的非 200 状态码返回 None

        Raises:
            APINotFoundError: 资源不存在
            APIError: 网络错误、超时或 JSON 无效
        """
        url = f"{self.base_url}{endpoint}"
        try:
            async with self.session.get(
                url, headers=self.headers, timeout=self.timeout
            ) as response:
                if response.status == 404:
                    raise APINotFoundError("资源不存在", response=response)
                if response.status != 200:
                    logger.warning(
                        f"[请求] API 请求失败 (状态码: {response.status}): {url}"
                    )
                    return None
                return await response.json(content_type=None)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise APIError(
                f"API 请求异常: {e.__class__.__name__}",
                context={"url": url, "error": str(e)},
            )
        except ValueError as e:
            raise APIError(
                "API 返回的 JSON 无效", context={"url": url, "error": str(e)}
            )

    async def get_project_versions(self, slug: str) -> List[VersionInfo]:
        """
        获取项目的全部版本

        项目不存在或响应非 200 时返回空列表。
        """
        try:
            response = await self._request(f"/project/{slug}/version")
        except APINotFoundError as e:
            logger.debug(f"[请求] 项目不存在: {slug} ({e.context.get('url')})")
            return []
        if response is None:
            return []
        if not isinstance(response, list):
            raise APIError(
                "版本列表格式无效",
                context={"slug": slug, "type": type(response).__name__},
            )
        logger.debug(f"[请求] {slug}: 获取到 {len(response)} 个版本")
        return [VersionInfo.from_modrinth(version) for version in response]

    async def close(self):
        """关闭客户端"""
        if self._owned_session and self._session and not self._session.closed:
            await self._session.close()

    async def __aenter__(self):
        """异步上下文管理器入口"""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """异步上下文管理器出口"""
        await self.close()
