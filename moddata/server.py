"""
HTTP 服务

提供 ``GET /api/mod-data`` 接口，返回聚合后的模组下载记录。
"""

import uuid
from typing import Optional

import aiohttp
from aiohttp import web
from loguru import logger

from moddata.models import ServiceConfig
from moddata.services import ModDataAggregator
from moddata.exceptions import ModDataError, UNEXPECTED_ERROR_MESSAGE

CONFIG_KEY = web.AppKey("config", ServiceConfig)
SESSION_KEY = web.AppKey("session", aiohttp.ClientSession)


async def client_session_ctx(app: web.Application):
    """应用生命周期内共享一个 aiohttp session"""
    app[SESSION_KEY] = aiohttp.ClientSession()
    logger.debug("[服务] HTTP session 已创建")
    yield
    await app[SESSION_KEY].close()
    logger.debug("[服务] HTTP session 已关闭")


async def mod_data_handler(request: web.Request) -> web.Response:
    config = request.app[CONFIG_KEY]
    request_id = request.headers.get("X-Request-Id") or uuid.uuid4().hex[:8]
    aggregator = ModDataAggregator.from_config(config, request.app[SESSION_KEY])

    with logger.contextualize(scope=request_id):
        try:
            records = await aggregator.collect()
        except ModDataError as e:
            logger.error(f"[错误] 数据获取失败: {e} {e.context}")
            return web.json_response({"error": e.public_message}, status=500)
        except Exception as e:
            logger.exception(f"[错误] 全局 API 错误: {e}")
            return web.json_response({"error": UNEXPECTED_ERROR_MESSAGE}, status=500)

    return web.json_response(
        [record.to_dict() for record in records],
        headers={"Cache-Control": config.cache_control},
    )


def create_app(config: Optional[ServiceConfig] = None) -> web.Application:
    """创建 aiohttp 应用"""
    config = config or ServiceConfig()
    app = web.Application()
    app[CONFIG_KEY] = config
    app.cleanup_ctx.append(client_session_ctx)
    app.router.add_get(config.route, mod_data_handler)
    return app


def run_server(config: ServiceConfig) -> None:
    """启动 HTTP 服务（阻塞）"""
    logger.info(
        f"[服务] 监听 http://{config.host}:{config.port}{config.route} "
        f"(最大并发数: {config.max_concurrent})"
    )
    web.run_app(create_app(config), host=config.host, port=config.port, print=None)
