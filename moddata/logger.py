"""
日志模块

使用 loguru 输出日志。每条日志带 ``scope`` 字段：HTTP 请求期间为请求 ID，
其余时候为 ``-``。
"""

import os
import sys
from typing import Optional

from loguru import logger


LOG_FORMAT = (
    "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {extra[scope]: <8} | {message}"
)

# serve 的日志写到标准输出；dump 的标准输出留给 JSON，日志改写到标准错误
COMMAND_SINKS = {
    "serve": sys.stdout,
    "dump": sys.stderr,
}


def _default_level(debug: bool = False) -> str:
    if debug or os.environ.get("MODDATA_DEBUG", "0") == "1":
        return "DEBUG"
    return "INFO"


def setup_logger(
    level: Optional[str] = None,
    sink=sys.stdout,
    enqueue: bool = True,
    colorize: Optional[bool] = None,
) -> None:
    """
    设置日志记录器

    Args:
        level: 日志级别，默认由 MODDATA_DEBUG 决定
        sink: 输出目标
        enqueue: 是否启用队列
        colorize: 是否启用颜色，默认仅在 sink 为终端时启用
    """
    level = level or _default_level()
    if colorize is None:
        colorize = bool(getattr(sink, "isatty", None) and sink.isatty())

    logger.remove()
    logger.configure(extra={"scope": "-"})
    logger.add(
        sink=sink,
        format=LOG_FORMAT,
        enqueue=enqueue,
        level=level,
        colorize=colorize,
        backtrace=(level == "DEBUG"),
        diagnose=(level == "DEBUG"),
    )


def configure_for_command(command: str, debug: bool = False) -> None:
    """按 CLI 子命令配置日志"""
    level = _default_level(debug)
    # dump 是一次性进程，同步写入以免退出时丢失日志
    setup_logger(
        level=level,
        sink=COMMAND_SINKS.get(command, sys.stdout),
        enqueue=(command == "serve"),
    )
    logger.debug(f"[日志] {command} 日志级别: {level}")


__all__ = ["logger", "setup_logger", "configure_for_command", "LOG_FORMAT"]
