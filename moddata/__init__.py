"""
ModData - Modrinth 模组下载信息聚合服务
"""

__version__ = "0.1.0"

from moddata.logger import setup_logger

setup_logger()
