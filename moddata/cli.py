"""
CLI 模块

命令行接口实现。
"""

import asyncio
import json
from pathlib import Path
from typing import Optional

import aiofiles
import click
import toml
import yaml
from loguru import logger

from moddata import __version__
from moddata.models import ServiceConfig
from moddata.services import ModDataAggregator
from moddata.exceptions import ModDataError
from moddata.logger import configure_for_command
from moddata.server import run_server


def load_config(config_path: Optional[str]) -> dict:
    """加载配置文件，未指定时返回空配置"""
    if config_path is None:
        return {}

    path = Path(config_path)

    if not path.exists():
        raise click.ClickException(f"配置文件不存在: {config_path}")

    suffix = path.suffix.lower()

    if suffix == ".toml":
        return toml.load(config_path)
    elif suffix == ".json":
        return json.loads(path.read_text(encoding="utf-8"))
    elif suffix in (".yaml", ".yml"):
        return yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    else:
        raise click.ClickException(f"不支持的配置文件格式: {suffix}")


def build_config(config_path: Optional[str], **overrides) -> ServiceConfig:
    """读取配置文件并应用命令行参数"""
    try:
        config = ServiceConfig.from_dict(load_config(config_path))
        for key, value in overrides.items():
            if value is not None:
                setattr(config, key, value)
        return config
    except ModDataError as e:
        raise click.ClickException(str(e))


async def dump_async(config: ServiceConfig, output: Optional[str]):
    """运行一次聚合并输出 JSON"""
    async with ModDataAggregator.from_config(config) as aggregator:
        records = await aggregator.collect()

    payload = json.dumps(
        [record.to_dict() for record in records], ensure_ascii=False, indent=2
    )

    if output:
        async with aiofiles.open(output, "w", encoding="utf-8") as f:
            await f.write(payload)
        logger.success(f"[完成] 已写入 {len(records)} 条记录到 {output}")
    else:
        click.echo(payload)


@click.group()
@click.version_option(version=__version__)
def main():
    """ModData - Modrinth 模组下载信息聚合服务"""


@main.command()
@click.option("-c", "--config", "config_path", help="配置文件路径 (toml/json/yaml)")
@click.option("--host", help="监听地址")
@click.option("--port", type=int, help="监听端口")
@click.option("--debug", is_flag=True, help="启用调试模式")
def serve(config_path: Optional[str], host: Optional[str], port: Optional[int], debug: bool):
    """启动 HTTP 服务"""
    configure_for_command("serve", debug)
    config = build_config(config_path, host=host, port=port)
    run_server(config)


@main.command()
@click.option("-c", "--config", "config_path", help="配置文件路径 (toml/json/yaml)")
@click.option("-o", "--output", help="输出文件，默认输出到标准输出")
@click.option("--debug", is_flag=True, help="启用调试模式")
def dump(config_path: Optional[str], output: Optional[str], debug: bool):
    """获取一次数据并输出 JSON"""
    configure_for_command("dump", debug)
    config = build_config(config_path)

    try:
        asyncio.run(dump_async(config, output))
    except ModDataError as e:
        logger.error(f"[错误] {e}")
        raise click.ClickException(str(e))


if __name__ == "__main__":
    main()
