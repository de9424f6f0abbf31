"""
数据整形

把 Modrinth 版本信息展开为网站使用的扁平记录。
"""

from typing import List

from moddata.models import ModListEntry, ModRecord, VersionInfo


def format_versions(
    entry: ModListEntry, versions: List[VersionInfo], platform: str = "java"
) -> List[ModRecord]:
    """
    展开版本信息

    每个 (版本, 文件, 加载器) 组合生成一条记录，顺序与 API 返回一致。
    没有 URL 的文件会被跳过。
    """
    records = []
    for version in versions:
        game_version = ", ".join(version.game_versions)

        for file in version.files:
            if not file.url:
                continue

            for loader in version.loaders:
                records.append(
                    ModRecord(
                        post_id=entry.post_id,
                        platform=platform,
                        version=game_version,
                        loader=loader.lower(),
                        link=file.url,
                        type=entry.type,
                    )
                )
    return records
