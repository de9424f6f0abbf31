"""
输出记录模型
"""

from dataclasses import dataclass
from typing import Any, Dict


@dataclass
class ModRecord:
    """网站使用的扁平下载记录"""

    post_id: Any
    platform: str
    version: str
    loader: str
    link: str
    type: str

    def to_dict(self) -> Dict[str, Any]:
        """转换为网站期望的 JSON 结构"""
        return {
            "PostID": self.post_id,
            "Platform": self.platform,
            "Version": self.version,
            "Loader": self.loader,
            "Link": self.link,
            "Type": self.type,
        }
