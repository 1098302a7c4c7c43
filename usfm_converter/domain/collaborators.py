"""外部协作者协议。

上传、凭证、下载、剪贴板等能力都属于界面层，不在转换核心内部使用，
而是以 Protocol 的形式注入到调用方（api.service），便于替换与测试。
"""

from pathlib import Path
from typing import Optional, Protocol


class TextExtractor(Protocol):
    """把上传的文档转换为纯文本，失败时抛出异常。"""

    def extract(self, data: bytes, filename: str = "") -> str:
        ...


class CredentialStore(Protocol):
    """提供/保存 API 凭证字符串。"""

    def load(self) -> Optional[str]:
        ...

    def save(self, api_key: str) -> None:
        ...

    def clear(self) -> None:
        ...


class FileDownloader(Protocol):
    """把转换结果落地为文件，返回最终写入的位置。"""

    def download(self, content: str, filename: str) -> Path:
        ...


class ClipboardWriter(Protocol):
    """把文本写入剪贴板。"""

    def write(self, text: str) -> None:
        ...
