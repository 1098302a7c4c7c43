"""本地文件相关的协作者实现：纯文本提取与结果下载。"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Tuple


@dataclass
class PlainTextExtractor:
    """只处理纯文本类文档（.txt/.md/.usfm 等），按 UTF-8 解码。

    docx 等二进制格式需要另行注入提取器。
    """

    suffixes: Tuple[str, ...] = (".txt", ".md", ".text", ".usfm", ".sfm", "")

    def extract(self, data: bytes, filename: str = "") -> str:
        suffix = Path(filename).suffix.lower()
        if suffix not in self.suffixes:
            raise ValueError(f"unsupported document type: {suffix}")
        return data.decode("utf-8-sig")


@dataclass
class LocalFileDownloader:
    """把转换结果写入 output_dir 下的文件。"""

    output_dir: Path

    def __post_init__(self) -> None:
        self.output_dir = Path(self.output_dir).expanduser().resolve()

    def download(self, content: str, filename: str) -> Path:
        name = Path(filename).name
        if not name:
            raise ValueError("filename must not be empty")
        self.output_dir.mkdir(parents=True, exist_ok=True)
        target = self.output_dir / name
        target.write_text(content, encoding="utf-8")
        return target
