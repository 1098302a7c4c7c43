"""系统提示词加载与对话构造。

系统提示词按语言(locale) 从 prompts/<locale> 目录读取，内容固定且带版本号；
build_messages 把它与用户原始文本组合成 [system, user] 两条消息。
"""

from functools import lru_cache
from pathlib import Path
from typing import List

from usfm_converter.domain.models import ChatMessage


PROMPTS_DIR = Path(__file__).resolve().parent

# 修改 usfm_system.md 时递增
PROMPT_VERSION = "2"


@lru_cache(maxsize=None)
def load_system_prompt(locale: str = "en") -> str:
    """加载 USFM 转换的系统提示词文本。"""

    fname = PROMPTS_DIR / locale / "usfm_system.md"
    return fname.read_text(encoding="utf-8").strip()


def build_messages(text: str, locale: str = "en") -> List[ChatMessage]:
    """构造发给 Provider 的对话：固定的 system 提示词 + 原样的用户输入。"""

    return [
        ChatMessage(role="system", content=load_system_prompt(locale)),
        ChatMessage(role="user", content=text),
    ]
