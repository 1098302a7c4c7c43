"""USFM 结构校验器。

只做浅层检查，不解析 USFM 语法：

1. 必需头部标记（\\id、\\h、\\mt）按子串判断是否存在；
   标记出现在无关文本里也算存在。
2. 按固定顺序（脚注、交叉引用、研读注释）统计每组开/闭标记的数量，
   第一组数量不等的标记对即判定失败，后续标记对不再检查。

两步依次执行，遇到第一类缺陷立即返回。
"""

import re
from collections import Counter
from typing import Iterable, Sequence, Tuple

from usfm_converter.domain.models import MarkerPair, ValidationOutcome


REQUIRED_MARKERS: Tuple[str, ...] = ("\\id", "\\h", "\\mt")

MARKER_PAIRS: Tuple[MarkerPair, ...] = (
    MarkerPair(name="footnote", open="\\f", close="\\f*"),
    MarkerPair(name="cross-reference", open="\\x", close="\\x*"),
    MarkerPair(name="study-note", open="\\esb", close="\\esbe"),
)

# 反斜杠 + 可选的嵌套前缀 "+" + 标记名 + 可选的闭合 "*"
_MARKER_RE = re.compile(r"\\(\+?[A-Za-z][A-Za-z0-9]*\*?)")


def scan_markers(text: str) -> Counter:
    """统计文本中每个标记 token 的出现次数，key 形如 "\\f"、"\\f*"、"\\fr"。"""

    return Counter("\\" + m.group(1) for m in _MARKER_RE.finditer(text))


def find_missing_markers(text: str, required: Iterable[str] = REQUIRED_MARKERS) -> Tuple[str, ...]:
    return tuple(marker for marker in required if marker not in text)


def find_first_mismatched_pair(text: str, pairs: Sequence[MarkerPair] = MARKER_PAIRS) -> Tuple[str, ...]:
    """返回第一组数量不等的标记对的开标记，全部平衡时返回空元组。"""

    counts = scan_markers(text)
    for pair in pairs:
        if counts[pair.open] != counts[pair.close]:
            return (pair.open,)
    return ()


def validate_usfm(text: str) -> ValidationOutcome:
    missing = find_missing_markers(text)
    if missing:
        return ValidationOutcome(valid=False, missing_markers=missing)

    mismatched = find_first_mismatched_pair(text)
    if mismatched:
        return ValidationOutcome(valid=False, mismatched_pairs=mismatched)

    return ValidationOutcome(valid=True)
