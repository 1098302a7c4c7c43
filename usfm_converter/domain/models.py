"""统一的对话、补全与转换结果数据模型。

本模块定义转换流水线各阶段之间传递的值对象：

- ChatMessage: 一条对话消息（system/user/assistant）。
- ConversionRequest: 单次转换的原始输入。
- CompletionSuccess / CompletionFailure: Provider 调用的二选一结果。
- MarkerPair / ValidationOutcome: 结构校验所用的标记对与校验结论。
- ConversionResult: 整条流水线对调用方暴露的最终结果。

所有模型都是不可变 dataclass，单次转换独占自己的请求/响应/结论，
并发的多次转换之间没有共享的可变状态。
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Literal, Optional, Tuple, Union


# LLM 消息角色类型（与 OpenRouter / OpenAI 的 role 字段对应）
Role = Literal["system", "user", "assistant"]

# 失败类型错误码
FailureCode = Literal[
    "EMPTY_INPUT",
    "NETWORK_ERROR",
    "INVALID_API_KEY",
    "RATE_LIMIT",
    "INSUFFICIENT_BALANCE",
    "UPSTREAM_ERROR",
    "MALFORMED_RESPONSE",
    "MISSING_MARKERS",
    "MISMATCHED_MARKERS",
    "API_ERROR",
    "MISSING_API_KEY",
    "DOCUMENT_ERROR",
    "UNKNOWN_ERROR",
]


@dataclass(frozen=True)
class ChatMessage:
    """一条对话消息。

    - role: 消息角色，system 必须排在第一条。
    - content: 纯文本内容；user 消息原样携带用户输入，不做任何改写。
    """

    role: Role
    content: str

    def to_payload(self) -> Dict[str, str]:
        return {"role": self.role, "content": self.content}


@dataclass(frozen=True)
class ConversionRequest:
    """单次转换请求，转换结束后即丢弃。"""

    text: str

    @property
    def is_empty(self) -> bool:
        return not self.text or not self.text.strip()


@dataclass(frozen=True)
class CompletionSuccess:
    """Provider 调用成功，携带抽取出的 USFM 文本。"""

    usfm_text: str
    ok: Literal[True] = field(default=True, init=False)


@dataclass(frozen=True)
class CompletionFailure:
    """Provider 调用失败，携带错误码与可读信息。"""

    code: FailureCode
    message: str
    http_status: Optional[int] = None
    ok: Literal[False] = field(default=False, init=False)


CompletionResult = Union[CompletionSuccess, CompletionFailure]


@dataclass(frozen=True)
class MarkerPair:
    """一组需要数量相等的开/闭标记，如脚注 \\f ... \\f*。"""

    name: str
    open: str
    close: str


@dataclass(frozen=True)
class ValidationOutcome:
    """结构校验结论。

    valid 为 False 时，missing_markers 与 mismatched_pairs 至少一个非空。
    校验器遇到第一类缺陷即返回，因此当前实现中两者不会同时出现。
    """

    valid: bool
    missing_markers: Tuple[str, ...] = ()
    mismatched_pairs: Tuple[str, ...] = ()

    @property
    def code(self) -> Optional[FailureCode]:
        if self.missing_markers:
            return "MISSING_MARKERS"
        if self.mismatched_pairs:
            return "MISMATCHED_MARKERS"
        return None

    @property
    def message(self) -> str:
        if self.missing_markers:
            return f"Invalid USFM output: Missing required markers: {', '.join(self.missing_markers)}"
        if self.mismatched_pairs:
            return f"Invalid USFM output: Mismatched {self.mismatched_pairs[0]} markers"
        return ""


@dataclass(frozen=True)
class ConversionResult:
    """一次 convert() 的最终结果，success 为真时 usfm 有值，否则 error 有值。"""

    success: bool
    usfm: Optional[str] = None
    error: Optional[str] = None
    code: Optional[FailureCode] = None

    @classmethod
    def ok(cls, usfm: str) -> "ConversionResult":
        return cls(success=True, usfm=usfm)

    @classmethod
    def fail(cls, code: FailureCode, error: str) -> "ConversionResult":
        return cls(success=False, error=error, code=code)

    def to_dict(self) -> Dict[str, Any]:
        """转换为 UI 层使用的 {success, usfm} 或 {success, error, code} 结构。"""

        if self.success:
            return {"success": True, "usfm": self.usfm}
        return {"success": False, "error": self.error, "code": self.code}
