"""State definition for the conversion graph."""

from __future__ import annotations

from typing import List, Literal, Optional, TypedDict

from usfm_converter.domain.models import ChatMessage, ConversionResult


Stage = Literal["idle", "validating_input", "awaiting_completion", "validating_output", "done"]


class ConversionState(TypedDict, total=False):
    """State owned by a single convert() call."""

    text: str
    api_key: Optional[str]
    model: Optional[str]
    messages: List[ChatMessage]
    usfm: Optional[str]
    stage: Stage
    result: Optional[ConversionResult]
