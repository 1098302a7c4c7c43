"""USFM Converter 顶层包。

该包把学习笔记文本通过远程 LLM（OpenRouter chat/completions）转换为
USFM 标记文本，并在返回前做结构校验。包含配置加载、领域模型、
Provider 适配、提示词构造、结构校验器与转换流程编排等能力。
"""

from usfm_converter.domain.models import ConversionResult
from usfm_converter.flows import ConversionOrchestrator

__all__ = ["ConversionOrchestrator", "ConversionResult"]
