"""High-level entry point for the conversion graph."""

from __future__ import annotations

from typing import Optional

from usfm_converter.domain.models import ConversionResult
from usfm_converter.flows.graph import build_graph
from usfm_converter.flows.state import ConversionState
from usfm_converter.infrastructure.logging.logger import logger
from usfm_converter.providers.base import CompletionClient


class ConversionOrchestrator:
    """把 Prompt 构造、补全调用与结构校验串成一次 convert()。

    编译后的图与 client 都不保存单次调用的数据，
    因此同一个实例可以被并发调用，各次调用互不影响（但也不做去重）。
    """

    def __init__(self, client: CompletionClient, api_key: Optional[str], model: Optional[str] = None):
        self._client = client
        self._api_key = api_key
        self._model = model
        self._graph = build_graph(client)

    def convert(self, text: str) -> ConversionResult:
        """执行一次转换，返回成功或失败结果，不抛出异常。

        Args:
            text: 用户粘贴或上传后提取出的原始笔记文本，原样发送给模型。
        """

        state: ConversionState = {
            "text": text,
            "api_key": self._api_key,
            "model": self._model,
            "messages": [],
            "usfm": None,
            "stage": "idle",
            "result": None,
        }
        try:
            final = self._graph.invoke(state)
        except Exception as exc:  # noqa: BLE001 - convert() 对调用方承诺不抛异常
            logger.exception("convert.unexpected_error")
            return ConversionResult.fail("UNKNOWN_ERROR", str(exc) or "An unknown error occurred")

        result = final.get("result")
        if result is None:
            logger.error("convert.no_result", extra={"extra": {"stage": final.get("stage")}})
            return ConversionResult.fail("UNKNOWN_ERROR", "An unknown error occurred")
        logger.info(
            "convert.done",
            extra={"extra": {"success": result.success, "code": result.code}},
        )
        return result
