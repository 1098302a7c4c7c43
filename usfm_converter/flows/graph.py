"""LangGraph construction and node implementations for the conversion pipeline.

receive_input -> validate_input -> request_completion -> validate_output -> END
Any node that sets ``result`` ends the run early.
"""

from __future__ import annotations

from langgraph.graph import END, StateGraph
from langgraph.graph.state import CompiledStateGraph

from usfm_converter.domain.models import CompletionFailure, ConversionRequest, ConversionResult
from usfm_converter.flows.state import ConversionState
from usfm_converter.infrastructure.logging.logger import logger
from usfm_converter.prompts import PROMPT_VERSION, build_messages
from usfm_converter.providers.base import CompletionClient
from usfm_converter.validation import validate_usfm


def receive_input_node(state: ConversionState) -> ConversionState:
    return {"stage": "validating_input"}


def validate_input_node(state: ConversionState) -> ConversionState:
    request = ConversionRequest(text=state.get("text") or "")
    if request.is_empty:
        logger.info("validate_input.empty")
        return {
            "stage": "done",
            "result": ConversionResult.fail("EMPTY_INPUT", "Input text cannot be empty"),
        }
    logger.info(
        "validate_input.ok",
        extra={"extra": {"chars": len(request.text), "prompt_version": PROMPT_VERSION}},
    )
    return {"stage": "awaiting_completion", "messages": build_messages(request.text)}


def request_completion_node(state: ConversionState, client: CompletionClient) -> ConversionState:
    logger.info("request_completion.start", extra={"extra": {"provider": getattr(client, "name", "")}})
    completion = client.complete(state["messages"], state.get("api_key"), state.get("model"))
    if isinstance(completion, CompletionFailure):
        logger.info("request_completion.failed", extra={"extra": {"code": completion.code}})
        return {"stage": "done", "result": ConversionResult.fail(completion.code, completion.message)}
    return {"stage": "validating_output", "usfm": completion.usfm_text}


def validate_output_node(state: ConversionState) -> ConversionState:
    usfm = state.get("usfm") or ""
    outcome = validate_usfm(usfm)
    if not outcome.valid:
        logger.warning(
            "validate_output.invalid",
            extra={
                "extra": {
                    "missing_markers": list(outcome.missing_markers),
                    "mismatched_pairs": list(outcome.mismatched_pairs),
                }
            },
        )
        return {"stage": "done", "result": ConversionResult.fail(outcome.code, outcome.message)}
    logger.info("validate_output.ok")
    return {"stage": "done", "result": ConversionResult.ok(usfm)}


def stage_router(state: ConversionState) -> str:
    if state.get("result") is not None:
        return "done"
    return "continue"


def build_graph(client: CompletionClient) -> CompiledStateGraph:
    graph = StateGraph(ConversionState)
    graph.add_node("receive_input", receive_input_node)
    graph.add_node("validate_input", validate_input_node)
    graph.add_node("request_completion", lambda s: request_completion_node(s, client))
    graph.add_node("validate_output", validate_output_node)
    graph.set_entry_point("receive_input")
    graph.add_edge("receive_input", "validate_input")
    graph.add_conditional_edges("validate_input", stage_router, {"continue": "request_completion", "done": END})
    graph.add_conditional_edges("request_completion", stage_router, {"continue": "validate_output", "done": END})
    graph.add_edge("validate_output", END)
    return graph.compile()
