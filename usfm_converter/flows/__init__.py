"""Conversion flow built on LangGraph."""

from usfm_converter.flows.runner import ConversionOrchestrator

__all__ = ["ConversionOrchestrator"]
