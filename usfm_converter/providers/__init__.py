"""LLM Provider 集成层。

该包下的模块负责：
- 定义补全客户端抽象接口 (base)。
- 维护 Provider 与模型配置 (registry)。
- 提供具体实现 (openrouter_client)。
"""

from typing import Optional

from usfm_converter.config.settings import settings
from usfm_converter.providers.base import CompletionClient
from usfm_converter.providers.openrouter_client import OpenRouterClient
from usfm_converter.providers.registry import get_provider_config


def create_provider(name: Optional[str] = None, max_retries: Optional[int] = None) -> CompletionClient:
    """根据名称创建 Provider 实例，默认取配置中的 provider；未知名称抛出 KeyError。"""

    provider_name = name or getattr(settings, "default_provider", "openrouter")
    cfg = get_provider_config(provider_name)
    if cfg.name == "openrouter":
        return OpenRouterClient(settings, max_retries=max_retries)
    raise KeyError(f"Provider {cfg.name!r} has no client implementation")


__all__ = ["CompletionClient", "OpenRouterClient", "create_provider"]
