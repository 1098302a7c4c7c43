"""Provider 抽象接口。

转换流程不直接依赖具体厂商的 HTTP 细节，而是依赖此协议：

- 每个厂商实现一个 CompletionClient（如 OpenRouterClient）。
- 负责：把对话消息转成具体 API 请求，并把响应分类为
  CompletionSuccess / CompletionFailure。
"""

from typing import Optional, Protocol, Sequence

from usfm_converter.domain.models import ChatMessage, CompletionResult


class CompletionClient(Protocol):
    """补全服务客户端协议。

    实现者需要提供：
    - name: Provider 名称，用于日志。
    - complete(...): 执行一次调用，返回二选一的 CompletionResult，绝不抛出异常。
    """

    name: str

    def complete(
        self,
        messages: Sequence[ChatMessage],
        api_key: Optional[str],
        model: Optional[str] = None,
    ) -> CompletionResult:
        ...
