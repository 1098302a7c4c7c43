"""OpenRouter Provider 适配器。

本模块负责：

1. 接收 [system, user] 对话消息与 API 密钥。
2. 将其转换为 OpenRouter chat/completions 请求（Bearer 认证 + Referer/Title 头）。
3. 调用 HTTP 接口，按状态码与响应体把结果分类。
4. 对网络错误、429、5xx 做有上限的指数退避重试。
5. 在边界处把所有异常转换为 CompletionFailure，调用方只会拿到二选一的结果。

分类优先级：网络/解析失败 > 401 > 429 > 402 > 5xx > 其他非 2xx 或 error 信封
> 缺少 choices[0].message.content > 成功。401/429/402/5xx 只看状态码，不看响应体。
"""

from typing import Any, Dict, Optional, Sequence

import httpx
from tenacity import RetryCallState, Retrying, retry_if_exception_type, stop_after_attempt, wait_exponential

from usfm_converter.config.settings import settings
from usfm_converter.domain.exceptions import (
    RETRYABLE_ERRORS,
    ApiError,
    AuthenticationError,
    BusinessError,
    InsufficientBalanceError,
    MalformedResponseError,
    NetworkError,
    RateLimitError,
    UpstreamServiceError,
    ValidationError,
)
from usfm_converter.domain.models import ChatMessage, CompletionFailure, CompletionResult, CompletionSuccess
from usfm_converter.infrastructure.logging.logger import logger
from usfm_converter.providers.registry import OPENROUTER_CONFIG

UPSTREAM_STATUSES = frozenset({500, 502, 503, 504})


class OpenRouterClient:
    """OpenRouter 客户端实现。

    - name: Provider 名称（供日志使用）。
    - complete: 对外统一调用入口，返回 CompletionResult。
    - max_retries: 可重试错误的最大重试次数，0 表示只请求一次。
    """

    name = "openrouter"

    def __init__(self, cfg=settings, max_retries: Optional[int] = None):
        self._settings = cfg
        if max_retries is None:
            max_retries = getattr(cfg, "max_retries", 0)
        if max_retries < 0:
            raise ValueError("max_retries must be >= 0")
        self.max_retries = max_retries

    def complete(
        self,
        messages: Sequence[ChatMessage],
        api_key: Optional[str],
        model: Optional[str] = None,
    ) -> CompletionResult:
        """执行一次补全调用（含重试），绝不向外抛出异常。"""

        model_name = model or getattr(self._settings, "default_model", "usfm-convert")
        try:
            if not api_key or not api_key.strip():
                raise ValidationError(code="MISSING_API_KEY", message="OpenRouter API key not set")
            payload = self._build_payload(messages, model_name)
            content = self._send_with_retry(payload, api_key.strip())
        except BusinessError as e:
            logger.warning(
                "openrouter.failure",
                extra={"extra": {"code": e.code, "error": e.message, "http_status": e.http_status}},
            )
            status = e.http_status if isinstance(e, (ApiError, RateLimitError, MalformedResponseError)) else None
            return CompletionFailure(code=e.code, message=e.message, http_status=status)
        except Exception as exc:  # noqa: BLE001 - 边界处把任何异常转换为失败结果
            logger.exception("openrouter.unexpected_error")
            return CompletionFailure(code="UNKNOWN_ERROR", message=str(exc) or "An unknown error occurred")
        logger.info("openrouter.success", extra={"extra": {"model": payload["model"], "chars": len(content)}})
        return CompletionSuccess(usfm_text=content)

    # ---- 请求 ----

    def _send_with_retry(self, payload: Dict[str, Any], api_key: str) -> str:
        retrying = Retrying(
            retry=retry_if_exception_type(RETRYABLE_ERRORS),
            stop=stop_after_attempt(self.max_retries + 1),
            wait=wait_exponential(
                multiplier=getattr(self._settings, "retry_backoff", 1.0),
                max=getattr(self._settings, "retry_backoff_max", 10.0),
            ),
            before_sleep=self._log_retry,
            reraise=True,
        )
        return retrying(self._send_once, payload, api_key)

    def _send_once(self, payload: Dict[str, Any], api_key: str) -> str:
        base = getattr(self._settings, "openrouter_base_url", None) or OPENROUTER_CONFIG.base_url
        try:
            with httpx.Client(timeout=self._settings.http_timeout, trust_env=False) as client:
                resp = client.post(
                    f"{base}/chat/completions",
                    json=payload,
                    headers=self._build_headers(api_key),
                )
        except httpx.RequestError as e:
            # 网络错误：DNS 失败、连接超时等
            raise NetworkError(code="NETWORK_ERROR", message=str(e) or e.__class__.__name__)
        return self._parse_response(resp)

    def _build_headers(self, api_key: str) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
            "HTTP-Referer": getattr(self._settings, "http_referer", "http://localhost"),
            "X-Title": getattr(self._settings, "app_title", "USFM Converter"),
        }

    def _build_payload(self, messages: Sequence[ChatMessage], model_name: str) -> Dict[str, Any]:
        return {
            "model": OPENROUTER_CONFIG.resolve_model(model_name),
            "messages": [m.to_payload() for m in messages],
        }

    # ---- 响应分类 ----

    def _parse_response(self, resp: httpx.Response) -> str:
        status = resp.status_code
        if status == 401:
            raise AuthenticationError(
                code="INVALID_API_KEY",
                message="Invalid API key. Please check your OpenRouter API key.",
                http_status=status,
            )
        if status == 429:
            # 限流：由 _send_with_retry 退避后重试
            raise RateLimitError(
                code="RATE_LIMIT",
                message="Rate limit exceeded. Please try again later.",
                http_status=status,
            )
        if status == 402:
            raise InsufficientBalanceError(
                code="INSUFFICIENT_BALANCE",
                message="Insufficient credits. Please check your OpenRouter account.",
                http_status=status,
            )
        if status in UPSTREAM_STATUSES:
            raise UpstreamServiceError(
                code="UPSTREAM_ERROR",
                message="OpenRouter API service error. Please try again later.",
                http_status=status,
            )

        try:
            data = resp.json()
        except ValueError as e:
            raise ApiError(code="API_ERROR", message=f"Failed to parse response: {e}", http_status=status)

        if not 200 <= status < 300 or (isinstance(data, dict) and "error" in data):
            envelope = data.get("error") if isinstance(data, dict) else None
            raise ApiError(code="API_ERROR", message=self._error_message(envelope), http_status=status)

        content = self._extract_content(data)
        if not content:
            raise MalformedResponseError(
                code="MALFORMED_RESPONSE",
                message="Invalid API response format",
                http_status=status,
            )
        return content

    @staticmethod
    def _error_message(envelope: Any) -> str:
        """取 error.message，缺失时返回通用提示。"""

        if isinstance(envelope, dict) and envelope.get("message"):
            return str(envelope["message"])
        if isinstance(envelope, str) and envelope:
            return envelope
        return "Failed to convert text"

    @staticmethod
    def _extract_content(data: Any) -> Optional[str]:
        if not isinstance(data, dict):
            return None
        choices = data.get("choices")
        if not isinstance(choices, list) or not choices:
            return None
        first = choices[0]
        if not isinstance(first, dict):
            return None
        message = first.get("message")
        if not isinstance(message, dict):
            return None
        content = message.get("content")
        return content if isinstance(content, str) and content else None

    def _log_retry(self, state: RetryCallState) -> None:
        exc = state.outcome.exception() if state.outcome else None
        logger.warning(
            "openrouter.retry",
            extra={
                "extra": {
                    "attempt": state.attempt_number,
                    "max_retries": self.max_retries,
                    "code": getattr(exc, "code", None),
                    "error": str(exc),
                }
            },
        )
