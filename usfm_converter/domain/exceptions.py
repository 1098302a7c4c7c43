"""统一业务异常模型。

所有跨模块抛出的业务级错误都继承自 BusinessError。
Provider 客户端在内部用这些异常区分失败类型，
并在客户端边界统一转换为 CompletionFailure，不会继续向上抛出。
"""


class BusinessError(Exception):
    """业务异常基类。

    Attributes:
        code: 机器可读错误码（如 "RATE_LIMIT"）。
        message: 用户可读错误信息。
        http_status: 映射到 HTTP 时可用的状态码，默认 400。
        extra: 其他补充字段（例如 provider、attempt 等）。
    """

    def __init__(self, code: str, message: str, http_status: int = 400, **extra):
        self.code = code
        self.message = message
        self.http_status = http_status
        self.extra = extra
        super().__init__(message)


class NetworkError(BusinessError):
    """网络层错误，例如连接失败、超时、响应体无法解析等。"""


class ApiError(BusinessError):
    """第三方 API 返回非 2xx 或携带 error 信封时抛出。"""


class AuthenticationError(ApiError):
    """API 密钥无效（HTTP 401）。"""


class InsufficientBalanceError(ApiError):
    """账户余额不足（HTTP 402）。"""


class UpstreamServiceError(ApiError):
    """上游服务 5xx 错误，可重试。"""


class RateLimitError(BusinessError):
    """Provider 限流错误，可重试。"""


class MalformedResponseError(BusinessError):
    """2xx 响应但缺少 choices[0].message.content。"""


class ValidationError(BusinessError):
    """参数或配置校验失败（如缺少 API 密钥）。"""


# 可以通过退避重试恢复的错误类型
RETRYABLE_ERRORS = (NetworkError, RateLimitError, UpstreamServiceError)
