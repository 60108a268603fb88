"""统一业务异常模型。

所有跨模块抛出的业务级错误都继承自 BusinessError，
编排层统一捕获后转换成可展示的错误文本。
"""


class BusinessError(Exception):
    """业务异常基类。

    Attributes:
        code: 机器可读错误码（如 "MISSING_API_KEY"）。
        message: 用户可读错误信息。
        http_status: 映射到 HTTP 时可用的状态码，默认 400。
        extra: 其他补充字段。
    """

    def __init__(self, code: str, message: str, http_status: int = 400, **extra):
        self.code = code
        self.message = message
        self.http_status = http_status
        self.extra = extra
        super().__init__(message)


class ConfigurationError(BusinessError):
    """凭据缺失或格式不正确，在发起任何网络请求前抛出。"""


class NetworkError(BusinessError):
    """网络层错误，例如连接失败、超时等。"""


class ApiError(BusinessError):
    """端点返回非 2xx 状态码时抛出，message 尽量取自响应体。"""


class RateLimitError(ApiError):
    """429 限流。本项目不做自动重试，由用户手动重发。"""


class EmptyResponseError(BusinessError):
    """状态码成功但响应体缺少 choices 等必要字段。"""
