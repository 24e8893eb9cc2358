from __future__ import annotations

from enum import Enum
from typing import Optional


class GeminiErrorType(str, Enum):
    API_KEY_INVALID = "api_key_invalid"
    QUOTA_EXCEEDED = "quota_exceeded"
    TIMEOUT = "timeout"
    CONTENT_FILTERED = "content_filtered"
    NETWORK_ERROR = "network_error"
    RATE_LIMIT_EXCEEDED = "rate_limit_exceeded"
    UNKNOWN = "unknown"


ERROR_MESSAGES: dict[GeminiErrorType, str] = {
    GeminiErrorType.API_KEY_INVALID: "API 키가 유효하지 않습니다. 환경변수를 확인해주세요.",
    GeminiErrorType.QUOTA_EXCEEDED: "API 사용량 한도를 초과했습니다. 잠시 후 다시 시도해주세요.",
    GeminiErrorType.TIMEOUT: "API 요청 시간이 초과되었습니다. 네트워크 상태를 확인해주세요.",
    GeminiErrorType.CONTENT_FILTERED: "요청한 내용이 정책에 의해 차단되었습니다.",
    GeminiErrorType.NETWORK_ERROR: "네트워크 오류가 발생했습니다. 연결 상태를 확인해주세요.",
    GeminiErrorType.RATE_LIMIT_EXCEEDED: "요청 빈도가 너무 높습니다. 잠시 후 다시 시도해주세요.",
    GeminiErrorType.UNKNOWN: "알 수 없는 오류가 발생했습니다.",
}

RETRYABLE = frozenset({
    GeminiErrorType.TIMEOUT,
    GeminiErrorType.NETWORK_ERROR,
    GeminiErrorType.RATE_LIMIT_EXCEEDED,
})


class GeminiError(Exception):
    def __init__(self, error_type: GeminiErrorType, message: Optional[str] = None, original: Optional[BaseException] = None):
        self.type = error_type
        self.message = message or ERROR_MESSAGES[error_type]
        self.original = original
        super().__init__(self.message)

    @property
    def retryable(self) -> bool:
        return self.type in RETRYABLE

    @property
    def safe_message(self) -> str:
        # key problems are an operator issue; do not echo them to end users
        if self.type is GeminiErrorType.API_KEY_INVALID:
            return "AI 서비스 설정에 문제가 있습니다. 관리자에게 문의해주세요."
        return self.message


def _status_code(exc: BaseException) -> int:
    for attr in ("code", "status_code", "status"):
        value = getattr(exc, attr, None)
        # only plain int HTTP codes
        if isinstance(value, int):
            return value
    return 0


def classify_error(exc: Optional[BaseException]) -> GeminiErrorType:
    if exc is None:
        return GeminiErrorType.UNKNOWN

    message = str(exc).lower()
    code = _status_code(exc)

    if isinstance(exc, TimeoutError):
        return GeminiErrorType.TIMEOUT
    if code == 401 or "api key" in message or "unauthorized" in message:
        return GeminiErrorType.API_KEY_INVALID
    if "rate limit" in message:
        return GeminiErrorType.RATE_LIMIT_EXCEEDED
    if code == 429 or "quota" in message or "limit exceeded" in message:
        return GeminiErrorType.QUOTA_EXCEEDED
    if code == 408 or "timeout" in message or "timed out" in message:
        return GeminiErrorType.TIMEOUT
    if code == 400 and ("safety" in message or "filtered" in message):
        return GeminiErrorType.CONTENT_FILTERED
    if isinstance(exc, ConnectionError) or code >= 500 or "network" in message or "connection" in message:
        return GeminiErrorType.NETWORK_ERROR
    return GeminiErrorType.UNKNOWN


def to_gemini_error(exc: BaseException) -> GeminiError:
    if isinstance(exc, GeminiError):
        return exc
    return GeminiError(classify_error(exc), original=exc)
