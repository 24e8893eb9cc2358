from __future__ import annotations

from typing import Awaitable, Callable, Mapping

from fastapi import Request, status
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response


class ApiError(Exception):
    """Error rendered as ``{"error": message}`` with a fixed status code."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ApiError):
    status_code = status.HTTP_400_BAD_REQUEST


class AuthError(ApiError):
    status_code = status.HTTP_401_UNAUTHORIZED


class UpstreamError(ApiError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


def body_error_handler(
    messages: Mapping[str, str],
) -> Callable[[Request, RequestValidationError], Awaitable[Response]]:
    """Render request-body validation failures on ``messages`` paths as 400 ``{"error": ...}``.

    Those paths never echo the rejected input back. Every other path keeps
    FastAPI's default 422 response.
    """

    async def handler(request: Request, exc: RequestValidationError) -> Response:
        message = messages.get(request.url.path)
        if message is None:
            return await request_validation_exception_handler(request, exc)
        return JSONResponse(status_code=ValidationError.status_code, content={"error": message})

    return handler
