"""
Renders every failure as a transport envelope with the matching status code.
"""
import logging
from typing import Any, Iterable, List

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import JSONResponse

from circles.utils.errors import GENERIC_ERROR_MESSAGE, CirclesError, Unauthorized
from circles.utils.transport import Transport

logger = logging.getLogger(__name__)


def _unique(messages: Iterable[Any]) -> List[str]:
    seen: List[str] = []
    for message in messages:
        text = str(message)
        if text and text not in seen:
            seen.append(text)
    return seen


def validation_messages(exc: RequestValidationError) -> List[str]:
    """Human-readable messages raised by schema validators, falling back to pydantic's text."""
    messages = []
    for error in exc.errors():
        ctx = error.get("ctx") or {}
        cause = ctx.get("error")
        messages.append(str(cause) if cause else error.get("msg", ""))
    return _unique(messages) or ["Invalid request."]


def format_error(exc: Exception) -> JSONResponse:
    """Single mapping from an exception to the envelope response."""
    if isinstance(exc, CirclesError):
        status_code, messages = exc.status_code, _unique(exc.messages)
    elif isinstance(exc, RequestValidationError):
        messages = validation_messages(exc)
        status_code = 401 if Unauthorized.default_message in messages else 422
    elif isinstance(exc, StarletteHTTPException):
        status_code, messages = exc.status_code, _unique([exc.detail]) or [GENERIC_ERROR_MESSAGE]
    else:
        status_code, messages = 500, [GENERIC_ERROR_MESSAGE]

    return JSONResponse(Transport(status_code, messages or [GENERIC_ERROR_MESSAGE]).to_dict(),
                        status_code=status_code)


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(CirclesError)
    async def _circles_error(request: Request, exc: CirclesError):
        if exc.status_code >= 500:
            logger.error("request_failed: path=%s cause=%r", request.url.path, exc.__cause__)
        return format_error(exc)

    @app.exception_handler(RequestValidationError)
    async def _validation_error(request: Request, exc: RequestValidationError):
        return format_error(exc)

    @app.exception_handler(StarletteHTTPException)
    async def _http_error(request: Request, exc: StarletteHTTPException):
        return format_error(exc)

    @app.exception_handler(Exception)
    async def _unexpected_error(request: Request, exc: Exception):
        logger.exception("unhandled_error: path=%s", request.url.path)
        return format_error(exc)
