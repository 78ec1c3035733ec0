"""Exception handlers mapping errors onto the response envelope."""

from __future__ import annotations

from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from app.exceptions import ConversationError
from app.infra.logging_config import get_logger
from app.schemas.envelope import ResponseEnvelope

logger = get_logger("errors")

_HTTP_STATUS_CODES = {
    400: "INVALID_ARGUMENT",
    404: "NOT_FOUND",
    405: "INVALID_ARGUMENT",
    409: "INVALID_STATE",
    422: "INVALID_ARGUMENT",
}


def _envelope(status_code: int, code: str, message: str, details: Any = None) -> JSONResponse:
    body = ResponseEnvelope.fail(code, message, details)
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(mode="json"),
    )


def _validation_details(exc: RequestValidationError) -> dict[str, str]:
    """Flatten pydantic errors to {"body.content": "String should have ..."}."""
    details: dict[str, str] = {}
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()))
        details[loc or "request"] = err.get("msg", "invalid")
    return details


def register_exception_handlers(app: FastAPI) -> None:
    """Register global exception handlers on the FastAPI app."""

    @app.exception_handler(ConversationError)
    async def conversation_error_handler(
        request: Request, exc: ConversationError
    ) -> JSONResponse:
        log = logger.warning if exc.status_code < 500 else logger.error
        log(
            "%s %s failed: %s (%s)",
            request.method,
            request.url.path,
            exc.message,
            exc.kind,
        )
        return _envelope(exc.status_code, exc.kind, exc.message, exc.details)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return _envelope(
            400,
            "INVALID_ARGUMENT",
            "Request validation failed",
            _validation_details(exc),
        )

    @app.exception_handler(HTTPException)
    async def http_error_handler(request: Request, exc: HTTPException) -> JSONResponse:
        code = _HTTP_STATUS_CODES.get(exc.status_code, "INTERNAL_ERROR")
        return _envelope(exc.status_code, code, str(exc.detail))

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(
        request: Request, exc: Exception
    ) -> JSONResponse:
        logger.exception(
            "Unhandled exception on %s %s", request.method, request.url.path
        )
        return _envelope(500, "INTERNAL_ERROR", "An unexpected error occurred")
