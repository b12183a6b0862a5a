"""Global exception handlers — translate domain errors to HTTP responses.

Each domain exception maps to a specific HTTP status code and the
standard ``{"status": "error", "message": "..."}`` envelope.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from code_summarizer.domain.exceptions import (
    CodeSummarizerError,
    EmptyContentError,
    InvalidArgumentError,
    LlmError,
    NoMatchingFilesError,
    RemoteProtocolError,
    RemoteUnavailableError,
)
from code_summarizer.interface.schemas import ErrorResponse

logger = logging.getLogger(__name__)

# Subclasses must come before their base classes.
_EXCEPTION_STATUS: list[tuple[type[CodeSummarizerError], int]] = [
    (InvalidArgumentError, 400),
    (NoMatchingFilesError, 404),
    (EmptyContentError, 422),
    (LlmError, 502),
    (RemoteUnavailableError, 502),
    (RemoteProtocolError, 502),
]


def _error_json(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(message=message).model_dump(),
    )


def status_for(exc: CodeSummarizerError) -> int:
    """Return the HTTP status code for a domain exception."""
    for exc_type, code in _EXCEPTION_STATUS:
        if isinstance(exc, exc_type):
            return code
    return 500


def register_error_handlers(app: FastAPI) -> None:
    """Attach exception handlers to the FastAPI application."""

    # ── Domain exceptions ───────────────────────────────────────────────

    @app.exception_handler(CodeSummarizerError)
    async def domain_handler(request: Request, exc: CodeSummarizerError) -> JSONResponse:
        status_code = status_for(exc)
        logger.warning("%s on %s: %s", type(exc).__name__, request.url.path, exc)
        return _error_json(status_code, str(exc))

    # ── Pydantic / FastAPI validation errors ────────────────────────────

    @app.exception_handler(RequestValidationError)
    async def validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        messages = []
        for err in exc.errors():
            loc = " → ".join(str(p) for p in err.get("loc", []))
            messages.append(f"{loc}: {err.get('msg', 'validation error')}")
        return _error_json(422, "; ".join(messages))

    # ── Catch-all for unexpected errors ─────────────────────────────────

    @app.exception_handler(Exception)
    async def generic_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled exception")
        return _error_json(500, "An unexpected error occurred. Please try again later.")
