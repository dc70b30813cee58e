"""Error handling utilities providing uniform JSON responses."""

from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from kamin_search.utils.logging import get_trace_id


class ApiError(Exception):
    """Base application exception carrying a machine-friendly code."""

    status_code = 500
    code = "internal_error"

    def __init__(
        self,
        message: str,
        *,
        details: Optional[Dict[str, Any]] = None,
        code: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.details: Dict[str, Any] = details if details is not None else {}
        self.code = code or self.__class__.code

    def to_payload(self) -> Dict[str, Any]:
        """Return the standard error document used across HTTP handlers."""
        return {
            "error": {"code": self.code, "message": self.message},
            "details": self.details,
            "trace_id": get_trace_id(),
        }


class BadRequest(ApiError):
    """Exception raised when user input is invalid."""

    status_code = 400
    code = "bad_request"


class UpstreamError(ApiError):
    """Exception raised when the remote search service fails."""

    status_code = 502
    code = "upstream_error"


def _error_document(code: str, message: object, details: object) -> Dict[str, Any]:
    return {
        "error": {"code": code, "message": message},
        "details": details,
        "trace_id": get_trace_id(),
    }


def api_error_handler(_: Request, exc: Exception) -> JSONResponse:
    """Return a standardized JSON response for custom exceptions."""
    assert isinstance(exc, ApiError)
    return JSONResponse(status_code=exc.status_code, content=exc.to_payload())


def http_exception_handler(_: Request, exc: Exception) -> JSONResponse:
    """Translate FastAPI HTTPException into project JSON schema."""
    assert isinstance(exc, HTTPException)
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_document("http_error", exc.detail, {}),
    )


def unexpected_exception_handler(_: Request, exc: Exception) -> JSONResponse:
    """Catch-all handler for unexpected exceptions."""
    return JSONResponse(status_code=500, content=_error_document("internal_error", str(exc), {}))


def request_validation_exception_handler(_: Request, exc: Exception) -> JSONResponse:
    """Return a consistent payload for FastAPI validation errors."""
    assert isinstance(exc, RequestValidationError)

    def _serialize(value: object) -> object:
        if isinstance(value, Exception):
            return str(value)
        if isinstance(value, dict):
            return {str(k): _serialize(v) for k, v in value.items()}
        if isinstance(value, (list, tuple)):
            return [_serialize(item) for item in value]
        return value

    details = [
        {str(key): _serialize(value) for key, value in error.items()} for error in exc.errors()
    ]
    return JSONResponse(
        status_code=422,
        content=_error_document("validation_error", "Request validation failed", details),
    )


__all__ = [
    "ApiError",
    "BadRequest",
    "UpstreamError",
    "api_error_handler",
    "http_exception_handler",
    "unexpected_exception_handler",
    "request_validation_exception_handler",
]
