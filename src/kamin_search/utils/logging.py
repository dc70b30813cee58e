"""Structured logging utilities leveraging loguru.

Every HTTP request carries a trace identifier and, once a view controller
has parsed the address, the active query and page number.  Routes and
controllers enrich that context through :func:`set_request_metadata` so the
``request.completed`` record emitted by the middleware tells operators which
search was being served.
"""

from __future__ import annotations

import sys
import time
import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Awaitable, Callable, Iterator, List

from fastapi import Request, Response
from loguru import logger

from kamin_search.config import get_settings


@dataclass
class RequestLogContext:
    """Search served by the current request and the stages it went through."""

    query: str | None = None
    page: int | None = None
    stages: List[str] = field(default_factory=list)


_TRACE_ID: ContextVar[str] = ContextVar("trace_id", default="unknown")
_REQUEST_CONTEXT: ContextVar[RequestLogContext | None] = ContextVar("request_context", default=None)


def configure_logging(level: str | None = None) -> None:
    """Configure loguru to output JSON logs at ``level`` (``LOG_LEVEL`` by default)."""
    level = level or get_settings().log_level
    logger.remove()
    logger.add(sys.stdout, level=level.upper(), serialize=True)


def get_trace_id() -> str:
    """Return the current request trace identifier."""
    return _TRACE_ID.get()


def get_request_context() -> RequestLogContext:
    context = _REQUEST_CONTEXT.get()
    if context is None:
        context = RequestLogContext()
        _REQUEST_CONTEXT.set(context)
    return context


def set_request_metadata(*, query: str | None = None, page: int | None = None) -> None:
    """Enrich the structured context with the served query and page."""
    context = get_request_context()
    if query is not None:
        context.query = query
    if page is not None:
        context.page = page


@contextmanager
def log_stage(stage: str) -> Iterator[None]:
    """Log completion or failure of ``stage`` with its latency."""
    context = get_request_context()
    context.stages.append(stage)
    started = time.perf_counter()
    try:
        yield
    except Exception:
        logger.bind(
            trace_id=get_trace_id(),
            stage=stage,
            latency_ms=(time.perf_counter() - started) * 1000,
            query=context.query,
        ).exception("stage.failed")
        raise
    logger.bind(
        trace_id=get_trace_id(),
        stage=stage,
        latency_ms=(time.perf_counter() - started) * 1000,
        query=context.query,
        page=context.page,
    ).info("stage.completed")


async def logging_middleware(
    request: Request, call_next: Callable[[Request], Awaitable[Response]]
) -> Response:
    """FastAPI middleware injecting a trace identifier into logging context."""
    trace_id = request.headers.get("x-trace-id", str(uuid.uuid4()))
    trace_token = _TRACE_ID.set(trace_id)
    context_token = _REQUEST_CONTEXT.set(RequestLogContext())
    start = time.perf_counter()
    response: Response | None = None
    try:
        response = await call_next(request)
    finally:
        duration_ms = (time.perf_counter() - start) * 1000
        status_code = response.status_code if response is not None else 500
        context = get_request_context()
        # Only method, path, status and timing are logged; the raw query string
        # stays out of the record and the parsed query is attached explicitly.
        logger.bind(
            path=request.url.path,
            method=request.method,
            status_code=status_code,
            duration_ms=duration_ms,
            trace_id=trace_id,
            stages=context.stages,
            query=context.query,
            page=context.page,
        ).info("request.completed")
        _TRACE_ID.reset(trace_token)
        _REQUEST_CONTEXT.reset(context_token)
    if response is None:
        raise RuntimeError("Downstream middleware returned no response object")
    response.headers["X-Trace-Id"] = trace_id
    return response


__all__ = [
    "RequestLogContext",
    "configure_logging",
    "get_request_context",
    "get_trace_id",
    "log_stage",
    "logging_middleware",
    "set_request_metadata",
]
