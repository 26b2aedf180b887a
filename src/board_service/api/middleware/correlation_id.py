"""Request ids for log lines: taken from the caller's header or generated."""
from __future__ import annotations

import logging
import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

correlation_id_ctx: ContextVar[str] = ContextVar("correlation_id", default="")

HEADER = "X-Request-ID"


@contextmanager
def bound_correlation_id(value: str | None = None) -> Iterator[str]:
    """Tag every log record emitted inside the block with *value*."""
    cid = value or uuid.uuid4().hex
    token = correlation_id_ctx.set(cid)
    try:
        yield cid
    finally:
        correlation_id_ctx.reset(token)


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        with bound_correlation_id(request.headers.get(HEADER)) as cid:
            response = await call_next(request)
            response.headers[HEADER] = cid
            return response


class CorrelationIdFilter(logging.Filter):
    """Stamp log records with the current request id (``-`` outside requests)."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = correlation_id_ctx.get() or "-"
        return True
