"""
Correlation ID middleware
=========================
Every snapshot request gets an X-Correlation-ID (taken from the caller or
generated) that is exposed on ``request.state`` and echoed on the response.
X-Tab-ID is passed through when the front end sends one.

One log line per request, written after the response, carrying both ids.
"""
from __future__ import annotations

import logging
import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"
TAB_HEADER = "X-Tab-ID"


class CorrelationMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next) -> Response:
        correlation_id = request.headers.get(CORRELATION_HEADER) or uuid.uuid4().hex
        tab_id = request.headers.get(TAB_HEADER, "")

        request.state.correlation_id = correlation_id
        request.state.tab_id = tab_id

        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000

        logger.info(
            "%s %s -> %d (%.1f ms)",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
            extra={"correlation_id": correlation_id, "tab_id": tab_id or None},
        )

        response.headers[CORRELATION_HEADER] = correlation_id
        if tab_id:
            response.headers[TAB_HEADER] = tab_id
        return response
