"""
Request Logging Middleware.

Logs one line per request with method, path, status and latency.
Health probes are logged at debug level to keep the log readable.
"""

import logging
import time
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Middleware that logs every request handled by the API."""

    QUIET_PATHS = frozenset([
        "/api/health",
        "/api/hello",
    ])

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Time the request and log the outcome."""
        path = request.url.path
        start_time = time.monotonic()

        try:
            response = await call_next(request)
        except Exception:
            latency_ms = int((time.monotonic() - start_time) * 1000)
            logger.exception(f"{request.method} {path} failed after {latency_ms}ms")
            raise

        latency_ms = int((time.monotonic() - start_time) * 1000)
        level = logging.DEBUG if path in self.QUIET_PATHS else logging.INFO
        logger.log(level, f"{request.method} {path} -> {response.status_code} ({latency_ms}ms)")

        return response
