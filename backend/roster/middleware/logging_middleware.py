"""
FastAPI middleware for logging API requests.

Pure ASGI middleware (not BaseHTTPMiddleware) so the import endpoint can
read its raw body downstream. Logs method, path, status code and
processing time for every request; request bodies only at DEBUG.
"""

import logging
import time
from typing import Optional
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from ..core.logging_config import truncate_large_data

logger = logging.getLogger(__name__)


class RequestLoggingMiddleware:
    """Pure ASGI middleware to log API requests and their outcome."""

    def __init__(self, app: ASGIApp, exclude_paths: Optional[list] = None):
        """
        Initialize the logging middleware.

        Args:
            app: The ASGI application
            exclude_paths: Paths that are passed through without logging
        """
        self.app = app
        self.exclude_paths = exclude_paths or ["/health", "/"]

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http" or scope.get("path", "") in self.exclude_paths:
            await self.app(scope, receive, send)
            return

        start_time = time.perf_counter()
        method = scope.get("method", "UNKNOWN")
        path = scope.get("path", "")
        query_string = scope.get("query_string", b"").decode("utf-8", errors="ignore")
        status_code = 0
        body_chunks = []

        async def logging_receive() -> Message:
            message = await receive()
            if message["type"] == "http.request":
                body_chunks.append(message.get("body", b""))
            return message

        async def logging_send(message: Message) -> None:
            nonlocal status_code
            if message["type"] == "http.response.start":
                status_code = message.get("status", 0)
            await send(message)

        try:
            await self.app(scope, logging_receive, logging_send)
        except Exception as e:
            duration_ms = (time.perf_counter() - start_time) * 1000
            logger.error(
                f"Request failed: {method} {path} - {e}",
                exc_info=True,
                extra={"extra_fields": {"method": method, "path": path, "duration_ms": duration_ms}}
            )
            raise

        duration_ms = (time.perf_counter() - start_time) * 1000

        if body_chunks and logger.isEnabledFor(logging.DEBUG):
            body = b"".join(body_chunks).decode("utf-8", errors="ignore")
            if body:
                logger.debug(f"Request body: {truncate_large_data(body, max_length=2000)}")

        if status_code < 400:
            log_level = logging.INFO
        elif status_code < 500:
            log_level = logging.WARNING
        else:
            log_level = logging.ERROR

        target = f"{path}?{query_string}" if query_string else path
        logger.log(
            log_level,
            f"{method} {target} - {status_code} ({duration_ms:.2f}ms)",
            extra={"extra_fields": {
                "method": method,
                "path": path,
                "query": query_string or None,
                "status_code": status_code,
                "duration_ms": duration_ms,
            }}
        )
