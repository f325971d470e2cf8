"""ASGI middleware for access logging and crash recovery."""

import logging
import time

from starlette.responses import JSONResponse
from starlette.types import ASGIApp, Message, Receive, Scope, Send

access_logger = logging.getLogger("timeful.access")
logger = logging.getLogger(__name__)


def _format_latency(seconds: float) -> str:
    if seconds > 60:
        return f"{int(seconds)}s"
    if seconds >= 1:
        return f"{seconds:.3f}s"
    return f"{seconds * 1000:.3f}ms"


class RequestLoggingMiddleware:
    """Write one access-log line per HTTP request."""

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope.get("type") != "http":
            await self.app(scope, receive, send)
            return

        start = time.perf_counter()
        status_code = 500
        error = ""

        async def send_wrapper(message: Message) -> None:
            nonlocal status_code
            if message["type"] == "http.response.start":
                status_code = message["status"]
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        except Exception as e:
            error = repr(e)
            raise
        finally:
            client = scope.get("client")
            access_logger.info(
                '| %3d | %13s | %15s | %-7s "%s" %s',
                status_code,
                _format_latency(time.perf_counter() - start),
                client[0] if client else "-",
                scope.get("method", ""),
                scope.get("path", ""),
                error,
            )


class RecoveryMiddleware:
    """Turn any exception raised by inner layers into a 500 response.

    The exception is logged with its traceback and not re-raised, so a
    failing handler never takes the server down.
    """

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope.get("type") != "http":
            await self.app(scope, receive, send)
            return

        response_started = False

        async def send_wrapper(message: Message) -> None:
            nonlocal response_started
            if message["type"] == "http.response.start":
                response_started = True
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        except Exception:
            logger.exception(
                f"Recovered from unhandled error in {scope.get('method')} {scope.get('path')}"
            )
            if response_started:
                # Headers are already out; nothing sensible left to send
                return
            response = JSONResponse({"error": "Internal Server Error"}, status_code=500)
            await response(scope, receive, send)
