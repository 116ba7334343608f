"""Request ID Middleware.

Every request gets an ID that is:
- Taken from the incoming X-Request-ID header, or generated
- Stored on request.state.request_id
- Included in all log messages through RequestIdFilter
- Echoed in the X-Request-ID response header

Usage:
    from fastapi import FastAPI
    from middleware.correlation import RequestIdMiddleware

    app = FastAPI()
    app.add_middleware(RequestIdMiddleware)

    # Access the request ID in code:
    from middleware.correlation import get_request_id
    request_id = get_request_id()
"""

from __future__ import annotations

import logging
import uuid
from contextvars import ContextVar, Token
from typing import Any, Callable, Optional

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger(__name__)


# Context variable for the request ID (safe across async tasks and threadpool calls)
_request_id_ctx: ContextVar[Optional[str]] = ContextVar(
    "request_id",
    default=None,
)

REQUEST_ID_HEADER = "X-Request-ID"


def get_request_id() -> Optional[str]:
    """Get the request ID of the current context, or None."""
    return _request_id_ctx.get()


def set_request_id(request_id: str) -> Token[Optional[str]]:
    """Set the request ID for the current context.

    Returns:
        Token that can be used to reset the context.
    """
    return _request_id_ctx.set(request_id)


def reset_request_id(token: Token[Optional[str]]) -> None:
    _request_id_ctx.reset(token)


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Assigns a request ID to every request and echoes it on the response."""

    def __init__(
        self,
        app,
        header_name: str = REQUEST_ID_HEADER,
        generator: Optional[Callable[[], str]] = None,
    ):
        """Initialize middleware.

        Args:
            app: ASGI application.
            header_name: Header carrying the request ID.
            generator: Optional custom ID generator function.
        """
        super().__init__(app)
        self.header_name = header_name
        self.generator = generator or (lambda: str(uuid.uuid4()))

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Any],
    ) -> Response:
        request_id = request.headers.get(self.header_name)
        if not request_id:
            request_id = self.generator()

        token = set_request_id(request_id)

        try:
            request.state.request_id = request_id

            response = await call_next(request)

            response.headers[self.header_name] = request_id
            return response

        finally:
            reset_request_id(token)


class RequestIdFilter(logging.Filter):
    """Logging filter that adds request_id to log records.

    Usage:
        handler = logging.StreamHandler()
        handler.addFilter(RequestIdFilter())
        handler.setFormatter(logging.Formatter(
            '%(asctime)s [%(request_id)s] %(levelname)s %(message)s'
        ))
    """

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = get_request_id() or "-"
        return True
