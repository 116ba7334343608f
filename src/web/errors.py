"""
API Error Responses

Every error leaves the API in the same envelope:

    {"success": false, "error": "<message>", ...extra}

Usage:
    from web.errors import APIError

    raise APIError(400, "Missing required fields: pilotName, pilotEmail, airline")

    # in app setup
    register_exception_handlers(app)
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

USER_NOT_FOUND = "User not found"
UNAUTHORIZED = "Unauthorized"
ADMIN_REQUIRED = "Unauthorized - Admin access required"


# =============================================================================
# API ERROR EXCEPTION
# =============================================================================


class APIError(Exception):
    """
    Raise anywhere in a route to return an error envelope.

    Args:
        status_code: HTTP status
        message: Value of the "error" key
        extra: Additional top-level keys merged into the body
    """

    def __init__(self, status_code: int, message: str, extra: Optional[Dict[str, Any]] = None):
        self.status_code = status_code
        self.message = message
        self.extra = extra or {}
        super().__init__(message)

    def to_body(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"success": False, "error": self.message}
        body.update(self.extra)
        return body


def error_response(status_code: int, message: str, **extra: Any) -> JSONResponse:
    """Build an error envelope response directly."""
    return JSONResponse(status_code=status_code, content=APIError(status_code, message, extra).to_body())


def get_request_id(request: Request) -> Optional[str]:
    return getattr(request.state, "request_id", None) or request.headers.get("X-Request-ID")


# =============================================================================
# GLOBAL EXCEPTION HANDLERS
# =============================================================================


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register all exception handlers with the FastAPI app.

    Call this in your app initialization:
        from web.errors import register_exception_handlers
        register_exception_handlers(app)
    """

    @app.exception_handler(APIError)
    async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
        """Handle APIError exceptions raised by routes."""
        log_level = logging.WARNING if exc.status_code < 500 else logging.ERROR
        logger.log(
            log_level,
            f"[{get_request_id(request)}] {request.method} {request.url.path} -> {exc.status_code}: {exc.message}",
        )
        return JSONResponse(status_code=exc.status_code, content=exc.to_body())

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        """Malformed request bodies are client errors (400)."""
        messages = []
        for error in exc.errors():
            field_path = ".".join(str(loc) for loc in error["loc"] if loc != "body")
            messages.append(f"{field_path or 'body'}: {error['msg']}")

        logger.warning(f"[{get_request_id(request)}] Validation error on {request.url.path}: {messages}")

        return error_response(
            status.HTTP_400_BAD_REQUEST,
            "Invalid request body" + (f" ({'; '.join(messages)})" if messages else ""),
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        """Handle standard HTTP exceptions (404, 405, ...)."""
        logger.warning(f"[{get_request_id(request)}] HTTP {exc.status_code}: {exc.detail}")
        return error_response(exc.status_code, str(exc.detail) if exc.detail else "An error occurred")

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Catch-all for exceptions that escaped a route."""
        logger.error(
            f"[{get_request_id(request)}] Unhandled exception on {request.method} {request.url.path}: {exc}",
            exc_info=exc,
        )
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc) or "Internal server error")
