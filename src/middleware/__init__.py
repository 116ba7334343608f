"""Middleware components for the resume submission service.

Provides:
- Request ID tracking
- Logging context enrichment
"""

from .correlation import (
    REQUEST_ID_HEADER,
    RequestIdFilter,
    RequestIdMiddleware,
    get_request_id,
    set_request_id,
)

__all__ = [
    "REQUEST_ID_HEADER",
    "RequestIdFilter",
    "RequestIdMiddleware",
    "get_request_id",
    "set_request_id",
]
