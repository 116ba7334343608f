"""
FastAPI Authentication Dependencies

Usage:
    @router.get("/submission")
    def list_submissions(user: Optional[User] = Depends(get_user)):
        if user is None:
            ...

    @router.post("/email/test")
    def send_test(user: Optional[User] = Depends(get_user)):
        if not is_admin(user):
            ...

Routes decide how to answer an anonymous caller, so these dependencies
never raise.
"""

import logging
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import ValidationError

from core.models.user import MembershipLevel, User

from .jwt import decode_token_safe

logger = logging.getLogger(__name__)


# =============================================================================
# HTTP BEARER SECURITY
# =============================================================================

security = HTTPBearer(auto_error=False)


# =============================================================================
# CORE DEPENDENCIES
# =============================================================================

def get_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Optional[User]:
    """
    Resolve the caller from the bearer token.

    Returns:
        User, or None for a missing, invalid or expired token.
    """
    # Check if user is already in request state (from middleware)
    cached = getattr(request.state, "user", None)
    if cached is not None:
        return cached

    if credentials is None:
        return None

    payload = decode_token_safe(credentials.credentials)
    if payload is None:
        return None

    try:
        user = User(
            id=payload["sub"],
            email=payload["email"],
            level=payload.get("level", MembershipLevel.BASIC.value),
        )
    except (KeyError, ValidationError) as e:
        logger.debug(f"Malformed token payload: {e}")
        return None

    request.state.user = user
    return user


def is_admin(user: Optional[User]) -> bool:
    """True when the caller is an authenticated admin."""
    return user is not None and user.level == MembershipLevel.ADMIN
