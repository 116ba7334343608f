"""
JWT Token Handling

Simple HS256 encoding/decoding of the dashboard's bearer tokens.

Payload:
    sub   - user id
    email - user email
    level - membership level (basic, premium, admin)
"""

import logging
import secrets
import warnings
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional, Union

import jwt

from config.settings import get_settings
from core.models.user import MembershipLevel

logger = logging.getLogger(__name__)


# =============================================================================
# CONFIGURATION
# =============================================================================

JWT_ACCESS_TOKEN_EXPIRE_HOURS = 8

_dev_secret: Optional[str] = None


def get_jwt_secret() -> str:
    """
    Get the JWT secret from settings.

    Production requires JWT_SECRET. Elsewhere a per-process secret is
    generated when it is missing.
    """
    global _dev_secret

    settings = get_settings()
    if settings.jwt_secret:
        return settings.jwt_secret

    if settings.is_production:
        raise RuntimeError("JWT_SECRET environment variable is required in production")

    if _dev_secret is None:
        warnings.warn(
            "JWT_SECRET not set - using generated development secret. "
            "Set JWT_SECRET environment variable for production.",
            UserWarning,
        )
        _dev_secret = f"DEV-ONLY-{secrets.token_hex(32)}"
    return _dev_secret


# =============================================================================
# TOKEN CREATION
# =============================================================================

def create_access_token(
    user_id: str,
    email: str,
    level: Union[MembershipLevel, str] = MembershipLevel.BASIC,
    expires_delta: Optional[timedelta] = None,
    secret: Optional[str] = None,
) -> str:
    """
    Create a JWT access token.

    Args:
        user_id: User's unique identifier
        email: User's email
        level: Membership level
        expires_delta: Custom expiration time
        secret: Signing key (defaults to the configured secret)

    Returns:
        JWT token string
    """
    if expires_delta is None:
        expires_delta = timedelta(hours=JWT_ACCESS_TOKEN_EXPIRE_HOURS)

    issued_at = datetime.now(timezone.utc)
    payload = {
        "sub": str(user_id),
        "email": email,
        "level": MembershipLevel(level).value,
        "iat": issued_at,
        "exp": issued_at + expires_delta,
    }

    return jwt.encode(payload, secret or get_jwt_secret(), algorithm=get_settings().jwt_algorithm)


# =============================================================================
# TOKEN DECODING
# =============================================================================

def decode_token(token: str, secret: Optional[str] = None) -> Dict[str, Any]:
    """
    Decode and validate a JWT token.

    Raises:
        jwt.InvalidTokenError: If token is invalid or expired
    """
    return jwt.decode(token, secret or get_jwt_secret(), algorithms=[get_settings().jwt_algorithm])


def decode_token_safe(token: str) -> Optional[Dict[str, Any]]:
    """
    Decode a JWT token without raising exceptions.

    Returns None if token is invalid.
    """
    try:
        return decode_token(token)
    except jwt.InvalidTokenError as e:
        logger.debug(f"Invalid JWT token: {e}")
        return None
