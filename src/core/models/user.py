"""
User Model

The authenticated caller as seen by the API routes. Identity comes from the
bearer token; there is no user table in this service.
"""

from enum import Enum

from pydantic import BaseModel


class MembershipLevel(str, Enum):
    """Membership tier carried in the access token."""
    BASIC = "basic"
    PREMIUM = "premium"
    ADMIN = "admin"


class User(BaseModel):
    """Authenticated user."""
    id: str
    email: str
    level: MembershipLevel = MembershipLevel.BASIC
