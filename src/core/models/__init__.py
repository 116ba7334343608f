"""
Core Models

Identity of the authenticated caller.
"""

from .user import MembershipLevel, User

__all__ = [
    "MembershipLevel",
    "User",
]
