"""
Authentication for the resume submission service.

Bearer JWTs carry the user id, email and membership level. Routes resolve
the caller with get_user and gate admin features with is_admin.

Usage:
    from rbac import get_user, is_admin

    @router.post("/email/test")
    def send_test(user: Optional[User] = Depends(get_user)):
        ...
"""

from .dependencies import get_user, is_admin, security
from .jwt import create_access_token, decode_token, decode_token_safe, get_jwt_secret

__all__ = [
    "create_access_token",
    "decode_token",
    "decode_token_safe",
    "get_jwt_secret",
    "get_user",
    "is_admin",
    "security",
]
