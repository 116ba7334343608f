"""
API

Endpoints for the resume submission service:
- Submissions (/api/submission)
- Email (/api/email)
"""

from .router import api_router, API_TAGS

__all__ = ["api_router", "API_TAGS"]
