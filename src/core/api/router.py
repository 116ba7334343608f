"""
API Router

Combines all API routes into a single router mounted at /api:
- /api/submission
- /api/email/*
"""

import logging

from fastapi import APIRouter

from .email_routes import router as email_router
from .submission_routes import router as submission_router

logger = logging.getLogger(__name__)

# =============================================================================
# API ROUTER
# =============================================================================

api_router = APIRouter(prefix="/api")

api_router.include_router(submission_router)
api_router.include_router(email_router)

API_TAGS = [
    {"name": "Submissions", "description": "Resume submissions and their review state"},
    {"name": "Email", "description": "Transactional email and delivery diagnostics"},
]
