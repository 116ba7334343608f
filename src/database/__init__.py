"""
Database Layer for the resume submission service.

This module provides:
- SQLAlchemy ORM models for submissions and resumes
- Engine and session management
- The submission repository
"""

from .models import (
    Base,
    ResumeRecord,
    SubmissionRecord,
    SubmissionState,
)

from .connection import (
    close_sync_engine,
    get_db_session,
    get_session,
    get_sync_engine,
    get_sync_session_factory,
    init_db,
)

from .repositories import SubmissionRepository

__all__ = [
    # Models
    "Base",
    "ResumeRecord",
    "SubmissionRecord",
    "SubmissionState",
    # Connection
    "close_sync_engine",
    "get_db_session",
    "get_session",
    "get_sync_engine",
    "get_sync_session_factory",
    "init_db",
    # Repositories
    "SubmissionRepository",
]
