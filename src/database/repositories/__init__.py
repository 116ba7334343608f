"""Repository implementations for the resume submission service."""

from .submission_repository import SubmissionRepository

__all__ = [
    "SubmissionRepository",
]
