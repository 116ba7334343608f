"""Submission Repository Implementation.

Reads and writes resume submissions with SQLAlchemy sessions.
New submissions always start in the needs_review state.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional, Tuple

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from database.models import ResumeRecord, SubmissionRecord, SubmissionState

logger = logging.getLogger(__name__)

# Accepted request keys for each column (camelCase from the dashboard, snake_case from scripts)
_FIELD_KEYS = {
    "resume_id": ("resumeId", "resume_id"),
    "airline": ("airline",),
    "position": ("position",),
    "selected_templates": ("selectedTemplates", "selected_templates"),
}


def _pick(data: Mapping[str, Any], keys: Tuple[str, ...]) -> Any:
    for key in keys:
        if key in data:
            return data[key]
    return None


class SubmissionRepository:
    """
    Submission persistence.

    The caller owns the session; this class flushes and commits but never
    closes it.
    """

    def __init__(self, session: Session):
        """
        Initialize repository with a session.

        Args:
            session: SQLAlchemy session.
        """
        self._session = session

    def list_for_user(self, user_id: str) -> List[Tuple[SubmissionRecord, Optional[ResumeRecord]]]:
        """
        Get a user's submissions, each paired with its resume.

        Args:
            user_id: Owner of the submissions.

        Returns:
            (submission, resume) pairs, newest first. The resume is None
            when the referenced row does not exist.
        """
        query = (
            select(SubmissionRecord, ResumeRecord)
            .outerjoin(ResumeRecord, SubmissionRecord.resume_id == ResumeRecord.id)
            .where(SubmissionRecord.user_id == user_id)
            .order_by(SubmissionRecord.created_at.desc(), SubmissionRecord.id.desc())
        )
        rows = self._session.execute(query).all()
        return [(row[0], row[1]) for row in rows]

    def create_submission(self, user_id: str, data: Mapping[str, Any]) -> SubmissionRecord:
        """
        Insert a new submission owned by user_id.

        Any state supplied in data is ignored.

        Args:
            user_id: Owner of the new submission.
            data: Submission fields from the request.

        Returns:
            The committed SubmissionRecord.

        Raises:
            ValueError: If airline is missing.
            SQLAlchemyError: If the insert fails (the session is rolled back).
        """
        values: Dict[str, Any] = {
            column: _pick(data, keys) for column, keys in _FIELD_KEYS.items()
        }
        if not values["airline"]:
            raise ValueError("Submission airline is required")

        record = SubmissionRecord(
            user_id=user_id,
            state=SubmissionState.NEEDS_REVIEW,
            **values,
        )

        try:
            self._session.add(record)
            self._session.commit()
            self._session.refresh(record)
        except SQLAlchemyError as e:
            self._session.rollback()
            logger.error(f"Failed to create submission for user {user_id}: {e}")
            raise

        logger.info(f"Created submission {record.id} for user {user_id}")
        return record
