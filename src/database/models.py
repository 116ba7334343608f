"""
SQLAlchemy ORM Models for resume submissions.

Tables:
- resumes: a pilot's resume document (JSON payload)
- submissions: a request to tailor a resume for an airline, with its
  review lifecycle state
"""

from datetime import datetime, timezone
from enum import Enum as PyEnum
from typing import Any, Dict

from sqlalchemy import (
    Column, String, Integer, DateTime, Enum, ForeignKey, Index, JSON
)
from sqlalchemy.dialects.postgresql import JSONB as PG_JSONB
from sqlalchemy.orm import declarative_base
from sqlalchemy.types import TypeDecorator


# Cross-database compatible JSON type
# Uses JSONB on PostgreSQL, JSON on SQLite/others
class JSONB(TypeDecorator):
    """A portable JSONB type that works with both PostgreSQL and SQLite."""
    impl = JSON
    cache_ok = True

    def load_dialect_impl(self, dialect):
        if dialect.name == 'postgresql':
            return dialect.type_descriptor(PG_JSONB())
        else:
            return dialect.type_descriptor(JSON())


Base = declarative_base()


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SubmissionState(str, PyEnum):
    """Review lifecycle of a submission."""
    NEEDS_REVIEW = "needs_review"
    PROCESSING = "processing"
    APPROVED_AND_SENT = "approved_and_sent"


class ResumeRecord(Base):
    """A pilot's resume as saved by the resume builder."""

    __tablename__ = "resumes"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(64), nullable=False, index=True)
    resume_data = Column(JSONB, nullable=True)
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)

    def __repr__(self):
        return f"<ResumeRecord(id={self.id}, user_id='{self.user_id}')>"


class SubmissionRecord(Base):
    """A request to have a resume reviewed and sent to an airline."""

    __tablename__ = "submissions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(64), nullable=False)
    resume_id = Column(Integer, ForeignKey("resumes.id"), nullable=True)
    state = Column(
        Enum(SubmissionState, values_callable=lambda states: [s.value for s in states], name="submission_state"),
        nullable=False,
        default=SubmissionState.NEEDS_REVIEW,
    )
    airline = Column(String(255), nullable=False)
    position = Column(String(255), nullable=True)
    selected_templates = Column(JSONB, nullable=True)
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)

    __table_args__ = (
        Index("ix_submissions_user_created", "user_id", "created_at"),
    )

    def to_dict(self) -> Dict[str, Any]:
        """JSON shape returned by the API."""
        return {
            "id": self.id,
            "userId": self.user_id,
            "resumeId": self.resume_id,
            "state": self.state.value if isinstance(self.state, SubmissionState) else self.state,
            "airline": self.airline,
            "position": self.position,
            "selectedTemplates": self.selected_templates,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }

    def __repr__(self):
        return f"<SubmissionRecord(id={self.id}, user_id='{self.user_id}', state='{self.state}')>"
