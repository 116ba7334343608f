"""
Submission API Routes

Resume submission endpoints for the signed-in pilot:
- List own submissions with their resumes
- Create a submission (always starts in needs_review)

A create request may also carry pilotName/pilotEmail, in which case the
confirmation and admin emails are sent after the row is committed.
"""

import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, Field

from core.models.user import User
from database.models import ResumeRecord, SubmissionRecord
from database.repositories import SubmissionRepository
from notifications import ResumeNotificationService
from rbac.dependencies import get_user
from web.dependencies import (
    ResumeMapper,
    get_notification_service,
    get_resume_mapper,
    get_submission_repository,
)
from web.errors import APIError, USER_NOT_FOUND

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Submissions"])


# =============================================================================
# REQUEST MODELS
# =============================================================================

class SubmissionPayload(BaseModel):
    """Submission fields supplied by the caller. Unknown keys such as state or userId are dropped."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    resume_id: Optional[int] = Field(default=None, alias="resumeId")
    airline: Optional[str] = None
    position: Optional[str] = None
    selected_templates: Optional[List[Optional[str]]] = Field(default=None, alias="selectedTemplates")


class CreateSubmissionRequest(BaseModel):
    """Request to create a submission."""
    model_config = ConfigDict(populate_by_name=True)

    submission: Optional[SubmissionPayload] = None
    pilot_name: Optional[str] = Field(default=None, alias="pilotName")
    pilot_email: Optional[str] = Field(default=None, alias="pilotEmail")


# =============================================================================
# HELPERS
# =============================================================================

def _resume_payload(resume: Optional[ResumeRecord], mapper: ResumeMapper) -> Optional[Any]:
    if resume is None or not resume.resume_data:
        return None
    return mapper(resume.resume_data)


def _send_submission_notifications(
    service: ResumeNotificationService,
    record: SubmissionRecord,
    pilot_name: str,
    pilot_email: str,
) -> Dict[str, Any]:
    """Fan out submission emails. Failures are reported, never raised."""
    try:
        outcome = service.notify_resume_submission(
            pilot_name=pilot_name,
            pilot_email=pilot_email,
            airline=record.airline,
            position=record.position,
            selected_templates=record.selected_templates,
        )
    except Exception as e:
        logger.exception(f"Submission {record.id} notifications failed: {e}")
        return {"success": False, "pilotEmailSent": False, "adminEmailSent": False, "errors": [str(e)]}
    return outcome.to_dict()


# =============================================================================
# SUBMISSION ENDPOINTS
# =============================================================================

@router.get("/submission")
def list_submissions(
    user: Optional[User] = Depends(get_user),
    repository: SubmissionRepository = Depends(get_submission_repository),
    mapper: ResumeMapper = Depends(get_resume_mapper),
):
    """List the caller's submissions, each with its resume data."""
    if user is None:
        raise APIError(401, USER_NOT_FOUND)

    try:
        rows = repository.list_for_user(user.id)
        submissions: List[Dict[str, Any]] = [
            {
                "submission": submission.to_dict(),
                "resume": _resume_payload(resume, mapper),
            }
            for submission, resume in rows
        ]
    except Exception as e:
        logger.exception(f"Failed to list submissions for user {user.id}: {e}")
        raise APIError(500, str(e))

    return {"success": True, "submissions": submissions}


@router.post("/submission")
def create_submission(
    body: Optional[CreateSubmissionRequest] = None,
    user: Optional[User] = Depends(get_user),
    repository: SubmissionRepository = Depends(get_submission_repository),
    notifier: ResumeNotificationService = Depends(get_notification_service),
):
    """Create a submission owned by the caller in the needs_review state."""
    if user is None:
        raise APIError(401, USER_NOT_FOUND)

    if body is None or body.submission is None or not body.submission.model_fields_set:
        raise APIError(400, "Missing submission data")

    try:
        record = repository.create_submission(user.id, body.submission.model_dump())
    except ValueError as e:
        raise APIError(400, str(e))
    except Exception as e:
        logger.exception(f"Failed to create submission for user {user.id}: {e}")
        raise APIError(500, str(e))

    response: Dict[str, Any] = {"success": True, "submission": record.to_dict()}

    if body.pilot_name and body.pilot_email:
        response["notifications"] = _send_submission_notifications(
            notifier, record, body.pilot_name, body.pilot_email
        )

    return response
