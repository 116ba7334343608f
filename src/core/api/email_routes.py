"""
Email API Routes

Transactional email endpoints:
- Send an arbitrary email (signed-in users)
- Send resume submission notifications (signed-in users)
- Send a status update to a pilot (admin)
- Send a test email (admin)
- Debug the SendGrid configuration (admin)

The debug report shows whether the API key is set and how long it is,
never its value.
"""

import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, Field

from config.settings import (
    NotificationSettings,
    SendGridSettings,
    get_notification_settings,
    get_sendgrid_settings,
)
from core.models.user import User
from notifications import (
    EmailMessage,
    EmailProvider,
    ResumeNotificationService,
    build_debug_email,
    build_test_email,
    is_valid_email,
)
from notifications.diagnostics import api_key_length, sendgrid_env_check
from notifications.resume_notifications import INVALID_EMAIL_FORMAT
from rbac.dependencies import get_user, is_admin
from web.dependencies import get_email_provider, get_notification_service
from web.errors import ADMIN_REQUIRED, APIError, UNAUTHORIZED

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/email", tags=["Email"])


# =============================================================================
# REQUEST MODELS
# =============================================================================

class SendEmailRequest(BaseModel):
    """Request to send a single email."""
    to: Optional[str] = None
    subject: Optional[str] = None
    html: Optional[str] = None
    text: Optional[str] = None


class ResumeNotificationsRequest(BaseModel):
    """Request to send the submission confirmation and admin alert."""
    model_config = ConfigDict(populate_by_name=True)

    pilot_name: Optional[str] = Field(default=None, alias="pilotName")
    pilot_email: Optional[str] = Field(default=None, alias="pilotEmail")
    airline: Optional[str] = None
    position: Optional[str] = None
    selected_templates: Optional[List[Optional[str]]] = Field(default=None, alias="selectedTemplates")


class StatusUpdateRequest(BaseModel):
    """Request to notify a pilot of a status change."""
    model_config = ConfigDict(populate_by_name=True)

    pilot_email: Optional[str] = Field(default=None, alias="pilotEmail")
    pilot_name: Optional[str] = Field(default=None, alias="pilotName")
    status: Optional[str] = None
    message: Optional[str] = None


class DiagnosticEmailRequest(BaseModel):
    """Request carrying the address for a diagnostic email."""
    model_config = ConfigDict(populate_by_name=True)

    test_email: Optional[str] = Field(default=None, alias="testEmail")


# =============================================================================
# HELPERS
# =============================================================================

def _require_user(user: Optional[User]) -> User:
    if user is None:
        raise APIError(401, UNAUTHORIZED)
    return user


def _require_admin(user: Optional[User]) -> User:
    if not is_admin(user):
        raise APIError(401, ADMIN_REQUIRED)
    return user


def _missing(fields: Dict[str, Any]) -> List[str]:
    return [name for name, value in fields.items() if not value]


# =============================================================================
# USER ENDPOINTS
# =============================================================================

@router.post("/send")
def send_email(
    body: Optional[SendEmailRequest] = None,
    user: Optional[User] = Depends(get_user),
    provider: EmailProvider = Depends(get_email_provider),
):
    """Send one email through the configured provider."""
    _require_user(user)
    body = body or SendEmailRequest()

    if _missing({"to": body.to, "subject": body.subject, "html": body.html}):
        raise APIError(400, "Missing required fields: to, subject, html")

    try:
        result = provider.send(EmailMessage(to=body.to, subject=body.subject, html=body.html, text=body.text))
    except Exception as e:
        logger.exception(f"Error sending email: {e}")
        raise APIError(500, str(e))

    if not result.success:
        raise APIError(500, result.error_message or "Email send failed")

    return {"success": True, "messageId": result.message_id}


@router.post("/send-resume-notifications")
def send_resume_notifications(
    body: Optional[ResumeNotificationsRequest] = None,
    user: Optional[User] = Depends(get_user),
    service: ResumeNotificationService = Depends(get_notification_service),
):
    """Send the pilot confirmation and the admin notification."""
    _require_user(user)
    body = body or ResumeNotificationsRequest()

    if _missing({"pilotName": body.pilot_name, "pilotEmail": body.pilot_email, "airline": body.airline}):
        raise APIError(400, "Missing required fields: pilotName, pilotEmail, airline")

    if not is_valid_email(body.pilot_email):
        raise APIError(400, INVALID_EMAIL_FORMAT)

    try:
        outcome = service.notify_resume_submission(
            pilot_name=body.pilot_name,
            pilot_email=body.pilot_email,
            airline=body.airline,
            position=body.position,
            selected_templates=body.selected_templates,
        )
    except Exception as e:
        logger.exception(f"Error in email notifications endpoint: {e}")
        raise APIError(500, str(e) or "Internal server error")

    return outcome.to_dict()


# =============================================================================
# ADMIN ENDPOINTS
# =============================================================================

@router.post("/status-update")
def send_status_update(
    body: Optional[StatusUpdateRequest] = None,
    user: Optional[User] = Depends(get_user),
    service: ResumeNotificationService = Depends(get_notification_service),
):
    """Tell a pilot their submission changed state."""
    _require_admin(user)
    body = body or StatusUpdateRequest()

    if _missing({"pilotEmail": body.pilot_email, "pilotName": body.pilot_name, "status": body.status}):
        raise APIError(400, "Missing required fields: pilotEmail, pilotName, status")

    if not is_valid_email(body.pilot_email):
        raise APIError(400, INVALID_EMAIL_FORMAT)

    try:
        result = service.notify_status_update(
            pilot_email=body.pilot_email,
            pilot_name=body.pilot_name,
            status=body.status,
            message=body.message,
        )
    except Exception as e:
        logger.exception(f"Error sending status update: {e}")
        raise APIError(500, str(e) or "Internal server error")

    if not result.success:
        raise APIError(500, result.error_message or "Email send failed")

    return {"success": True, "messageId": result.message_id}


@router.post("/test")
def send_test_email(
    body: Optional[DiagnosticEmailRequest] = None,
    user: Optional[User] = Depends(get_user),
    provider: EmailProvider = Depends(get_email_provider),
    sendgrid: SendGridSettings = Depends(get_sendgrid_settings),
):
    """Send a test email to prove delivery works."""
    _require_admin(user)

    if body is None or not body.test_email:
        raise APIError(400, "Missing testEmail parameter")

    rendered = build_test_email(sendgrid.from_email)
    try:
        result = provider.send(
            EmailMessage(to=body.test_email, subject=rendered.subject, html=rendered.html, text=rendered.text)
        )
    except Exception as e:
        logger.exception(f"Error sending test email: {e}")
        raise APIError(500, str(e) or "Internal server error")

    if not result.success:
        raise APIError(500, result.error_message or "Email send failed")

    return {
        "success": True,
        "message": "Test email sent successfully",
        "messageId": result.message_id,
    }


@router.post("/debug-sendgrid")
def debug_sendgrid(
    body: Optional[DiagnosticEmailRequest] = None,
    user: Optional[User] = Depends(get_user),
    provider: EmailProvider = Depends(get_email_provider),
    sendgrid: SendGridSettings = Depends(get_sendgrid_settings),
    notifications: NotificationSettings = Depends(get_notification_settings),
):
    """Report the email configuration and send a debug email."""
    _require_admin(user)

    if body is None or not body.test_email:
        raise APIError(400, "Missing testEmail parameter")

    env_check = sendgrid_env_check(sendgrid, notifications)
    logger.info(f"Environment check: {env_check}")

    if not sendgrid.api_key:
        return {"success": False, "error": "SendGrid API key not configured", "envCheck": env_check}
    if not sendgrid.from_email:
        return {"success": False, "error": "SendGrid FROM email not configured", "envCheck": env_check}

    key_length = api_key_length(sendgrid)
    logger.info(f"Attempting debug send to={body.test_email} from={sendgrid.from_email} api_key_length={key_length}")

    rendered = build_debug_email(sendgrid.from_email, sendgrid.from_name, key_length)
    try:
        result = provider.send(
            EmailMessage(to=body.test_email, subject=rendered.subject, html=rendered.html, text=rendered.text)
        )
    except Exception as e:
        logger.exception(f"Debug endpoint error: {e}")
        raise APIError(500, str(e) or "Internal server error")

    if not result.success:
        raise APIError(
            400,
            result.error_message or "Email send failed",
            extra={
                "code": result.error_code,
                "details": result.details or "No additional details",
                "envCheck": env_check,
            },
        )

    return {
        "success": True,
        "message": "Debug email sent successfully",
        "statusCode": result.status_code,
        "messageId": result.message_id,
        "envCheck": env_check,
    }
