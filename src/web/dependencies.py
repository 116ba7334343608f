"""
FastAPI Dependency Injection for routes.

Provides dependency injection for:
- EmailProvider (SendGrid, built from settings read per request)
- ResumeNotificationService
- SubmissionRepository
- Resume data mapper

Usage in endpoints:
    @router.post("/email/send")
    def send_email(provider: EmailProvider = Depends(get_email_provider)):
        ...

Tests replace any of these through app.dependency_overrides.
"""

import json
import logging
from typing import Any, Callable, Optional

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from config.settings import (
    NotificationSettings,
    SendGridSettings,
    get_notification_settings,
    get_sendgrid_settings,
)
from database.connection import get_session
from database.repositories import SubmissionRepository
from notifications import EmailProvider, ResumeNotificationService, SendGridProvider

logger = logging.getLogger(__name__)

ResumeMapper = Callable[[Any], Any]


# Email delivery
def get_email_provider(
    request: Request,
    sendgrid: SendGridSettings = Depends(get_sendgrid_settings),
) -> EmailProvider:
    """
    Get the email provider for this request.

    An EmailProvider on app.state.email_provider takes precedence over
    the SendGrid provider built from the environment.
    """
    provider = getattr(request.app.state, "email_provider", None)
    if provider is not None:
        return provider
    return SendGridProvider.from_settings(sendgrid)


def get_notification_service(
    provider: EmailProvider = Depends(get_email_provider),
    notifications: NotificationSettings = Depends(get_notification_settings),
) -> ResumeNotificationService:
    """Get ResumeNotificationService wired to the request's provider."""
    return ResumeNotificationService(
        provider,
        admin_email=notifications.admin_recipient,
        dashboard_base_url=notifications.dashboard_base_url,
    )


# Persistence
def get_submission_repository(session: Session = Depends(get_session)) -> SubmissionRepository:
    return SubmissionRepository(session)


# Resume data
def map_resume_data(resume_data: Any) -> Optional[Any]:
    """
    Default resume mapper.

    Stored resume documents may be JSON text or already-decoded objects.
    """
    if resume_data is None:
        return None
    if isinstance(resume_data, (bytes, str)):
        try:
            return json.loads(resume_data)
        except ValueError:
            logger.warning("Stored resume data is not valid JSON, returning it unchanged")
            return resume_data
    return resume_data


def get_resume_mapper() -> ResumeMapper:
    """Get the function that shapes stored resume data for the API."""
    return map_resume_data
