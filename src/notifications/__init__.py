"""
Notification Delivery

Transactional email for the resume submission service.

Provides:
- SendGrid delivery behind the EmailProvider interface
- Pure template builders for every notification kind
- The resume-submission fan-out (pilot confirmation + admin alert)

Usage:
    from notifications import SendGridProvider, ResumeNotificationService

    provider = SendGridProvider(api_key="SG.xxx", from_email="noreply@example.com")
    service = ResumeNotificationService(
        provider,
        admin_email="admin@example.com",
        dashboard_base_url="https://dashboard.example.com",
    )
    outcome = service.notify_resume_submission(
        pilot_name="Amelia Earhart",
        pilot_email="amelia@example.com",
        airline="Delta",
    )
"""

from .email_provider import (
    DeliveryResult,
    DeliveryStatus,
    EmailMessage,
    EmailProvider,
    NullEmailProvider,
    is_valid_email,
    strip_html,
)
from .sendgrid_provider import SendGridProvider
from .templates import (
    RenderedEmail,
    SubmissionDetails,
    build_admin_notification,
    build_debug_email,
    build_pilot_confirmation,
    build_status_update,
    build_test_email,
)
from .resume_notifications import (
    NotificationOutcome,
    PartialSuccessPolicy,
    ResumeNotificationService,
)

__all__ = [
    # Core interfaces
    "DeliveryResult",
    "DeliveryStatus",
    "EmailMessage",
    "EmailProvider",
    "NullEmailProvider",
    "is_valid_email",
    "strip_html",
    # Providers
    "SendGridProvider",
    # Templates
    "RenderedEmail",
    "SubmissionDetails",
    "build_admin_notification",
    "build_debug_email",
    "build_pilot_confirmation",
    "build_status_update",
    "build_test_email",
    # Orchestration
    "NotificationOutcome",
    "PartialSuccessPolicy",
    "ResumeNotificationService",
]
