"""
Resume Notification Service

Sends the emails that accompany a pilot's resume submission:
- Pilot confirmation
- Admin notification
- Status updates

Sends are sequential and independent. A failed send is reported in the
outcome and never stops the next one; nothing is rolled back.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence, Union

from .email_provider import DeliveryResult, EmailMessage, EmailProvider, is_valid_email
from .templates import (
    RenderedEmail,
    SubmissionDetails,
    build_admin_notification,
    build_pilot_confirmation,
    build_status_update,
)

logger = logging.getLogger(__name__)

INVALID_EMAIL_FORMAT = "Invalid email format"


class PartialSuccessPolicy:
    """A fan-out succeeds when at least one of its sends succeeded."""

    def is_success(self, sent_flags: Sequence[bool]) -> bool:
        return any(sent_flags)


@dataclass
class NotificationOutcome:
    """Aggregate result of the submission fan-out."""
    pilot_email_sent: bool = False
    admin_email_sent: bool = False
    errors: List[str] = field(default_factory=list)
    success: bool = False
    validation_error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """JSON shape returned by the API."""
        return {
            "success": self.success,
            "pilotEmailSent": self.pilot_email_sent,
            "adminEmailSent": self.admin_email_sent,
            "errors": list(self.errors),
        }


class ResumeNotificationService:
    """
    Builds and sends resume-submission notifications.

    The provider is injected; the service owns no connection state.
    """

    def __init__(
        self,
        provider: EmailProvider,
        admin_email: str,
        dashboard_base_url: str,
        policy: Optional[PartialSuccessPolicy] = None,
    ):
        self.provider = provider
        self.admin_email = admin_email
        self.dashboard_base_url = dashboard_base_url
        self.policy = policy or PartialSuccessPolicy()

    def notify_resume_submission(
        self,
        pilot_name: str,
        pilot_email: str,
        airline: str,
        position: Optional[str] = None,
        selected_templates: Optional[Sequence[Optional[str]]] = None,
        now: Optional[datetime] = None,
    ) -> NotificationOutcome:
        """
        Send the pilot confirmation, then the admin notification.

        Args:
            pilot_name: Pilot's display name
            pilot_email: Pilot's address, validated before anything is sent
            airline: Target airline
            position: Optional target position
            selected_templates: Optional resume template names
            now: Timestamp used in the emails (defaults to the current time)

        Returns:
            NotificationOutcome with per-recipient flags and error strings
        """
        if not is_valid_email(pilot_email):
            logger.warning(f"Rejected resume notification with invalid pilot email: {pilot_email!r}")
            return NotificationOutcome(errors=[INVALID_EMAIL_FORMAT], validation_error=INVALID_EMAIL_FORMAT)

        details = SubmissionDetails(
            pilot_name=pilot_name,
            pilot_email=pilot_email,
            airline=airline,
            position=position,
            selected_templates=selected_templates,
        )
        outcome = NotificationOutcome()

        logger.info(f"Processing email notifications for pilot={pilot_name!r} airline={airline!r}")

        pilot_result = self._deliver(pilot_email, build_pilot_confirmation(details, now=now))
        if pilot_result.success:
            outcome.pilot_email_sent = True
            logger.info("Pilot email sent successfully")
        else:
            outcome.errors.append(f"Pilot email failed: {pilot_result.error_message}")
            logger.error(f"Pilot email failed: {pilot_result.to_dict()}")

        admin_result = self._deliver(
            self.admin_email,
            build_admin_notification(details, self.dashboard_base_url, now=now),
        )
        if admin_result.success:
            outcome.admin_email_sent = True
            logger.info("Admin email sent successfully")
        else:
            outcome.errors.append(f"Admin email failed: {admin_result.error_message}")
            logger.error(f"Admin email failed: {admin_result.to_dict()}")

        outcome.success = self.policy.is_success([outcome.pilot_email_sent, outcome.admin_email_sent])
        logger.info(f"Email notification results: {outcome.to_dict()}")
        return outcome

    def notify_status_update(
        self,
        pilot_email: str,
        pilot_name: str,
        status: Union[str, Enum],
        message: Optional[str] = None,
    ) -> DeliveryResult:
        """Send a status update to the pilot."""
        if not is_valid_email(pilot_email):
            return DeliveryResult.failed(INVALID_EMAIL_FORMAT, error_code="INVALID_EMAIL")
        return self._deliver(pilot_email, build_status_update(pilot_name, status, message))

    def _deliver(self, to: str, rendered: RenderedEmail) -> DeliveryResult:
        """Hand one rendered email to the provider."""
        message = EmailMessage(
            to=to,
            subject=rendered.subject,
            html=rendered.html,
            text=rendered.text,
        )
        try:
            return self.provider.send(message)
        except Exception as e:
            # A raising provider must not stop the remaining sends
            logger.exception(f"[EMAIL] Unexpected error sending to {to}: {e}")
            return DeliveryResult.failed(str(e), provider=self.provider.provider_name)
