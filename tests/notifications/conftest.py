"""
Pytest fixtures for notification tests.

Provides:
- A scripted email provider with per-call outcomes
- Sample submission details
- A fixed clock
"""

from datetime import datetime, timezone
from typing import List, Optional

import pytest

from notifications import (
    DeliveryResult,
    DeliveryStatus,
    EmailMessage,
    EmailProvider,
    ResumeNotificationService,
    SubmissionDetails,
)


class ScriptedProvider(EmailProvider):
    """
    Provider that answers each send from a script.

    Script entries are True (success), a string (failure with that
    message) or an exception instance (raised from send).
    """

    def __init__(self, script: Optional[List] = None):
        self.script = list(script or [])
        self.messages: List[EmailMessage] = []

    @property
    def provider_name(self) -> str:
        return "scripted"

    def is_configured(self) -> bool:
        return True

    def send(self, message: EmailMessage) -> DeliveryResult:
        self.messages.append(message)
        outcome = self.script.pop(0) if self.script else True
        if isinstance(outcome, Exception):
            raise outcome
        if outcome is True:
            return DeliveryResult(
                success=True,
                status=DeliveryStatus.SENT,
                message_id=f"scripted-{len(self.messages)}",
                status_code=202,
                provider=self.provider_name,
            )
        return DeliveryResult.failed(outcome, provider=self.provider_name)


@pytest.fixture
def fixed_now():
    return datetime(2026, 10, 19, 15, 45, tzinfo=timezone.utc)


@pytest.fixture
def scripted_provider():
    return ScriptedProvider()


@pytest.fixture
def make_service():
    """Build a notification service around a scripted provider."""
    def _make(script=None):
        provider = ScriptedProvider(script)
        service = ResumeNotificationService(
            provider,
            admin_email="admin@spitfirepremier.com",
            dashboard_base_url="https://dashboard.spitfirepremier.com",
        )
        return service, provider
    return _make


@pytest.fixture
def full_details():
    return SubmissionDetails(
        pilot_name="Amelia Earhart",
        pilot_email="amelia@example.com",
        airline="Delta",
        position="First Officer",
        selected_templates=["Modern", "", None, "Classic"],
    )


@pytest.fixture
def minimal_details():
    return SubmissionDetails(
        pilot_name="Amelia Earhart",
        pilot_email="amelia@example.com",
        airline="Delta",
    )
