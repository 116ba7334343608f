"""
Email Provider Abstraction

Unified interface for transactional email delivery.

Providers never raise on delivery problems: every outcome, including
missing configuration and provider rejections, comes back as a
DeliveryResult so callers can carry on with other recipients.
"""

import html as html_lib
import logging
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)

_TAG_RE = re.compile(r"<[^>]*>")
_BLANK_LINES_RE = re.compile(r"\n\s*\n+")
_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

HTML_ONLY_FALLBACK_TEXT = "Please view this email in an HTML-capable client."


def strip_html(body_html: str) -> str:
    """
    Derive a plain-text body from HTML by removing markup tags.

    The result never contains tags. When the HTML holds nothing but markup
    a fixed fallback sentence is returned so the text part is never empty.
    """
    text = _TAG_RE.sub("", body_html or "")
    text = html_lib.unescape(text)
    # Unescaping can surface literal angle brackets that read like tags
    text = _TAG_RE.sub("", text)
    lines = [line.strip() for line in text.splitlines()]
    text = _BLANK_LINES_RE.sub("\n\n", "\n".join(lines)).strip()
    if not text and body_html:
        return HTML_ONLY_FALLBACK_TEXT
    return text


def is_valid_email(address: Optional[str]) -> bool:
    """Basic local@domain.tld shape check."""
    if not address:
        return False
    return bool(_EMAIL_RE.match(address))


class DeliveryStatus(str, Enum):
    """Email delivery status."""
    SENT = "sent"
    FAILED = "failed"


@dataclass
class EmailMessage:
    """Email message to be sent."""
    to: str
    subject: str
    html: str
    text: Optional[str] = None
    # Template support
    template_id: Optional[str] = None
    template_data: Dict[str, Any] = field(default_factory=dict)

    def validate(self) -> bool:
        """Validate message has required fields."""
        if not self.to:
            raise ValueError("Recipient email (to) is required")
        if not self.subject:
            raise ValueError("Subject is required")
        if not self.html:
            raise ValueError("HTML body is required")
        return True

    @property
    def plain_text(self) -> str:
        """Explicit text body, or one derived from the HTML."""
        return self.text or strip_html(self.html)


@dataclass
class DeliveryResult:
    """Result of email delivery attempt."""
    success: bool
    status: DeliveryStatus
    message_id: Optional[str] = None
    status_code: Optional[int] = None
    provider: Optional[str] = None
    error_message: Optional[str] = None
    error_code: Optional[str] = None
    details: Optional[Any] = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def failed(
        cls,
        error_message: str,
        provider: Optional[str] = None,
        error_code: Optional[str] = None,
        details: Optional[Any] = None,
    ) -> "DeliveryResult":
        return cls(
            success=False,
            status=DeliveryStatus.FAILED,
            provider=provider,
            error_message=error_message,
            error_code=error_code,
            details=details,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "success": self.success,
            "status": self.status.value,
            "message_id": self.message_id,
            "status_code": self.status_code,
            "provider": self.provider,
            "error_message": self.error_message,
            "error_code": self.error_code,
            "timestamp": self.timestamp.isoformat(),
        }


class EmailProvider(ABC):
    """Abstract base class for email providers."""

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Return provider name for logging."""

    @abstractmethod
    def send(self, message: EmailMessage) -> DeliveryResult:
        """
        Send an email message.

        Args:
            message: Email message to send

        Returns:
            DeliveryResult with success/failure status
        """

    @abstractmethod
    def is_configured(self) -> bool:
        """Check if provider is properly configured."""

    def send_batch(self, messages: List[EmailMessage]) -> List[DeliveryResult]:
        """Send messages one after another, collecting every result."""
        return [self.send(message) for message in messages]

    def send_template(
        self,
        to: str,
        template_id: str,
        template_data: Dict[str, Any],
        subject: str,
        html: str,
    ) -> DeliveryResult:
        """
        Send email using a provider-side template.

        The inline HTML still travels with the message; the provider decides
        which content wins.
        """
        message = EmailMessage(
            to=to,
            subject=subject,
            html=html,
            template_id=template_id,
            template_data=template_data,
        )
        return self.send(message)


class NullEmailProvider(EmailProvider):
    """
    Null provider for local development.

    Logs emails but doesn't send them.
    """

    @property
    def provider_name(self) -> str:
        return "null"

    def send(self, message: EmailMessage) -> DeliveryResult:
        """Log email without sending."""
        try:
            message.validate()
        except ValueError as e:
            return DeliveryResult.failed(str(e), provider=self.provider_name, error_code="INVALID_MESSAGE")

        logger.info(f"[NULL PROVIDER] Would send email to {message.to}: {message.subject}")
        return DeliveryResult(
            success=True,
            status=DeliveryStatus.SENT,
            message_id=f"null-{datetime.now(timezone.utc).timestamp()}",
            status_code=202,
            provider=self.provider_name,
        )

    def is_configured(self) -> bool:
        """Always configured (it's a null provider)."""
        return True
