"""
SendGrid Email Provider

SendGrid integration for transactional email delivery.

Configuration (see config.settings.SendGridSettings):
    SENDGRID_API_KEY: Your SendGrid API key (required)
    SENDGRID_FROM_EMAIL: Verified sender email (required)
    SENDGRID_FROM_NAME: Sender display name (optional)
"""

import json
import logging
from typing import Any, Optional, Tuple

from python_http_client.exceptions import HTTPError
from sendgrid import SendGridAPIClient
from sendgrid.helpers.mail import From, Mail, To

from config.settings import DEFAULT_FROM_NAME, SendGridSettings

from .email_provider import (
    DeliveryResult,
    DeliveryStatus,
    EmailMessage,
    EmailProvider,
)

logger = logging.getLogger(__name__)

MESSAGE_ID_HEADER = "X-Message-Id"


class SendGridProvider(EmailProvider):
    """
    SendGrid email provider.

    The API client is built lazily from the API key unless one is passed
    in, which lets tests substitute a recording fake.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        from_email: Optional[str] = None,
        from_name: Optional[str] = None,
        client: Optional[Any] = None,
    ):
        """
        Initialize SendGrid provider.

        Args:
            api_key: SendGrid API key
            from_email: Sender email
            from_name: Sender display name, defaults to DEFAULT_FROM_NAME
            client: Object exposing ``send(mail)``; a SendGridAPIClient by default
        """
        self.api_key = api_key
        self.from_email = from_email
        self.from_name = from_name or DEFAULT_FROM_NAME
        self._client = client

    @classmethod
    def from_settings(cls, settings: SendGridSettings, client: Optional[Any] = None) -> "SendGridProvider":
        return cls(
            api_key=settings.api_key,
            from_email=settings.from_email,
            from_name=settings.from_name,
            client=client,
        )

    @property
    def provider_name(self) -> str:
        return "sendgrid"

    def _get_client(self):
        """Lazy-load SendGrid client."""
        if self._client is None:
            self._client = SendGridAPIClient(api_key=self.api_key)
        return self._client

    def is_configured(self) -> bool:
        """Check if SendGrid is properly configured."""
        return bool(self.api_key and self.from_email)

    def configuration_error(self) -> Optional[str]:
        """Describe the first missing setting, or None when ready to send."""
        if not self.api_key:
            return "SendGrid not configured"
        if not self.from_email:
            return "SendGrid FROM email not configured"
        return None

    def build_mail(self, message: EmailMessage) -> Mail:
        """Translate an EmailMessage into a SendGrid Mail object."""
        mail = Mail(
            from_email=From(self.from_email, self.from_name),
            to_emails=To(message.to),
            subject=message.subject,
            plain_text_content=message.plain_text,
            html_content=message.html,
        )

        if message.template_id:
            mail.template_id = message.template_id
            if message.template_data:
                mail.dynamic_template_data = message.template_data

        return mail

    def send(self, message: EmailMessage) -> DeliveryResult:
        """
        Send email via SendGrid.

        Args:
            message: Email message to send

        Returns:
            DeliveryResult with SendGrid message ID
        """
        config_error = self.configuration_error()
        if config_error:
            logger.warning(f"{config_error}, skipping email to {message.to}")
            return DeliveryResult.failed(
                config_error,
                provider=self.provider_name,
                error_code="NOT_CONFIGURED",
            )

        try:
            message.validate()
        except ValueError as e:
            return DeliveryResult.failed(str(e), provider=self.provider_name, error_code="INVALID_MESSAGE")

        logger.info(
            f"SendGrid: sending email to={message.to} "
            f"from={self.from_email} subject={message.subject!r}"
        )

        try:
            response = self._get_client().send(self.build_mail(message))
        except HTTPError as e:
            error_message, error_code, details = _parse_http_error(e)
            logger.error(
                f"SendGrid error: code={error_code} message={error_message}",
                extra={"sendgrid_details": details},
            )
            return DeliveryResult.failed(
                error_message,
                provider=self.provider_name,
                error_code=error_code,
                details=details,
            )
        except Exception as e:
            logger.exception(f"SendGrid send error: {e}")
            return DeliveryResult.failed(str(e), provider=self.provider_name, error_code="SEND_ERROR")

        if response.status_code not in (200, 201, 202):
            details = _decode_body(getattr(response, "body", None))
            error_message = _first_error_message(details) or f"SendGrid returned status {response.status_code}"
            logger.error(f"SendGrid error: {error_message}, body={details}")
            return DeliveryResult.failed(
                error_message,
                provider=self.provider_name,
                error_code=str(response.status_code),
                details=details,
            )

        message_id = _message_id(response.headers)
        logger.info(
            f"SendGrid: Email sent to {message.to}, "
            f"status={response.status_code} message_id={message_id}"
        )
        return DeliveryResult(
            success=True,
            status=DeliveryStatus.SENT,
            message_id=message_id,
            status_code=response.status_code,
            provider=self.provider_name,
        )


def _message_id(headers: Any) -> Optional[str]:
    if not headers:
        return None
    return headers.get(MESSAGE_ID_HEADER) or headers.get(MESSAGE_ID_HEADER.lower())


def _decode_body(body: Any) -> Any:
    """Decode a SendGrid response body into JSON when possible."""
    if body is None:
        return None
    if isinstance(body, bytes):
        body = body.decode("utf-8", errors="replace")
    if isinstance(body, str):
        if not body:
            return None
        try:
            return json.loads(body)
        except ValueError:
            return body
    return body


def _first_error_message(details: Any) -> Optional[str]:
    if isinstance(details, dict):
        errors = details.get("errors") or []
        if errors and isinstance(errors[0], dict):
            return errors[0].get("message")
    return None


def _parse_http_error(error: HTTPError) -> Tuple[str, str, Any]:
    """Pull message, code and body out of a python-http-client HTTPError."""
    details = _decode_body(getattr(error, "body", None))
    status_code = getattr(error, "status_code", None)
    error_message = (
        _first_error_message(details)
        or getattr(error, "reason", None)
        or str(error)
    )
    error_code = str(status_code) if status_code else "SEND_ERROR"
    return error_message, error_code, details
