"""
Tests for the email provider abstraction.

Tests:
- Plain-text derivation from HTML
- Address validation
- Message validation
- Null provider behaviour
"""

import pytest

from notifications import (
    DeliveryResult,
    DeliveryStatus,
    EmailMessage,
    NullEmailProvider,
    is_valid_email,
    strip_html,
)
from notifications.email_provider import HTML_ONLY_FALLBACK_TEXT


class TestStripHtml:
    """Tests for deriving text bodies."""

    def test_removes_tags(self):
        text = strip_html("<div><h1>Hello</h1><p>Dear <strong>Pilot</strong>,</p></div>")
        assert "<" not in text
        assert ">" not in text
        assert "Hello" in text
        assert "Dear Pilot," in text

    def test_markup_only_html_gets_fallback(self):
        assert strip_html("<div><br/><hr></div>") == HTML_ONLY_FALLBACK_TEXT

    def test_empty_html_stays_empty(self):
        assert strip_html("") == ""

    def test_escaped_tags_are_not_reintroduced(self):
        text = strip_html("<p>&lt;script&gt;alert(1)&lt;/script&gt;Safe</p>")
        assert "<script>" not in text
        assert "Safe" in text

    def test_entities_are_decoded(self):
        assert strip_html("<p>Smith &amp; Co</p>") == "Smith & Co"


class TestEmailValidation:
    """Tests for address validation."""

    @pytest.mark.parametrize("address", ["pilot@example.com", "first.last@airline.co.uk"])
    def test_valid_addresses(self, address):
        assert is_valid_email(address)

    @pytest.mark.parametrize("address", ["not-an-email", "pilot@", "pilot@example", "pi lot@example.com", "", None])
    def test_invalid_addresses(self, address):
        assert not is_valid_email(address)


class TestEmailMessage:
    """Tests for message validation and text fallback."""

    def test_validate_requires_recipient(self):
        with pytest.raises(ValueError):
            EmailMessage(to="", subject="Hi", html="<p>Hi</p>").validate()

    def test_validate_requires_subject(self):
        with pytest.raises(ValueError):
            EmailMessage(to="a@b.co", subject="", html="<p>Hi</p>").validate()

    def test_validate_requires_html(self):
        with pytest.raises(ValueError):
            EmailMessage(to="a@b.co", subject="Hi", html="").validate()

    def test_explicit_text_wins(self):
        message = EmailMessage(to="a@b.co", subject="Hi", html="<p>Hello</p>", text="Plain")
        assert message.plain_text == "Plain"

    def test_text_derived_from_html(self):
        message = EmailMessage(to="a@b.co", subject="Hi", html="<p>Hello</p>")
        assert message.plain_text == "Hello"


class TestDeliveryResult:
    """Tests for result construction."""

    def test_failed_result(self):
        result = DeliveryResult.failed("boom", provider="sendgrid", error_code="500")
        assert not result.success
        assert result.status == DeliveryStatus.FAILED
        assert result.to_dict()["error_message"] == "boom"
        assert result.to_dict()["error_code"] == "500"


class TestNullProvider:
    """Tests for the logging-only provider."""

    def test_send_succeeds(self):
        result = NullEmailProvider().send(EmailMessage(to="a@b.co", subject="Hi", html="<p>Hi</p>"))
        assert result.success
        assert result.status_code == 202
        assert result.message_id.startswith("null-")

    def test_invalid_message_fails(self):
        result = NullEmailProvider().send(EmailMessage(to="a@b.co", subject="", html="<p>Hi</p>"))
        assert not result.success
        assert result.error_code == "INVALID_MESSAGE"

    def test_send_batch_is_sequential(self):
        messages = [
            EmailMessage(to="a@b.co", subject="One", html="<p>1</p>"),
            EmailMessage(to="c@d.co", subject="", html="<p>2</p>"),
        ]
        results = NullEmailProvider().send_batch(messages)
        assert [r.success for r in results] == [True, False]
