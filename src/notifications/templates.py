"""
Email Templates

Pure builders for every notification the service sends. Each builder takes
plain domain values and returns a RenderedEmail; none of them touch the
network, so their output can be asserted directly in tests.

Optional fields (position, selected templates, notes) are omitted from the
output when missing. Values supplied by users are HTML-escaped.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from html import escape
from typing import Dict, List, Optional, Sequence, Union

BRAND_NAME = "Spitfire Elite Aviation"
BRAND_COLOR = "#ea580c"
DASHBOARD_REQUESTS_PATH = "/resume-requests"

STATUS_MESSAGES: Dict[str, str] = {
    "processing": "Your resume is currently being processed.",
    "approved_and_sent": "Your resume has been approved and sent to the airline!",
    "needs_review": "Your resume requires additional review.",
}
DEFAULT_STATUS_MESSAGE = "Your resume status has been updated."


@dataclass(frozen=True)
class RenderedEmail:
    """Subject and bodies for one outgoing email."""
    subject: str
    html: str
    text: str


@dataclass(frozen=True)
class SubmissionDetails:
    """The submission fields the templates interpolate."""
    pilot_name: str
    pilot_email: str
    airline: str
    position: Optional[str] = None
    selected_templates: Optional[Sequence[Optional[str]]] = None

    @property
    def template_names(self) -> List[str]:
        """Selected template names with empty entries dropped."""
        selected = self.selected_templates
        if isinstance(selected, str):
            selected = [selected]
        if not isinstance(selected, (list, tuple)):
            return []
        return [name for name in selected if name]


def _now(now: Optional[datetime]) -> datetime:
    return now or datetime.now(timezone.utc)


def format_long_date(moment: datetime) -> str:
    """``Monday, October 19, 2026``"""
    return f"{moment:%A}, {moment:%B} {moment.day}, {moment.year}"


def format_long_datetime(moment: datetime) -> str:
    """``Monday, October 19, 2026 at 03:45 PM``"""
    return f"{format_long_date(moment)} at {moment:%I:%M %p}"


def dashboard_link(dashboard_base_url: str) -> str:
    return f"{dashboard_base_url.rstrip('/')}{DASHBOARD_REQUESTS_PATH}"


def _status_key(status: Union[str, Enum]) -> str:
    value = status.value if isinstance(status, Enum) else status
    return str(value or "").strip().lower()


# =============================================================================
# PILOT CONFIRMATION
# =============================================================================

def build_pilot_confirmation(details: SubmissionDetails, now: Optional[datetime] = None) -> RenderedEmail:
    """Confirmation sent to the pilot right after a submission."""
    submitted = format_long_date(_now(now))
    name = escape(details.pilot_name)
    airline = escape(details.airline)
    templates = details.template_names

    position_item = (
        f'<li style="margin: 10px 0;"><strong>Position:</strong> {escape(details.position)}</li>'
        if details.position else ''
    )
    templates_item = (
        f'<li style="margin: 10px 0;"><strong>Selected Templates:</strong> {escape(", ".join(templates))}</li>'
        if templates else ''
    )

    subject = f"Resume Submission Confirmation - {BRAND_NAME}"
    body_html = f"""
<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto; padding: 20px;">
    <div style="text-align: center; margin-bottom: 30px;">
        <h1 style="color: {BRAND_COLOR}; margin: 0;">{BRAND_NAME}</h1>
    </div>

    <h2 style="color: {BRAND_COLOR};">Thank you for your resume submission!</h2>

    <p>Dear <strong>{name}</strong>,</p>

    <p>We have successfully received your resume submission with the following details:</p>

    <div style="background-color: #f8f9fa; padding: 20px; border-radius: 8px; margin: 20px 0;">
        <h3 style="margin-top: 0; color: #333;">Submission Details</h3>
        <ul style="list-style: none; padding: 0;">
            <li style="margin: 10px 0;"><strong>Airline:</strong> {airline}</li>
            {position_item}
            {templates_item}
            <li style="margin: 10px 0;"><strong>Submission Date:</strong> {submitted}</li>
        </ul>
    </div>

    <p>Our expert team will carefully review your application and get back to you soon. We appreciate your interest in working with <strong>{airline}</strong>.</p>

    <div style="background-color: #e7f3ff; padding: 15px; border-radius: 6px; margin: 20px 0;">
        <p style="margin: 0;"><strong>What's Next?</strong></p>
        <p style="margin: 5px 0;">Our team will review your resume and tailor it specifically for your target airline. You can expect to hear from us within 1-2 business days.</p>
    </div>

    <p>If you have any questions or need to make changes to your submission, please don't hesitate to contact us.</p>

    <p>Best regards,<br>
    <strong>The {BRAND_NAME} Team</strong></p>

    <hr style="border: none; border-top: 1px solid #ddd; margin: 30px 0;">
    <p style="font-size: 12px; color: #666; text-align: center;">
        This is an automated confirmation email. Please do not reply to this email.<br>
        For support, please contact us through our website.
    </p>
</div>
    """

    position_text = f" for the position of {details.position}" if details.position else ""
    templates_text = f"\nSelected templates: {', '.join(templates)}" if templates else ""
    body_text = f"""
Thank you for your resume submission!

Dear {details.pilot_name},

We have received your resume submission for {details.airline}{position_text}.{templates_text}
Submission date: {submitted}

Our team will review your application and get back to you soon.

Best regards,
The {BRAND_NAME} Team
    """.strip()

    return RenderedEmail(subject=subject, html=body_html, text=body_text)


# =============================================================================
# ADMIN NOTIFICATION
# =============================================================================

def build_admin_notification(
    details: SubmissionDetails,
    dashboard_base_url: str,
    now: Optional[datetime] = None,
) -> RenderedEmail:
    """Alert sent to the admin inbox for every new submission."""
    moment = _now(now)
    submitted = format_long_datetime(moment)
    review_url = dashboard_link(dashboard_base_url)
    name = escape(details.pilot_name)
    airline = escape(details.airline)
    templates = details.template_names

    position_row = f"""
            <div style="display: flex; align-items: center;">
                <span style="font-weight: bold; color: #666; min-width: 120px;">💼 Position:</span>
                <span style="font-weight: 500; color: #333;">{escape(details.position)}</span>
            </div>""" if details.position else ''
    templates_row = f"""
            <div style="display: flex; align-items: flex-start;">
                <span style="font-weight: bold; color: #666; min-width: 120px;">📄 Templates:</span>
                <span style="color: #333;">{escape(", ".join(templates))}</span>
            </div>""" if templates else ''

    subject = f"🎯 New Resume Submission - {details.pilot_name}"
    body_html = f"""
<div style="font-family: Arial, sans-serif; max-width: 700px; margin: 0 auto; padding: 20px;">
    <div style="background-color: {BRAND_COLOR}; color: white; padding: 20px; border-radius: 10px 10px 0 0;">
        <h1 style="margin: 0; font-size: 24px;">🎯 New Resume Submission</h1>
        <p style="margin: 5px 0 0 0; opacity: 0.9;">Action required - Review and process</p>
    </div>

    <div style="background-color: #fff; border: 1px solid #ddd; border-top: none; border-radius: 0 0 10px 10px; padding: 30px;">
        <div style="background-color: #f8f9fa; padding: 25px; border-radius: 8px; margin-bottom: 25px;">
            <h2 style="margin-top: 0; color: #333; border-bottom: 2px solid {BRAND_COLOR}; padding-bottom: 10px;">Pilot Information</h2>

            <div style="display: flex; align-items: center;">
                <span style="font-weight: bold; color: #666; min-width: 120px;">👤 Name:</span>
                <span style="font-size: 16px; font-weight: 600; color: #333;">{name}</span>
            </div>
            <div style="display: flex; align-items: center;">
                <span style="font-weight: bold; color: #666; min-width: 120px;">📧 Email:</span>
                <span style="color: {BRAND_COLOR}; font-weight: 500;">{escape(details.pilot_email)}</span>
            </div>
            <div style="display: flex; align-items: center;">
                <span style="font-weight: bold; color: #666; min-width: 120px;">✈️ Airline:</span>
                <span style="font-weight: 600; color: #333;">{airline}</span>
            </div>{position_row}{templates_row}
            <div style="display: flex; align-items: center;">
                <span style="font-weight: bold; color: #666; min-width: 120px;">🕐 Submitted:</span>
                <span style="color: #333;">{submitted}</span>
            </div>
        </div>

        <div style="background-color: #fff3cd; border: 1px solid #ffeaa7; padding: 20px; border-radius: 8px; margin: 25px 0;">
            <h3 style="margin-top: 0; color: #856404;">⚡ Quick Actions Required</h3>
            <ul style="margin: 10px 0; padding-left: 20px; color: #856404;">
                <li>Review the pilot's complete resume data</li>
                <li>Generate and customize resume for {airline}</li>
                <li>Update submission status</li>
                <li>Send completed resume to pilot</li>
            </ul>
        </div>

        <div style="text-align: center; margin: 30px 0;">
            <a href="{escape(review_url)}"
               style="background-color: {BRAND_COLOR}; color: white; padding: 15px 30px; text-decoration: none; border-radius: 8px; display: inline-block; font-weight: 600;">
               🚀 Review in Dashboard
            </a>
        </div>
    </div>

    <div style="text-align: center; margin-top: 20px;">
        <p style="font-size: 12px; color: #999;">
            This is an automated notification from the Resume Builder system.<br>
            Generated at {moment.isoformat()}
        </p>
    </div>
</div>
    """

    position_text = f" - Position: {details.position}" if details.position else ""
    templates_text = f"\nTemplates: {', '.join(templates)}" if templates else ""
    body_text = f"""
New Resume Submission from {details.pilot_name} ({details.pilot_email}) for {details.airline}{position_text}.{templates_text}
Submitted on {submitted}.

Please review in the admin dashboard: {review_url}
    """.strip()

    return RenderedEmail(subject=subject, html=body_html, text=body_text)


# =============================================================================
# STATUS UPDATE
# =============================================================================

def status_sentence(status: Union[str, Enum]) -> str:
    """Canned sentence for a submission status; unknown values get a generic one."""
    return STATUS_MESSAGES.get(_status_key(status), DEFAULT_STATUS_MESSAGE)


def build_status_update(
    pilot_name: str,
    status: Union[str, Enum],
    message: Optional[str] = None,
) -> RenderedEmail:
    """Tell a pilot their submission moved to a new state."""
    key = _status_key(status)
    sentence = status_sentence(key)
    status_label = key.replace("_", " ").upper() or "UPDATED"

    notes_html = f"<p><strong>Additional notes:</strong> {escape(message)}</p>" if message else ''

    subject = f"Resume Status Update - {status_label}"
    body_html = f"""
<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto; padding: 20px;">
    <h2 style="color: {BRAND_COLOR};">Resume Status Update</h2>
    <p>Dear {escape(pilot_name)},</p>
    <p>{sentence}</p>
    {notes_html}
    <p>Best regards,<br>
    {BRAND_NAME} Team</p>
</div>
    """

    notes_text = f"\n\nAdditional notes: {message}" if message else ""
    body_text = f"""
Dear {pilot_name},

{sentence}{notes_text}

Best regards,
{BRAND_NAME} Team
    """.strip()

    return RenderedEmail(subject=subject, html=body_html, text=body_text)


# =============================================================================
# ADMIN DIAGNOSTICS
# =============================================================================

def build_test_email(from_email: Optional[str], now: Optional[datetime] = None) -> RenderedEmail:
    """Admin-triggered message proving the delivery pipeline works."""
    sent_at = _now(now).isoformat()
    sender = escape(from_email) if from_email else "Not set"

    subject = f"Test Email - {BRAND_NAME} System"
    body_html = f"""
<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto; padding: 20px;">
    <h2 style="color: {BRAND_COLOR};">🧪 Email System Test</h2>

    <p>This is a test email from the {BRAND_NAME} resume submission system.</p>

    <div style="background-color: #f0f9ff; padding: 15px; border-radius: 8px; margin: 20px 0;">
        <h3 style="margin-top: 0;">Test Details</h3>
        <ul>
            <li><strong>Sent at:</strong> {sent_at}</li>
            <li><strong>From:</strong> {sender}</li>
            <li><strong>System:</strong> Resume Builder Email Notifications</li>
        </ul>
    </div>

    <p>If you received this email, your SendGrid configuration is working correctly! ✅</p>

    <hr style="border: none; border-top: 1px solid #ddd; margin: 20px 0;">
    <p style="font-size: 12px; color: #666;">
        This is a test email from the admin panel.
    </p>
</div>
    """
    body_text = (
        f"This is a test email from the {BRAND_NAME} resume submission system. "
        f"Sent at {sent_at}. If you received this email, your SendGrid configuration is working correctly!"
    )
    return RenderedEmail(subject=subject, html=body_html, text=body_text)


def build_debug_email(
    from_email: Optional[str],
    from_name: Optional[str],
    api_key_length: int,
    now: Optional[datetime] = None,
) -> RenderedEmail:
    """
    Configuration report for the debug endpoint.

    Only the length of the API key is reported, never its value.
    """
    sent_at = _now(now).isoformat()

    subject = "🔧 SendGrid Debug Test"
    body_html = f"""
<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto; padding: 20px;">
    <h2 style="color: {BRAND_COLOR};">🔧 SendGrid Debug Test</h2>

    <p>This is a debug test email to verify SendGrid configuration.</p>

    <div style="background-color: #f0f9ff; padding: 15px; border-radius: 8px; margin: 20px 0;">
        <h3 style="margin-top: 0;">Configuration Details</h3>
        <ul>
            <li><strong>From Email:</strong> {escape(from_email) if from_email else "Not set"}</li>
            <li><strong>From Name:</strong> {escape(from_name) if from_name else "Default"}</li>
            <li><strong>Test Time:</strong> {sent_at}</li>
            <li><strong>API Key Length:</strong> {api_key_length} characters</li>
        </ul>
    </div>

    <p>If you received this email, your basic SendGrid setup is working! ✅</p>
</div>
    """
    body_text = f"SendGrid Debug Test - Sent at {sent_at}"
    return RenderedEmail(subject=subject, html=body_html, text=body_text)
