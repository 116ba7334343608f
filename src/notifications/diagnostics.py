"""Configuration report for the admin email debug endpoint."""

from typing import Dict

from config.settings import NotificationSettings, SendGridSettings

NOT_SET = "Not set"


def sendgrid_env_check(sendgrid: SendGridSettings, notifications: NotificationSettings) -> Dict[str, str]:
    """
    Summarize which email settings are present.

    The API key is reported as Set/Not set only.
    """
    return {
        "SENDGRID_API_KEY": "Set" if sendgrid.api_key else NOT_SET,
        "SENDGRID_FROM_EMAIL": sendgrid.from_email or NOT_SET,
        "SENDGRID_FROM_NAME": sendgrid.from_name or NOT_SET,
        "ADMIN_EMAIL": notifications.admin_email or NOT_SET,
    }


def api_key_length(sendgrid: SendGridSettings) -> int:
    return len(sendgrid.api_key or "")
