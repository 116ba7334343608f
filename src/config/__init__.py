"""Configuration module for the resume submission service."""

from .database import DatabaseSettings, get_database_settings
from .settings import (
    NotificationSettings,
    SendGridSettings,
    Settings,
    get_notification_settings,
    get_sendgrid_settings,
    get_settings,
)

__all__ = [
    "DatabaseSettings",
    "get_database_settings",
    "NotificationSettings",
    "SendGridSettings",
    "Settings",
    "get_notification_settings",
    "get_sendgrid_settings",
    "get_settings",
]
