"""Application settings using Pydantic Settings.

Centralized configuration for the resume submission service.

Email delivery is configured through the SENDGRID_* variables:
- SENDGRID_API_KEY: SendGrid API key (required for delivery)
- SENDGRID_FROM_EMAIL: Verified sender address (required for delivery)
- SENDGRID_FROM_NAME: Sender display name (optional)

Missing email settings never stop the application; sends fail with a
structured result instead.
"""

import logging
from functools import lru_cache
from typing import List, Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

DEFAULT_FROM_NAME = "Spitfire Elite Aviation"
DEFAULT_ADMIN_EMAIL = "admin@spitfirepremier.com"
DEFAULT_PUBLIC_URL = "https://dashboard.spitfirepremier.com"


class SendGridSettings(BaseSettings):
    """SendGrid delivery configuration."""

    model_config = SettingsConfigDict(
        env_prefix="SENDGRID_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    api_key: Optional[str] = Field(default=None, description="SendGrid API key")
    from_email: Optional[str] = Field(default=None, description="Verified sender address")
    from_name: Optional[str] = Field(default=None, description="Sender display name")

    @property
    def sender_name(self) -> str:
        """Display name used on outgoing mail."""
        return self.from_name or DEFAULT_FROM_NAME


class NotificationSettings(BaseSettings):
    """Recipients and links used by the notification templates."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    admin_email: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("ADMIN_EMAIL", "admin_email"),
        description="Address that receives new-submission alerts",
    )
    app_public_url: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("APP_PUBLIC_URL", "app_public_url"),
        description="Public base URL of the admin dashboard",
    )

    @property
    def admin_recipient(self) -> str:
        return self.admin_email or DEFAULT_ADMIN_EMAIL

    @property
    def dashboard_base_url(self) -> str:
        return (self.app_public_url or DEFAULT_PUBLIC_URL).rstrip("/")


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="APP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # Application info
    name: str = Field(default="Resume Submission Service", description="Application name")
    version: str = Field(default="1.0.0", description="Application version")
    debug: bool = Field(default=False, description="Debug mode")
    environment: str = Field(default="development", description="Environment name")
    log_level: str = Field(default="INFO", description="Root log level")

    # CORS
    cors_origins: List[str] = Field(
        default=["http://localhost:3000"],
        description="Allowed CORS origins"
    )

    # Authentication
    # CRITICAL: Must be set via JWT_SECRET in production
    jwt_secret: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("JWT_SECRET", "jwt_secret"),
        description="HS256 signing key for bearer tokens",
    )
    jwt_algorithm: str = Field(default="HS256", description="JWT signing algorithm")

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment in ("production", "prod", "staging")

    def validate_production_security(self) -> List[str]:
        """
        Validate security requirements for production.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []

        if not self.is_production:
            return errors

        if not self.jwt_secret:
            errors.append(
                "JWT_SECRET: Required in production. "
                "Generate with: python -c \"import secrets; print(secrets.token_hex(32))\""
            )
        elif len(self.jwt_secret) < 32:
            errors.append("JWT_SECRET: Must be at least 32 characters")

        return errors


@lru_cache
def get_settings() -> Settings:
    """
    Get cached application settings instance.

    Returns:
        Settings: Cached settings loaded from environment.
    """
    return Settings()


def get_sendgrid_settings() -> SendGridSettings:
    """SendGrid settings, read from the environment on every call."""
    return SendGridSettings()


def get_notification_settings() -> NotificationSettings:
    """Notification settings, read from the environment on every call."""
    return NotificationSettings()
