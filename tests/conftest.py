"""Pytest configuration and fixtures for test suite."""

import os
import sys
from pathlib import Path
from types import SimpleNamespace
from typing import Any, Dict, List, Optional

import pytest

# Set test environment BEFORE any other imports
os.environ.setdefault("APP_ENVIRONMENT", "test")
os.environ.setdefault("JWT_SECRET", "test-jwt-secret-0123456789abcdef0123456789")

# Add src to path for imports
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from database.connection import get_session
from database.models import Base
from notifications import SendGridProvider

# Email settings that individual tests opt into with monkeypatch
EMAIL_ENV_VARS = (
    "SENDGRID_API_KEY",
    "SENDGRID_FROM_EMAIL",
    "SENDGRID_FROM_NAME",
    "ADMIN_EMAIL",
    "APP_PUBLIC_URL",
)

TEST_API_KEY = "SG.test_api_key_value"
TEST_FROM_EMAIL = "noreply@spitfire-test.com"
TEST_ADMIN_EMAIL = "ops@spitfire-test.com"


# =============================================================================
# FAKE SENDGRID CLIENT
# =============================================================================

class FakeSendGridClient:
    """
    Stands in for SendGridAPIClient and records every Mail it is given.

    Queue responses or exceptions with respond_with / fail_with; the
    default answer is a 202 with an X-Message-Id header.
    """

    def __init__(self):
        self.sent: List[Any] = []
        self._outcomes: List[Any] = []

    def respond_with(self, status_code: int = 202, headers: Optional[Dict[str, str]] = None, body: bytes = b""):
        self._outcomes.append(SimpleNamespace(status_code=status_code, headers=headers or {}, body=body))

    def fail_with(self, error: Exception):
        self._outcomes.append(error)

    def send(self, mail):
        self.sent.append(mail)
        if self._outcomes:
            outcome = self._outcomes.pop(0)
        else:
            outcome = SimpleNamespace(
                status_code=202,
                headers={"X-Message-Id": f"msg-{len(self.sent)}"},
                body=b"",
            )
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    @property
    def payloads(self) -> List[Dict[str, Any]]:
        """JSON bodies as SendGrid would receive them."""
        return [mail.get() for mail in self.sent]

    def recipients(self) -> List[str]:
        return [p["personalizations"][0]["to"][0]["email"] for p in self.payloads]


# =============================================================================
# ENVIRONMENT
# =============================================================================

@pytest.fixture(autouse=True)
def clean_email_env(monkeypatch):
    """Start every test without email configuration."""
    for name in EMAIL_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    yield


@pytest.fixture
def sendgrid_env(monkeypatch):
    """Fully configured SendGrid environment."""
    monkeypatch.setenv("SENDGRID_API_KEY", TEST_API_KEY)
    monkeypatch.setenv("SENDGRID_FROM_EMAIL", TEST_FROM_EMAIL)
    monkeypatch.setenv("SENDGRID_FROM_NAME", "Spitfire Test")
    monkeypatch.setenv("ADMIN_EMAIL", TEST_ADMIN_EMAIL)
    monkeypatch.setenv("APP_PUBLIC_URL", "https://dashboard.spitfire-test.com/")


# =============================================================================
# DATABASE
# =============================================================================

@pytest.fixture
def db_engine():
    """In-memory SQLite shared across threads for the TestClient."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return sessionmaker(bind=db_engine, expire_on_commit=False, autoflush=False)


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    yield session
    session.close()


# =============================================================================
# APPLICATION
# =============================================================================

@pytest.fixture
def fake_sendgrid():
    return FakeSendGridClient()


@pytest.fixture
def email_provider(fake_sendgrid):
    """SendGrid provider wired to the recording fake."""
    return SendGridProvider(
        api_key=TEST_API_KEY,
        from_email=TEST_FROM_EMAIL,
        from_name="Spitfire Test",
        client=fake_sendgrid,
    )


@pytest.fixture
def app(session_factory, email_provider):
    from web.app import create_app

    application = create_app()

    def _override_session():
        session = session_factory()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    application.dependency_overrides[get_session] = _override_session
    application.state.email_provider = email_provider
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
def client(app):
    return TestClient(app)


# =============================================================================
# AUTH HELPERS
# =============================================================================

def bearer_headers(user_id: str = "user-1", email: str = "pilot@example.com", level: str = "basic") -> Dict[str, str]:
    """Authorization header carrying a signed access token."""
    from rbac.jwt import create_access_token

    token = create_access_token(user_id=user_id, email=email, level=level)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def user_headers():
    return bearer_headers()


@pytest.fixture
def admin_headers():
    return bearer_headers(user_id="admin-1", email="admin@example.com", level="admin")


@pytest.fixture
def make_headers():
    return bearer_headers
