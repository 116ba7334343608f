"""Tests for application wiring: health, request IDs and error envelopes."""

import logging

from fastapi.testclient import TestClient

from middleware.correlation import RequestIdFilter, get_request_id, set_request_id
from web.app import configure_logging


class TestHealth:
    """GET /health."""

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


class TestRequestId:
    """X-Request-ID handling."""

    def test_generated_when_absent(self, client):
        response = client.get("/health")

        assert response.headers["X-Request-ID"]

    def test_echoed_when_present(self, client):
        response = client.get("/health", headers={"X-Request-ID": "req-123"})

        assert response.headers["X-Request-ID"] == "req-123"

    def test_filter_adds_request_id(self):
        record = logging.LogRecord("test", logging.INFO, __file__, 1, "message", None, None)
        token = set_request_id("req-456")
        try:
            RequestIdFilter().filter(record)
        finally:
            from middleware.correlation import reset_request_id
            reset_request_id(token)

        assert record.request_id == "req-456"
        assert get_request_id() is None

    def test_configure_logging_installs_once(self):
        configure_logging("INFO")
        configure_logging("INFO")

        root = logging.getLogger()
        installed = [h for h in root.handlers if any(isinstance(f, RequestIdFilter) for f in h.filters)]
        assert len(installed) == 1


class TestErrorEnvelope:
    """Framework errors use the API error shape."""

    def test_unknown_route(self, client):
        response = client.get("/api/does-not-exist")

        assert response.status_code == 404
        assert response.json()["success"] is False

    def test_invalid_json_is_400(self, client, user_headers):
        response = client.post(
            "/api/submission",
            content=b"{not json",
            headers={**user_headers, "Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json()["success"] is False

    def test_unhandled_exception_is_500(self, app, user_headers):
        from web.dependencies import get_submission_repository

        class BrokenRepository:
            def list_for_user(self, user_id):
                raise RuntimeError("database unavailable")

        app.dependency_overrides[get_submission_repository] = lambda: BrokenRepository()
        client = TestClient(app, raise_server_exceptions=False)

        response = client.get("/api/submission", headers=user_headers)

        assert response.status_code == 500
        assert response.json() == {"success": False, "error": "database unavailable"}
