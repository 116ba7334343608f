"""
Tests for the submission API routes.

Covers:
- GET /api/submission
- POST /api/submission
"""

import pytest

from database.models import ResumeRecord, SubmissionRecord, SubmissionState
from web.dependencies import get_resume_mapper


class TestAuthentication:
    """Anonymous and invalid callers are rejected."""

    def test_list_requires_user(self, client):
        response = client.get("/api/submission")

        assert response.status_code == 401
        assert response.json() == {"success": False, "error": "User not found"}

    def test_create_requires_user(self, client):
        response = client.post("/api/submission", json={"submission": {"airline": "Delta"}})

        assert response.status_code == 401
        assert response.json()["error"] == "User not found"

    def test_invalid_token_is_anonymous(self, client):
        response = client.get("/api/submission", headers={"Authorization": "Bearer not-a-jwt"})

        assert response.status_code == 401


class TestCreateSubmission:
    """POST /api/submission."""

    def test_state_is_always_needs_review(self, client, user_headers, db_session):
        response = client.post(
            "/api/submission",
            json={"submission": {"resumeId": 1, "airline": "Delta", "state": "approved_and_sent"}},
            headers=user_headers,
        )

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["submission"]["state"] == "needs_review"
        assert body["submission"]["userId"] == "user-1"
        assert body["submission"]["resumeId"] == 1
        assert "notifications" not in body

        stored = db_session.get(SubmissionRecord, body["submission"]["id"])
        assert stored.state == SubmissionState.NEEDS_REVIEW

    def test_caller_owns_submission(self, client, user_headers):
        response = client.post(
            "/api/submission",
            json={"submission": {"airline": "Delta", "userId": "someone-else"}},
            headers=user_headers,
        )

        assert response.json()["submission"]["userId"] == "user-1"

    def test_missing_submission(self, client, user_headers):
        response = client.post("/api/submission", json={}, headers=user_headers)

        assert response.status_code == 400
        assert response.json() == {"success": False, "error": "Missing submission data"}

    def test_empty_submission(self, client, user_headers):
        response = client.post("/api/submission", json={"submission": {}}, headers=user_headers)

        assert response.status_code == 400

    def test_malformed_submission(self, client, user_headers):
        response = client.post("/api/submission", json={"submission": "Delta"}, headers=user_headers)

        assert response.status_code == 400
        assert response.json()["success"] is False

    @pytest.mark.parametrize(
        "submission",
        [
            {"airline": ["Delta"]},
            {"airline": 42},
            {"airline": "Delta", "resumeId": "abc"},
            {"airline": "Delta", "position": {"rank": "Captain"}},
            {"airline": "Delta", "selectedTemplates": "Modern"},
            {"airline": "Delta", "selectedTemplates": [1, 2]},
        ],
    )
    def test_wrongly_typed_fields(self, client, user_headers, db_session, submission):
        response = client.post("/api/submission", json={"submission": submission}, headers=user_headers)

        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert "INSERT" not in body["error"]
        assert db_session.query(SubmissionRecord).count() == 0

    def test_unknown_keys_only(self, client, user_headers):
        response = client.post(
            "/api/submission",
            json={"submission": {"state": "processing", "userId": "someone-else"}},
            headers=user_headers,
        )

        assert response.status_code == 400
        assert response.json()["error"] == "Missing submission data"

    def test_numeric_resume_id_string_is_coerced(self, client, user_headers, db_session):
        response = client.post(
            "/api/submission",
            json={"submission": {"airline": "Delta", "resumeId": "7"}},
            headers=user_headers,
        )

        assert response.status_code == 200
        stored = db_session.get(SubmissionRecord, response.json()["submission"]["id"])
        assert stored.resume_id == 7

    def test_missing_airline(self, client, user_headers, db_session):
        response = client.post("/api/submission", json={"submission": {"resumeId": 1}}, headers=user_headers)

        assert response.status_code == 400
        assert db_session.query(SubmissionRecord).count() == 0

    def test_notifications_sent_when_pilot_given(self, client, user_headers, fake_sendgrid, sendgrid_env):
        response = client.post(
            "/api/submission",
            json={
                "submission": {"airline": "Delta", "position": "Captain", "selectedTemplates": ["Modern"]},
                "pilotName": "Amelia Earhart",
                "pilotEmail": "amelia@example.com",
            },
            headers=user_headers,
        )

        assert response.status_code == 200
        assert response.json()["notifications"] == {
            "success": True,
            "pilotEmailSent": True,
            "adminEmailSent": True,
            "errors": [],
        }
        assert fake_sendgrid.recipients() == ["amelia@example.com", "ops@spitfire-test.com"]

    def test_notification_failure_keeps_status(self, client, user_headers, fake_sendgrid):
        response = client.post(
            "/api/submission",
            json={
                "submission": {"airline": "Delta"},
                "pilotName": "Amelia Earhart",
                "pilotEmail": "not-an-email",
            },
            headers=user_headers,
        )

        assert response.status_code == 200
        assert response.json()["notifications"]["success"] is False
        assert response.json()["notifications"]["errors"] == ["Invalid email format"]
        assert fake_sendgrid.sent == []


class TestListSubmissions:
    """GET /api/submission."""

    def test_lists_own_rows_with_resume(self, client, user_headers, db_session):
        resume = ResumeRecord(user_id="user-1", resume_data={"name": "Amelia", "hours": 1200})
        db_session.add(resume)
        db_session.flush()
        db_session.add_all([
            SubmissionRecord(user_id="user-1", resume_id=resume.id, airline="Delta"),
            SubmissionRecord(user_id="user-1", resume_id=999, airline="United"),
            SubmissionRecord(user_id="user-2", airline="Alaska"),
        ])
        db_session.commit()

        response = client.get("/api/submission", headers=user_headers)

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        by_airline = {row["submission"]["airline"]: row for row in body["submissions"]}
        assert set(by_airline) == {"Delta", "United"}
        assert by_airline["Delta"]["resume"] == {"name": "Amelia", "hours": 1200}
        assert by_airline["United"]["resume"] is None

    def test_resume_mapper_is_injectable(self, app, client, user_headers, db_session):
        resume = ResumeRecord(user_id="user-1", resume_data={"name": "Amelia"})
        db_session.add(resume)
        db_session.flush()
        db_session.add(SubmissionRecord(user_id="user-1", resume_id=resume.id, airline="Delta"))
        db_session.commit()

        app.dependency_overrides[get_resume_mapper] = lambda: (lambda data: {"mapped": data["name"]})

        response = client.get("/api/submission", headers=user_headers)

        assert response.json()["submissions"][0]["resume"] == {"mapped": "Amelia"}

    def test_empty_list(self, client, user_headers):
        response = client.get("/api/submission", headers=user_headers)

        assert response.json() == {"success": True, "submissions": []}
