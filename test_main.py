# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false

"""
Tests for the StudyPilot Planner HTTP API.
Every test builds its own application over fresh in-memory storage.
"""

from datetime import date
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from main import create_app
from studypilot.core.config import settings
from studypilot.core.errors import InvalidArgument
from studypilot.repositories.storage import MemoryStorage

TEACHER = {"email": "teacher@studypilot.com", "password": "password123"}


# ============================================
# Fixtures
# ============================================
@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def client(storage):
    with TestClient(create_app(storage)) as test_client:
        yield test_client


@pytest.fixture
def auth_client(client):
    response = client.post("/api/v1/auth/login", json=TEACHER)
    assert response.status_code == 200
    return client


# ============================================
# Health & Metrics
# ============================================
class TestHealth:
    def test_health_returns_ok(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert data["service"] == settings.SERVICE_NAME
        assert "timestamp" in data

    def test_health_counts_notes(self, auth_client):
        assert auth_client.get("/health").json()["notes_count"] == 0
        auth_client.post(
            "/api/v1/notes",
            json={"gradeId": 2, "topic": "Plants", "content": "Roots", "type": "explanation"},
        )
        assert auth_client.get("/health").json()["notes_count"] == 1

    def test_readiness(self, client):
        response = client.get("/health/ready")
        assert response.status_code == 200
        assert response.json()["status"] == "ready"

    def test_readiness_storage_down(self, client, storage):
        with patch.object(storage, "verify", side_effect=RuntimeError("gone")):
            response = client.get("/health/ready")
        assert response.status_code == 503


class TestRequestID:
    def test_response_has_request_id_header(self, client):
        assert "X-Request-ID" in client.get("/health").headers

    def test_request_id_propagated(self, client):
        response = client.get("/health", headers={"X-Request-ID": "req-42"})
        assert response.headers["X-Request-ID"] == "req-42"


class TestMetrics:
    def test_metrics_exposes_planner_counters(self, auth_client):
        auth_client.post("/api/v1/schedule/daily/reset")
        text = auth_client.get("/metrics").text
        assert "studypilot_requests_total" in text
        assert "studypilot_schedule_resets_total" in text
        assert "studypilot_login_attempts_total" in text


# ============================================
# Auth
# ============================================
class TestAuth:
    def test_login(self, client):
        response = client.post("/api/v1/auth/login", json=TEACHER)
        assert response.status_code == 200
        assert response.json()["user"]["name"] == "Priya Sharma"

    def test_login_unknown_email(self, client):
        response = client.post("/api/v1/auth/login", json={"email": "x@y.z", "password": "p"})
        assert response.status_code == 401
        assert "No account found" in response.json()["detail"]

    def test_login_wrong_password(self, client):
        response = client.post(
            "/api/v1/auth/login", json={"email": TEACHER["email"], "password": "nope"}
        )
        assert response.status_code == 401
        assert "Incorrect password" in response.json()["detail"]

    def test_login_missing_fields(self, client):
        assert client.post("/api/v1/auth/login", json={}).status_code == 422

    def test_me_requires_login(self, client):
        assert client.get("/api/v1/auth/me").status_code == 401

    def test_me_after_login(self, auth_client):
        assert auth_client.get("/api/v1/auth/me").json()["email"] == TEACHER["email"]

    def test_logout(self, auth_client):
        assert auth_client.post("/api/v1/auth/logout").status_code == 200
        assert auth_client.get("/api/v1/schedule/daily").status_code == 401


# ============================================
# Schedule gate
# ============================================
class TestOwnerGate:
    @pytest.mark.parametrize(
        "method,path",
        [
            ("get", "/api/v1/schedule/daily"),
            ("get", "/api/v1/schedule/weekly"),
            ("post", "/api/v1/schedule/daily/reset"),
            ("get", "/api/v1/schedule/today"),
            ("get", "/api/v1/notes"),
        ],
    )
    def test_requires_signed_in_teacher(self, client, method, path):
        assert getattr(client, method)(path).status_code == 401

    def test_gate_follows_session_state(self, auth_client):
        assert auth_client.get("/api/v1/schedule/daily").status_code == 200
        auth_client.post("/api/v1/auth/logout")
        assert auth_client.get("/api/v1/schedule/daily").status_code == 401

    def test_daily_update_type_error_is_bad_request(self, auth_client):
        store = auth_client.app.state.schedule_store
        with patch.object(store, "update_daily_period", side_effect=InvalidArgument("bad type")):
            response = auth_client.patch(
                "/api/v1/schedule/daily/periods/daily-period-1", json={"subject": "Art"}
            )
        assert response.status_code == 400


# ============================================
# Daily schedule
# ============================================
class TestDailySchedule:
    def test_get_default(self, auth_client):
        data = auth_client.get("/api/v1/schedule/daily").json()
        assert len(data) == 8
        assert data[0] == {
            "id": "daily-period-1",
            "periodNumber": 1,
            "gradeId": None,
            "subject": "",
            "topic": "",
        }

    def test_patch_period(self, auth_client, storage):
        response = auth_client.patch(
            "/api/v1/schedule/daily/periods/daily-period-2",
            json={"gradeId": 7, "subject": "Biology"},
        )
        assert response.status_code == 200
        data = response.json()
        assert data[1]["gradeId"] == 7
        assert data[1]["subject"] == "Biology"
        assert data[0]["subject"] == ""
        assert storage.get("schedule.daily") is not None

    def test_patch_snake_case_body(self, auth_client):
        data = auth_client.patch(
            "/api/v1/schedule/daily/periods/daily-period-1", json={"grade_id": 2}
        ).json()
        assert data[0]["gradeId"] == 2

    def test_patch_null_grade_unassigns(self, auth_client):
        auth_client.patch("/api/v1/schedule/daily/periods/daily-period-1", json={"gradeId": 4})
        data = auth_client.patch(
            "/api/v1/schedule/daily/periods/daily-period-1", json={"gradeId": None}
        ).json()
        assert data[0]["gradeId"] is None

    def test_patch_omitted_fields_untouched(self, auth_client):
        auth_client.patch(
            "/api/v1/schedule/daily/periods/daily-period-3",
            json={"gradeId": 4, "subject": "Art"},
        )
        data = auth_client.patch(
            "/api/v1/schedule/daily/periods/daily-period-3", json={"topic": "Colour"}
        ).json()
        assert data[2]["gradeId"] == 4
        assert data[2]["subject"] == "Art"
        assert data[2]["topic"] == "Colour"

    @pytest.mark.parametrize("grade", [0, 13])
    def test_patch_rejects_grade_out_of_range(self, auth_client, grade):
        response = auth_client.patch(
            "/api/v1/schedule/daily/periods/daily-period-1", json={"gradeId": grade}
        )
        assert response.status_code == 422

    def test_patch_unknown_id_is_noop(self, auth_client):
        before = auth_client.get("/api/v1/schedule/daily").json()
        response = auth_client.patch(
            "/api/v1/schedule/daily/periods/bad-id", json={"subject": "X"}
        )
        assert response.status_code == 200
        assert response.json() == before

    def test_reset(self, auth_client):
        auth_client.patch("/api/v1/schedule/daily/periods/daily-period-1", json={"gradeId": 4})
        data = auth_client.post("/api/v1/schedule/daily/reset").json()
        assert len(data) == 8
        assert all(p["gradeId"] is None for p in data)
        assert data[0]["id"] != "daily-period-1"

    def test_stats(self, auth_client):
        auth_client.patch("/api/v1/schedule/daily/periods/daily-period-1", json={"gradeId": 4, "subject": "Math"})
        auth_client.patch("/api/v1/schedule/daily/periods/daily-period-2", json={"gradeId": 6, "subject": "Math"})
        stats = auth_client.get("/api/v1/schedule/daily/stats").json()
        assert stats == {"classesScheduled": 2, "uniqueGrades": 2, "subjects": 1, "freePeriods": 6}


# ============================================
# Weekly schedule
# ============================================
class TestWeeklySchedule:
    def test_get_default(self, auth_client):
        data = auth_client.get("/api/v1/schedule/weekly").json()
        assert sorted(data) == sorted(
            ["monday", "tuesday", "wednesday", "thursday", "friday", "saturday"]
        )
        assert data["monday"][0]["id"] == "monday-period-1"

    def test_patch_one_day(self, auth_client):
        before = auth_client.get("/api/v1/schedule/weekly").json()
        after = auth_client.patch(
            "/api/v1/schedule/weekly/monday/periods/monday-period-1",
            json={"gradeId": 5, "subject": "Math"},
        ).json()
        assert after["monday"][0]["gradeId"] == 5
        for day in ("tuesday", "wednesday", "thursday", "friday", "saturday"):
            assert after[day] == before[day]

    def test_monday_stats_scenario(self, auth_client):
        for n in (1, 2):
            auth_client.patch(
                f"/api/v1/schedule/weekly/monday/periods/monday-period-{n}",
                json={"gradeId": 5, "subject": "Math"},
            )
        stats = auth_client.get("/api/v1/schedule/weekly/monday/stats").json()
        assert stats == {"classesScheduled": 2, "uniqueGrades": 1, "subjects": 1, "freePeriods": 6}

    def test_sunday_is_rejected(self, auth_client):
        response = auth_client.patch(
            "/api/v1/schedule/weekly/sunday/periods/monday-period-1", json={"subject": "X"}
        )
        assert response.status_code == 400
        assert "sunday" in response.json()["detail"]

    def test_sunday_stats_rejected(self, auth_client):
        assert auth_client.get("/api/v1/schedule/weekly/sunday/stats").status_code == 400

    def test_unknown_id_is_noop(self, auth_client):
        before = auth_client.get("/api/v1/schedule/weekly").json()
        after = auth_client.patch(
            "/api/v1/schedule/weekly/tuesday/periods/bad-id", json={"subject": "X"}
        ).json()
        assert after == before

    def test_all_day_stats(self, auth_client):
        stats = auth_client.get("/api/v1/schedule/weekly/stats").json()
        assert len(stats) == 6
        assert stats["saturday"]["freePeriods"] == 8

    def test_reset(self, auth_client):
        auth_client.patch(
            "/api/v1/schedule/weekly/friday/periods/friday-period-8", json={"gradeId": 11}
        )
        data = auth_client.post("/api/v1/schedule/weekly/reset").json()
        assert data["friday"][7]["gradeId"] is None
        assert data["friday"][7]["id"] != "friday-period-8"

    def test_state_survives_app_restart(self, storage):
        with TestClient(create_app(storage)) as first:
            first.post("/api/v1/auth/login", json=TEACHER)
            first.patch(
                "/api/v1/schedule/weekly/thursday/periods/thursday-period-4",
                json={"topic": "Photosynthesis"},
            )
        with TestClient(create_app(storage)) as second:
            data = second.get("/api/v1/schedule/weekly").json()
        assert data["thursday"][3]["topic"] == "Photosynthesis"


class TestToday:
    def test_weekday(self, auth_client):
        with patch("studypilot.controllers.schedule_controller.date") as mock_date:
            mock_date.today.return_value = date(2026, 10, 21)
            data = auth_client.get("/api/v1/schedule/today").json()
        assert data["weekday"] == "wednesday"
        assert data["periods"][0]["id"] == "wednesday-period-1"
        assert data["stats"]["freePeriods"] == 8

    def test_sunday_has_no_teaching_day(self, auth_client):
        with patch("studypilot.controllers.schedule_controller.date") as mock_date:
            mock_date.today.return_value = date(2026, 10, 18)
            data = auth_client.get("/api/v1/schedule/today").json()
        assert data == {"weekday": None, "periods": None, "stats": None}


# ============================================
# Notes
# ============================================
class TestNotes:
    NOTE = {"gradeId": 4, "topic": "Fractions", "content": "# Plan", "type": "lesson-plan"}

    def test_create_and_list(self, auth_client):
        response = auth_client.post("/api/v1/notes", json=self.NOTE)
        assert response.status_code == 201
        created = response.json()
        assert created["id"].startswith("note-")
        listed = auth_client.get("/api/v1/notes").json()
        assert [n["id"] for n in listed] == [created["id"]]

    def test_filter_by_grade(self, auth_client):
        auth_client.post("/api/v1/notes", json=self.NOTE)
        auth_client.post("/api/v1/notes", json={**self.NOTE, "gradeId": 9})
        listed = auth_client.get("/api/v1/notes", params={"grade_id": 9}).json()
        assert [n["gradeId"] for n in listed] == [9]

    def test_invalid_type(self, auth_client):
        response = auth_client.post("/api/v1/notes", json={**self.NOTE, "type": "essay"})
        assert response.status_code == 422

    def test_invalid_grade(self, auth_client):
        response = auth_client.post("/api/v1/notes", json={**self.NOTE, "gradeId": 13})
        assert response.status_code == 422

    def test_delete(self, auth_client):
        note_id = auth_client.post("/api/v1/notes", json=self.NOTE).json()["id"]
        response = auth_client.delete(f"/api/v1/notes/{note_id}")
        assert response.status_code == 200
        assert auth_client.get("/api/v1/notes").json() == []

    def test_delete_unknown(self, auth_client):
        assert auth_client.delete("/api/v1/notes/note-missing").status_code == 404
