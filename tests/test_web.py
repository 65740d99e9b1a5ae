"""Tests for the JSON API."""

import pytest
from fastapi.testclient import TestClient

from health_tracker.web import create_app

DAYS = [["squat", "bench", "row"], ["deadlift", "ohp", "pullup"]]


@pytest.fixture
def client():
    """Create a test client with the lifespan running."""
    with TestClient(create_app()) as client:
        yield client


class TestHealth:
    """Tests for the health endpoint."""

    def test_health(self, client):
        """Test health check."""
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


class TestJournalRoutes:
    """Tests for journal routes."""

    def test_save_and_get(self, client):
        """Test saving a daily log and reading it back."""
        response = client.put(
            "/journals/2024-03-01", json={"daily": {"weight": 80, "protein": "150"}}
        )

        assert response.status_code == 200
        assert response.json()["completion"] == 22

        data = client.get("/journals/2024-03-01").json()
        assert data["daily"] == {"weight": 80.0, "protein": 150.0}
        assert client.app.state.context.selected_date == "2024-03-01"
        assert "2024-03-01" in client.app.state.context.journal_dates

    def test_sections_kept(self, client):
        """Test sections left out of an update are kept."""
        client.put("/journals/2024-03-01", json={"daily": {"weight": 80}})
        client.put("/journals/2024-03-01", json={"notes": "Tired"})

        data = client.get("/journals/2024-03-01").json()
        assert data["daily"] == {"weight": 80.0}
        assert data["notes"] == "Tired"

    def test_invalid_value(self, client):
        """Test negative values are rejected."""
        response = client.put("/journals/2024-03-01", json={"daily": {"weight": -1}})

        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid value for weight"

    def test_empty_date(self, client):
        """Test an unrecorded date returns an empty shell."""
        data = client.get("/journals/2024-03-09").json()

        assert data["date"] == "2024-03-09"
        assert data["daily"] is None
        assert data["completion"] == 0

    @pytest.mark.parametrize("key", ["2024-3-9", "not-a-date"])
    def test_malformed_date(self, client, key):
        """Test journals can only be keyed by YYYY-MM-DD dates."""
        response = client.put(f"/journals/{key}", json={"daily": {"weight": 80}})

        assert response.status_code == 400
        assert "expected YYYY-MM-DD" in response.json()["detail"]
        assert client.get("/journals").json() == []

    def test_month_dates(self, client):
        """Test listing dates with journals."""
        client.put("/journals/2024-03-01", json={"notes": "a"})
        client.put("/journals/2024-04-01", json={"notes": "b"})

        assert client.get("/journals/dates", params={"year": 2024, "month": 3}).json() == [
            "2024-03-01"
        ]


class TestProgramRoutes:
    """Tests for program routes."""

    def test_create_and_activate(self, client):
        """Test creating and following a program."""
        response = client.post("/programs", json={"name": "Upper/Lower", "days": DAYS})
        assert response.status_code == 201
        program_id = response.json()["id"]

        assert client.get(f"/programs/{program_id}").json()["name"] == "Upper/Lower"
        assert client.put("/programs/active", json={"programId": program_id}).status_code == 200

        active = client.get("/programs/active").json()
        assert active["program"]["id"] == program_id
        assert active["nextDay"] == 1

    def test_rotation(self, client):
        """Test the next day follows the logged workouts."""
        program_id = client.post("/programs", json={"name": "P", "days": DAYS}).json()["id"]
        client.put(
            "/journals/2024-03-01",
            json={"workout": {"programId": program_id, "dayNumber": 1, "exercises": []}},
        )

        response = client.get(f"/programs/{program_id}/next-day", params={"date": "2024-03-02"})

        assert response.json()["dayNumber"] == 2

    def test_invalid_program(self, client):
        """Test validation errors map to 400."""
        response = client.post("/programs", json={"name": "Bad", "days": [["a", "b"]]})

        assert response.status_code == 400
        assert response.json()["detail"] == "Each day must have 3-6 exercises"

    def test_missing_program(self, client):
        """Test unknown programs map to 404."""
        assert client.get("/programs/nope").status_code == 404
        assert client.put("/programs/active", json={"programId": "nope"}).status_code == 404


class TestGoalRoutes:
    """Tests for goal routes."""

    def test_goal_completes(self, client):
        """Test a reached goal is reported and completed."""
        client.put("/journals/2024-03-01", json={"daily": {"weight": 80}})
        goal = client.post(
            "/goals", json={"metric": "weight", "target": 85, "direction": "decrease"}
        ).json()

        results = client.get("/goals").json()

        assert results[0]["id"] == goal["id"]
        assert results[0]["progress"] == 100
        assert results[0]["displayCurrent"] == "80.0kg"
        assert [g["id"] for g in client.get("/goals/completed").json()] == [goal["id"]]
        assert client.get("/goals").json() == []

    def test_reopen(self, client):
        """Test completing and reopening a goal."""
        goal = client.post(
            "/goals", json={"metric": "steps", "target": 10000, "direction": "increase"}
        ).json()

        assert client.post(f"/goals/{goal['id']}/complete").json()["completedAt"] is not None
        assert client.post(f"/goals/{goal['id']}/reopen").json()["completedAt"] is None

    def test_unknown_metric(self, client):
        """Test unknown metrics are rejected."""
        response = client.post(
            "/goals", json={"metric": "mood", "target": 5, "direction": "increase"}
        )
        assert response.status_code == 400

    def test_missing_goal(self, client):
        """Test unknown goals map to 404."""
        assert client.get("/goals/nope").status_code == 404
        assert client.post("/goals/nope/complete").status_code == 404


class TestProfileRoutes:
    """Tests for profile routes."""

    def test_save_profile(self, client):
        """Test saving the profile updates the unit preference."""
        response = client.put(
            "/profile",
            json={"height": 180, "birthDate": "1950-01-01", "unitPreference": "imperial"},
        )

        assert response.status_code == 200
        data = client.get("/profile").json()
        assert data["height"] == 180
        assert data["volume"]["age_group"] == "older-adult"
        assert client.app.state.context.unit_preference.value == "imperial"

    def test_malformed_birth_date(self, client):
        """Test a bad birth date is rejected and nothing is saved."""
        response = client.put("/profile", json={"birthDate": "15/06/1990", "height": 180})

        assert response.status_code == 400
        data = client.get("/profile").json()
        assert data["birthDate"] is None
        assert data["height"] is None


class TestTrendRoutes:
    """Tests for trend routes."""

    def test_series(self, client):
        """Test a metric series with trend and summary."""
        client.put("/journals/2024-03-01", json={"daily": {"weight": 80}})
        client.put("/journals/2024-03-02", json={"daily": {"weight": 79}})

        data = client.get("/trends/series", params={"field": "weight", "all": "true"}).json()

        assert [p["value"] for p in data["points"]] == [80, 79]
        assert data["summary"]["change"] == -1
        assert len(data["trend"]) == 2

    def test_malformed_end(self, client):
        """Test a malformed window end is a client error."""
        response = client.get("/trends/series", params={"field": "weight", "end": "2024-3-10"})
        assert response.status_code == 400

    def test_bad_category(self, client):
        """Test unknown categories are rejected."""
        response = client.get("/trends/series", params={"field": "weight", "category": "x"})
        assert response.status_code == 400

    def test_stats(self, client):
        """Test statistics endpoint."""
        assert client.get("/trends/stats").json()["days_tracked"] == 0


class TestBackupRoutes:
    """Tests for backup routes."""

    def test_export_import(self, client):
        """Test a bundle exported can be imported again."""
        client.put("/journals/2024-03-01", json={"daily": {"weight": 80}})
        exported = client.get("/backup/export").json()
        client.delete("/journals/2024-03-01")

        response = client.post("/backup/import", json=exported)

        assert response.status_code == 200
        assert response.json() == {
            "imported": {"programs": 0, "journals": 1, "goals": 0, "profile": 0}
        }
        assert client.get("/journals/2024-03-01").json()["daily"] == {"weight": 80.0}

    def test_old_bundle_rejected(self, client):
        """Test old bundles are refused."""
        response = client.post(
            "/backup/import", json={"version": 1, "programs": [], "journals": []}
        )

        assert response.status_code == 400
        assert "older version" in response.json()["detail"]
