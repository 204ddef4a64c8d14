"""Integration tests for the correlation analysis and coverage API."""
from datetime import datetime, timezone
from unittest.mock import patch

import pytest

from tests.factories import USER_ID, create_dairy_scenario


@pytest.fixture
def dairy_history(sql_store):
    create_dairy_scenario(sql_store, datetime.now(timezone.utc).date())
    return sql_store


class TestMultiLagCorrelation:
    def test_dairy_ranked_first(self, client, dairy_history):
        response = client.post(
            "/analysis/multi-lag-correlation",
            json={"windows": [24], "min_exposures": 3},
        )

        assert response.status_code == 200
        data = response.json()
        dairy = data["results"][0]
        assert dairy["tag"] == "dairy"
        assert dairy["effect"] == 6
        assert dairy["primary_window"] == 24
        assert dairy["reliability"] == "Medium"
        assert dairy["mean_control"] == 2
        assert data["settings"]["windows"] == [24]
        assert data["recommendations"]

    def test_default_settings(self, client, dairy_history):
        response = client.post("/analysis/multi-lag-correlation", json={})

        assert response.status_code == 200
        assert response.json()["settings"]["windows"] == [6, 24, 48]

    def test_derived_tables_are_stored(self, client, dairy_history):
        client.post("/analysis/multi-lag-correlation", json={"windows": [24]})

        assert len(dairy_history.list_tag_exposures(USER_ID, 24)) == 28
        assert len(dairy_history.list_day_coverage(USER_ID)) == 14

    def test_no_data_returns_empty_results(self, client):
        response = client.post("/analysis/multi-lag-correlation", json={"windows": [24]})

        assert response.status_code == 200
        assert response.json()["results"] == []

    @pytest.mark.parametrize(
        "payload",
        [
            {"windows": []},
            {"windows": [-6]},
            {"coverage_threshold": 0},
            {"min_exposures": 0},
            {"aggregation": "median"},
        ],
    )
    def test_invalid_settings(self, client, dairy_history, payload):
        response = client.post("/analysis/multi-lag-correlation", json=payload)

        assert response.status_code == 422
        assert dairy_history.list_day_coverage(USER_ID) == []

    def test_failure_returns_500(self, client, dairy_history):
        with patch(
            "digesttrack.services.correlation_service.analyze_exposures",
            side_effect=RuntimeError("boom"),
        ):
            response = client.post("/analysis/multi-lag-correlation", json={})

        assert response.status_code == 500
        assert response.json() == {"detail": "Analysis failed"}


class TestCoverageEndpoint:
    def test_coverage(self, client, dairy_history):
        response = client.get("/analysis/coverage", params={"days": 7})

        assert response.status_code == 200
        data = response.json()
        assert data["total_days"] == 7
        assert data["valid_days"] == 6
        assert len(data["coverage"]) == 7
        assert data["coverage"][-1]["is_valid"] is False
        assert data["coverage"][0]["total_coverage"] == 83

    def test_default_thirty_days(self, client):
        data = client.get("/analysis/coverage").json()

        assert data["total_days"] == 30
        assert data["valid_days"] == 0

    def test_invalid_days(self, client):
        assert client.get("/analysis/coverage", params={"days": 0}).status_code == 422


class TestHealth:
    def test_health(self, client):
        assert client.get("/health").json() == {"status": "healthy"}
