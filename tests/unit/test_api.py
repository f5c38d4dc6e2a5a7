"""
Unit Tests for the HTTP API

Runs the FastAPI app in-process against a temporary record store.
"""
import pytest
from fastapi.testclient import TestClient

from flarewatch.config import settings
from flarewatch.main import app, get_service

API = settings.api_prefix


@pytest.fixture
def client(service):
    app.dependency_overrides[get_service] = lambda: service
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


class TestHealth:
    """Tests for service metadata endpoints."""

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_diseases(self, client):
        diseases = client.get(f"{API}/diseases").json()["diseases"]
        assert len(diseases) == 8
        ra = next(d for d in diseases if d["disease"] == "rheumatoid_arthritis")
        assert ra["cut_points"] == [35.0, 65.0]


class TestScoreEndpoint:
    """Tests for POST /score."""

    def test_unknown_disease(self, client):
        response = client.post(f"{API}/score", json={"disease": "banana", "inputs": {}})
        assert response.status_code == 400

    def test_crohns_contributions(self, client):
        response = client.post(f"{API}/score", json={
            "disease": "crohns",
            "inputs": {"stool_frequency": 8, "abdominal_pain": 7},
        })
        assert response.status_code == 200
        data = response.json()
        assert data["index_name"] == "CFI"
        assert data["status"] == "ok"
        assert data["contributions"][0]["key"] == "abdominal_pain"
        assert data["classification"]["tier"] == "stable"

    def test_thyroid_drivers(self, client):
        response = client.post(f"{API}/score", json={
            "disease": "thyroid",
            "inputs": {"resting_heart_rate": 130, "tremor_severity": 8},
        })
        data = response.json()
        assert data["drivers"]
        assert data["contributions"] is None


class TestObservationEndpoints:
    """Tests for daily observations and their assessment."""

    def test_missing_sub_record_is_insufficient(self, client):
        response = client.post(f"{API}/observations", json={"date": "2024-06-15", "fatigue": 8})
        assert response.status_code == 200

        response = client.get(f"{API}/observations/2024-06-15/assessment", params={"disease": "lupus"})
        assert response.status_code == 200
        [assessment] = response.json()
        assert assessment["status"] == "insufficient_data"
        assert assessment["score"] is None

    def test_assessment_with_sub_record(self, client):
        client.post(f"{API}/observations", json={
            "date": "2024-06-15",
            "fatigue": 8,
            "disease_specific": {"lupus": {"facial_rash": 7, "sun_exposure": 90}},
        })
        [assessment] = client.get(
            f"{API}/observations/2024-06-15/assessment", params={"disease": "sle"}
        ).json()
        assert assessment["status"] == "ok"
        assert assessment["score"] > 0

    def test_out_of_range_reading_accepted(self, client):
        response = client.post(f"{API}/observations", json={
            "date": "2024-06-15",
            "fatigue": 11,
            "disease_specific": {"rheumatoid_arthritis": {"joint_swelling": 8}},
        })
        assert response.status_code == 200

        [assessment] = client.get(
            f"{API}/observations/2024-06-15/assessment", params={"disease": "ra"}
        ).json()
        assert assessment["status"] == "ok"
        assert 0 < assessment["score"] <= 100

    def test_unknown_day(self, client):
        response = client.get(f"{API}/observations/2024-01-01/assessment")
        assert response.status_code == 404


class TestRecordEndpoints:
    """Tests for lifestyle record endpoints."""

    def test_unknown_kind(self, client):
        assert client.post(f"{API}/records/meals", json={}).status_code == 400

    def test_invalid_record(self, client):
        response = client.post(f"{API}/records/flares", json={"date": "2024-06-10", "severity": 42})
        assert response.status_code == 422

    def test_create_list_delete(self, client):
        created = client.post(f"{API}/records/stress", json={"date": "2024-06-10", "level": 7}).json()
        listed = client.get(f"{API}/records/stress").json()
        assert [r["id"] for r in listed] == [created["id"]]

        assert client.delete(f"{API}/records/stress/{created['id']}").status_code == 200
        assert client.delete(f"{API}/records/stress/{created['id']}").status_code == 404


class TestPredictionEndpoints:
    """Tests for prediction and analysis endpoints."""

    def test_prodromal(self, client):
        response = client.post(f"{API}/predictions/prodromal", json={
            "common": {"fatigue": 4},
            "disease_specific": {"lupus": {"facial_rash": True}},
        })
        data = response.json()
        assert data["total_score"] == 7.0
        assert data["contributing_symptoms"] == ["Facial rash", "Fatigue"]

    def test_lupus_uv_empty_forecast(self, client):
        response = client.post(f"{API}/predictions/lupus-uv", json={"forecast": [], "sun_exposure_hours": 3})
        assert response.json()["status"] == "insufficient_data"

    def test_lupus_uv_status_derived(self, client):
        response = client.post(f"{API}/predictions/lupus-uv", json={
            "forecast": [{
                "date": "2024-06-15",
                "day_name": "Saturday",
                "time_slots": [{"time_range": "12-15", "uv_index": 12}],
            }],
        })
        data = response.json()
        assert data["raw_score"] == 25
        assert data["high_risk_time_slots"][0]["status"] == "danger"

    def test_daily_index(self, client):
        response = client.post(f"{API}/daily-index", json={"environmental_score": 40, "today": "2024-06-15"})
        assert response.status_code == 200
        assert response.json()["index"]["components"]["environment"] == 40

    def test_lifestyle_analysis(self, client):
        data = client.get(f"{API}/analysis/lifestyle", params={"today": "2024-06-15"}).json()
        assert data["risk_analysis"]["risk_level"] == "low"
        assert data["risk_analysis"]["risk_score"] == 0
        assert data["risk_analysis"]["recommendations"] == ["Maintain your current routine"]
        assert data["stress_correlation"] == {
            "status": "insufficient_data",
            "correlation": 0.0,
            "average_days_to_flare": 0.0,
            "high_stress_flare_count": 0,
            "message": "Not enough data to analyze yet.",
        }

    def test_report(self, client):
        client.post(f"{API}/records/diary", json={"date": "2024-06-10", "severity": 5})
        data = client.get(f"{API}/diary/report", params={"today": "2024-06-15"}).json()
        assert data["flare_count"] == 1


class TestProfileEndpoints:
    """Tests for the stored profile."""

    def test_disease_selection(self, client):
        response = client.put(f"{API}/profile/diseases", json={"diseases": ["RA", "lupus"]})
        assert response.json()["diseases"] == ["rheumatoid_arthritis", "lupus"]
        assert client.get(f"{API}/profile/diseases").json()["diseases"] == ["rheumatoid_arthritis", "lupus"]

    def test_invalid_disease_selection(self, client):
        assert client.put(f"{API}/profile/diseases", json={"diseases": ["banana"]}).status_code == 400
