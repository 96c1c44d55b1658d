import pytest
from fastapi.testclient import TestClient
from unittest.mock import patch

from sponsorscope.api.main import create_app
from sponsorscope.config import DatabaseSettings, Settings
from sponsorscope.data.database import create_db_engine, init_db
from sponsorscope.data.models import SponsorRecord
from sponsorscope.data.repository import SponsorRepository
from sponsorscope.exceptions import StoreQueryError


@pytest.fixture
def client(session_factory):
    with TestClient(create_app(Settings(), session_factory=session_factory)) as client:
        yield client


def test_service_info(client):
    response = client.get("/")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "active"
    assert data["endpoints"]["health_check"] == "GET /health"


def test_health_check(client, seed, acme_rows):
    seed(*acme_rows)
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {
        "status": "healthy",
        "database_connected": True,
        "total_companies": 2,
        "data_source": "UK Government Licensed Sponsors Register",
        "last_verified": "2025-11-07",
        "accuracy": "100% official data",
    }


def test_health_check_store_failure(client):
    with patch.object(SponsorRepository, "count_companies", side_effect=StoreQueryError("could not connect")):
        response = client.get("/health")
    assert response.status_code == 500
    assert response.json() == {"status": "unhealthy", "error": "could not connect"}


def test_health_check_without_database():
    """No lifespan, no injected factory: the service is offline."""
    client = TestClient(create_app(Settings()))
    response = client.get("/health")
    assert response.status_code == 500
    assert response.json()["status"] == "unhealthy"


def test_startup_with_unreachable_database():
    settings = Settings(database=DatabaseSettings(url="sqlite:////nonexistent-sponsorscope-dir/x/register.db"))
    with TestClient(create_app(settings)) as client:
        assert client.get("/health").status_code == 500
        response = client.get("/api/available-routes")
    assert response.status_code == 500
    assert response.json()["error"] == "Database query failed"


def test_startup_builds_engine_from_settings(tmp_path):
    url = f"sqlite:///{tmp_path}/register.db"
    init_db(engine=create_db_engine(url))
    with TestClient(create_app(Settings(database=DatabaseSettings(url=url)))) as client:
        response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["total_companies"] == 0


def test_check_sponsorship_match(client, seed, acme_rows):
    seed(*acme_rows)
    response = client.get("/api/check-sponsorship/Acme")
    assert response.status_code == 200
    data = response.json()
    assert data["matches_found"] == 2
    assert data["sponsorship_available"] is True
    assert data["sponsorship_insights"]["sponsorship_capacity"] == "A-Rated Sponsor"
    assert data["sponsorship_insights"]["geographic_coverage"] == ["Leeds, West Yorkshire", "Leeds"]
    assert data["verification_date"] == "2025-11-07"
    assert "disclaimer" in data
    assert "message" not in data


def test_check_sponsorship_keeps_null_fields(client, seed):
    seed(SponsorRecord("Bare Ltd"))
    company = client.get("/api/check-sponsorship/Bare").json()["official_data"]["companies"][0]
    assert company["license_type"] is None
    assert company["route"] is None
    assert company["location"] == "Location not specified"


def test_check_sponsorship_no_match(client, seed, acme_rows):
    seed(*acme_rows)
    response = client.get("/api/check-sponsorship/Zzzznotreal")
    assert response.status_code == 200
    data = response.json()
    assert data["matches_found"] == 0
    assert data["sponsorship_available"] is False
    assert "official_data" not in data
    assert "sponsorship_insights" not in data


def test_check_sponsorship_short_name(client):
    response = client.get("/api/check-sponsorship/a")
    assert response.status_code == 400
    assert response.json() == {"error": "Company name must be at least 2 characters long"}


def test_check_sponsorship_whitespace_name(client):
    assert client.get("/api/check-sponsorship/%20a%20").status_code == 400


def test_check_sponsorship_store_failure(client):
    with patch.object(SponsorRepository, "search_by_name", side_effect=StoreQueryError("relation missing")):
        response = client.get("/api/check-sponsorship/Acme")
    assert response.status_code == 500
    assert response.json() == {"error": "Database query failed", "details": "relation missing"}


def test_company_profile(client, seed):
    seed(*[SponsorRecord(f"Zenith {i}", "Leeds") for i in range(7)])
    response = client.get("/api/company-profile/Zenith")
    assert response.status_code == 200
    data = response.json()
    assert data["company_profile"]["total_entities"] == 7
    assert data["sponsorship_capabilities"]["organization_scale"] == "Large Organization"
    assert data["sponsorship_capabilities"]["geographic_presence"] == ["Leeds"]


def test_company_profile_not_found(client):
    response = client.get("/api/company-profile/Zzzznotreal")
    assert response.status_code == 404
    data = response.json()
    assert data["error"] == "Company not found in official sponsorship register"
    assert "suggestion" in data


def test_available_routes(client, seed):
    seed(
        SponsorRecord("A", route="Skilled Worker"),
        SponsorRecord("B", route="Creative Worker"),
        SponsorRecord("C", route="Skilled Worker"),
    )
    response = client.get("/api/available-routes")
    assert response.status_code == 200
    assert response.json() == {
        "total_routes_available": 2,
        "routes": ["Creative Worker", "Skilled Worker"],
        "source": "UK Government Licensed Sponsors Register",
        "data_freshness": "November 7, 2025",
    }


def test_cors_allows_any_origin(client):
    response = client.get("/health", headers={"Origin": "https://jobs.example.com"})
    assert response.headers["access-control-allow-origin"] == "*"
