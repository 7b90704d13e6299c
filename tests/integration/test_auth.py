"""Integration tests for bearer credential handling"""

from fastapi.testclient import TestClient
from bizbook_api.config import settings


def test_me_resolves_verified_identity(client: TestClient):
    response = client.get("/v1/me", headers={"Authorization": "Bearer alice-token"})

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["user_id"] == "alice"
    assert data["email"] == "alice@example.com"


def test_missing_credential_outside_production_uses_demo_user(client: TestClient):
    response = client.get("/v1/me")

    assert response.status_code == 200
    assert response.json()["data"]["user_id"] == settings.demo_user_id


def test_missing_credential_in_production_is_401(client: TestClient, monkeypatch):
    monkeypatch.setattr(settings, "environment", "production")

    response = client.get("/v1/credit-cards")

    assert response.status_code == 401
    assert response.json() == {"success": False, "error": "Access token required"}


def test_rejected_credential_is_403(client: TestClient):
    response = client.get("/v1/credit-cards", headers={"Authorization": "Bearer forged-token"})

    assert response.status_code == 403
    assert response.json()["error"] == "Invalid or expired token"


def test_identity_provider_failure_is_503(client: TestClient):
    response = client.get("/v1/overview", headers={"Authorization": "Bearer broken-token"})

    assert response.status_code == 503
    assert response.json()["error"] == "Identity service unavailable"


def test_non_bearer_scheme_treated_as_missing(client: TestClient):
    response = client.get("/v1/me", headers={"Authorization": "Basic dXNlcjpwYXNz"})

    assert response.json()["data"]["user_id"] == settings.demo_user_id
