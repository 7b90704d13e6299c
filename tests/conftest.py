"""Pytest fixtures for testing"""

import httpx
import pytest
from datetime import date, timedelta
from typing import Callable, Generator
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from bizbook_api.api.dependencies import get_identity_client
from bizbook_api.api.main import create_app
from bizbook_api.infrastructure.clients.identity import IdentityClient
from bizbook_api.infrastructure.database.models import Base
from bizbook_api.infrastructure.database.session import get_db


# Test database
TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Bearer tokens the fake identity provider accepts
KNOWN_TOKENS = {
    "alice-token": {"user_id": "alice", "email": "alice@example.com", "first_name": "Alice"},
    "bob-token": {"user_id": "bob", "email": "bob@example.com", "first_name": "Bob"},
}


def identity_provider(request: httpx.Request) -> httpx.Response:
    """Fake /v1/tokens/verify endpoint"""
    token = request.headers.get("Authorization", "").removeprefix("Bearer ")
    if token == "broken-token":
        return httpx.Response(500, json={"error": "boom"})
    if token not in KNOWN_TOKENS:
        return httpx.Response(401, json={"error": "invalid token"})
    return httpx.Response(200, json=KNOWN_TOKENS[token])


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Create test database and session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db: Session) -> TestClient:
    """Create FastAPI test client with test database and a fake identity provider"""
    app = create_app()

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_identity_client] = lambda: IdentityClient(
        base_url="http://identity.test",
        transport=httpx.MockTransport(identity_provider),
    )
    return TestClient(app)


@pytest.fixture
def create_card(client: TestClient) -> Callable[..., dict]:
    """POST a credit card and return the stored record"""

    def _create(headers: dict | None = None, **overrides) -> dict:
        payload = {
            "card_name": "Everyday Visa",
            "credit_limit": 5000,
            "balance": 1250.50,
            "interest_rate": 21.99,
            "minimum_payment": 35,
            "due_date": (date.today() + timedelta(days=2)).isoformat(),
        }
        payload.update(overrides)
        response = client.post("/v1/credit-cards", json=payload, headers=headers or {})
        assert response.status_code == 201, response.text
        return response.json()["data"]

    return _create


@pytest.fixture
def create_loan(client: TestClient) -> Callable[..., dict]:
    def _create(headers: dict | None = None, **overrides) -> dict:
        payload = {
            "loan_name": "Car loan",
            "loan_type": "auto",
            "current_balance": 12000,
            "interest_rate": 6.5,
            "monthly_payment": 320,
            "due_date": (date.today() + timedelta(days=10)).isoformat(),
        }
        payload.update(overrides)
        response = client.post("/v1/loans", json=payload, headers=headers or {})
        assert response.status_code == 201, response.text
        return response.json()["data"]

    return _create
