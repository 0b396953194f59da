import pytest
from fastapi.testclient import TestClient

from hiring_portal.config import settings
from hiring_portal.services.repository import InMemoryRepository

MANAGER_EMAIL = "manager@example.com"
MANAGER_PASSWORD = "Hiring2025"


@pytest.fixture(autouse=True)
def fast_settings(monkeypatch):
    """Cheap bcrypt, short auto-reply delay, in-memory storage with demo data."""
    monkeypatch.setattr(settings, "BCRYPT_ROUNDS", 4)
    monkeypatch.setattr(settings, "AUTO_REPLY_DELAY_SECONDS", 0.05)
    monkeypatch.setattr(settings, "STORAGE_TYPE", "memory")
    monkeypatch.setattr(settings, "SEED_DEMO_DATA", True)
    monkeypatch.setattr(settings, "DEMO_MANAGER_EMAIL", MANAGER_EMAIL)
    monkeypatch.setattr(settings, "DEMO_MANAGER_PASSWORD", MANAGER_PASSWORD)


@pytest.fixture
def repository():
    return InMemoryRepository()


@pytest.fixture
def client():
    from hiring_portal.main import app

    with TestClient(app) as c:
        yield c


def login(client, email, password):
    response = client.post("/api/login", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['token']}"}


@pytest.fixture
def manager_headers(client):
    return login(client, MANAGER_EMAIL, MANAGER_PASSWORD)


@pytest.fixture
def candidate_headers(client):
    client.post(
        "/api/register",
        json={"email": "jane@example.com", "password": "candidate-pass", "role": "candidate"},
    )
    return login(client, "jane@example.com", "candidate-pass")


def project_payload(**overrides):
    payload = {
        "fullName": "Jane Roe",
        "email": "jane@example.com",
        "industryRole": "Data Science",
        "projectTitle": "Churn Model",
        "projectDescription": "x" * 250,
        "projectLink": "https://example.com/churn",
        "githubLink": "https://github.com/jane/churn",
    }
    payload.update(overrides)
    return payload
