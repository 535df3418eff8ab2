"""Shared constants and request helpers for the TaskNest tests."""

from __future__ import annotations

from fastapi.testclient import TestClient

from tasknest.models.user import User

SECRET = "tasknest-secret-for-testing-only"
WEATHER_KEY = "weather-key-for-testing-only"


def register(client: TestClient, email: str, password: str = "secret1", name: str = "Tester", **extra):
    return client.post("/", json={"name": name, "email": email, "password": password, **extra})


def login(client: TestClient, email: str, password: str = "secret1") -> str:
    response = client.post("/", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    return response.json()["token"]


def auth_header(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


def user_id_for(db, email: str) -> int:
    return db.query(User).filter(User.email == email).one().id


class RecordingContext:
    """Wraps a passlib CryptContext and records every hash it verifies against."""

    def __init__(self, context) -> None:
        self.context = context
        self.verified: list[str] = []

    def hash(self, secret: str) -> str:
        return self.context.hash(secret)

    def verify(self, secret: str, hashed: str) -> bool:
        self.verified.append(hashed)
        return self.context.verify(secret, hashed)
