"""Test fixtures for TaskNest.

Each test gets a fresh app on an in-memory SQLite database, with bcrypt
rounds lowered and the weather provider replaced by an ``httpx.MockTransport``
whose handler the test can swap.
"""

from __future__ import annotations

from typing import Callable

import httpx
import pytest
from fastapi.testclient import TestClient

from tasknest.core.config import Settings
from tasknest.main import create_app
from tasknest.models.user import UserRole
from tasknest.services.weather import WeatherClient
from tests.helpers import SECRET, WEATHER_KEY, login, register


def weather_ok(request: httpx.Request) -> httpx.Response:
    city = request.url.params["q"]
    return httpx.Response(
        200,
        json={"location": {"name": city.title()}, "current": {"temp_c": 21.5}},
    )


class WeatherStub:
    """Routes provider calls to a replaceable handler and records them."""

    def __init__(self) -> None:
        self.handler: Callable[[httpx.Request], httpx.Response] = weather_ok
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.handler(request)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        database_url="sqlite://",
        secret_key=SECRET,
        bcrypt_rounds=4,
        weather_api_key=WEATHER_KEY,
        weather_api_url="https://weather.test/v1/current.json",
        log_file=None,
    )


@pytest.fixture
def weather_stub() -> WeatherStub:
    return WeatherStub()


@pytest.fixture
def app(settings: Settings, weather_stub: WeatherStub):
    weather_client = WeatherClient.from_settings(
        settings, transport=httpx.MockTransport(weather_stub)
    )
    return create_app(settings, weather_client=weather_client)


@pytest.fixture
def client(app) -> TestClient:
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def db(app, client):
    session = app.state.database.SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def user_token(client: TestClient) -> str:
    register(client, "user@tasknest.io")
    return login(client, "user@tasknest.io")


@pytest.fixture
def admin_token(client: TestClient) -> str:
    register(client, "admin@tasknest.io", name="Admin", role=UserRole.ADMIN.value)
    return login(client, "admin@tasknest.io")