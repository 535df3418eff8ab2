"""Tests for application wiring: settings, startup and service endpoints."""

from __future__ import annotations

import logging

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from tasknest.core.config import Settings
from tasknest.main import create_app
from tasknest.models.task import Task
from tasknest.models.user import User
from tests.helpers import auth_header, register


class TestSettings:
    def test_reads_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DATABASE_URL", "sqlite:///./from-env.db")
        monkeypatch.setenv("ACCESS_TOKEN_EXPIRE_MINUTES", "60")
        monkeypatch.setenv("ALLOWED_ORIGINS", "https://a.test,https://b.test")
        settings = Settings()
        assert settings.database_url == "sqlite:///./from-env.db"
        assert settings.access_token_expire_minutes == 60
        assert settings.allowed_origins == ["https://a.test", "https://b.test"]

    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("ACCESS_TOKEN_EXPIRE_MINUTES", raising=False)
        assert Settings().access_token_expire_minutes == 24 * 60

    def test_overrides(self) -> None:
        assert Settings(secret_key="abc").secret_key == "abc"

    def test_unknown_override(self) -> None:
        with pytest.raises(AttributeError):
            Settings(no_such_setting=1)

    def test_repr_hides_database_url(self) -> None:
        assert "sqlite" not in repr(Settings(database_url="sqlite:///secret.db"))


class TestServiceEndpoints:
    def test_root(self, client: TestClient) -> None:
        response = client.get("/")
        assert response.status_code == 200
        assert response.json()["status"] == "running"

    def test_health(self, client: TestClient) -> None:
        response = client.get("/health")
        assert response.json()["status"] == "healthy"
        assert response.json()["database"] == "connected"

    def test_process_time_header(self, client: TestClient) -> None:
        assert "X-Process-Time" in client.get("/").headers


class TestStartup:
    def test_fails_fast_without_database(self, tmp_path) -> None:
        missing_dir = tmp_path / "does-not-exist"
        settings = Settings(database_url=f"sqlite:///{missing_dir}/tasknest.db", secret_key="x")
        app = create_app(settings)
        with pytest.raises(OperationalError):
            with TestClient(app):
                pass

    def test_applies_configured_log_level(self) -> None:
        root = logging.getLogger()
        previous = root.level
        try:
            create_app(Settings(database_url="sqlite://", secret_key="x", log_level="warning"))
            assert root.level == logging.WARNING
            assert logging.getLogger("httpx").level == logging.WARNING
        finally:
            root.setLevel(previous)


def failing(self, *args, **kwargs):
    raise OperationalError("COMMIT", {}, Exception("disk I/O error"))


@pytest.fixture
def rollbacks(monkeypatch: pytest.MonkeyPatch) -> list:
    calls = []
    original = Session.rollback

    def recording_rollback(self) -> None:
        calls.append(self)
        original(self)

    monkeypatch.setattr(Session, "rollback", recording_rollback)
    return calls


class TestPersistenceFailures:
    def test_task_commit_failure_is_404(
        self, client: TestClient, user_token: str, rollbacks: list, monkeypatch: pytest.MonkeyPatch, db
    ) -> None:
        monkeypatch.setattr(Session, "commit", failing)
        response = client.post("/taskNest", json={"text": "buy milk"}, headers=auth_header(user_token))

        assert response.status_code == 404
        assert response.json() == {"error": "Database operation failed"}
        assert rollbacks
        assert db.query(Task).count() == 0

    def test_register_commit_failure_is_404(
        self, client: TestClient, rollbacks: list, monkeypatch: pytest.MonkeyPatch, db
    ) -> None:
        monkeypatch.setattr(Session, "commit", failing)
        response = register(client, "a@tasknest.io")

        assert response.status_code == 404
        assert response.json() == {"error": "Could not register user"}
        assert rollbacks
        assert db.query(User).count() == 0

    def test_login_query_failure_is_404(
        self, client: TestClient, rollbacks: list, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        register(client, "a@tasknest.io")
        monkeypatch.setattr(Session, "query", failing)
        response = client.post("/", json={"email": "a@tasknest.io", "password": "secret1"})

        assert response.status_code == 404
        assert response.json() == {"error": "Could not log in"}
        assert "token" not in response.json()
        assert rollbacks
