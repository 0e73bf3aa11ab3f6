"""Tests transverses de l'application: santé, routes inconnues, erreurs 500, métriques, en-têtes."""

import json
import logging
from unittest.mock import Mock, patch

import redis
from fastapi.testclient import TestClient

from backend.app.main import create_app
from backend.app.metrics import REQUEST_COUNT
from backend.core.container import container
from backend.core.http_constants import (
    HTTP_INTERNAL_SERVER_ERROR,
    HTTP_NOT_FOUND,
    HTTP_OK,
)
from backend.core.settings import Settings
from backend.domain.auth import create_access_token
from backend.domain.services import AccountService, HoroscopeService
from backend.infra.repositories import RedisUserRepo


def test_health(client) -> None:
    """Teste que l'endpoint de santé retourne un statut OK."""
    r = client.get("/health")
    assert r.status_code == HTTP_OK
    body = r.json()
    assert body["status"] == "OK"
    assert body["message"] == "Horoscope API is running!"
    assert body["storage"] == "memory"


def test_unknown_route_404(client) -> None:
    for path in ("/nope", "/api/horoscope/unknown"):
        r = client.get(path)
        assert r.status_code == HTTP_NOT_FOUND
        assert r.json()["error"] == "Route not found"
        assert r.json()["code"] == "NOT_FOUND"


def test_unexpected_error_is_hidden_from_client(caplog) -> None:
    app = create_app(Settings(RATE_LIMIT_ENABLED=False))

    @app.get("/api/boom")
    def boom():
        raise RuntimeError("database exploded: secret details")

    counted = REQUEST_COUNT.labels("GET", "/api/boom", "500")
    before = counted._value.get()  # type: ignore[attr-defined]

    with caplog.at_level(logging.ERROR, logger="backend.apigw.errors"):
        r = TestClient(app).get("/api/boom", headers={"X-Request-ID": "req-500"})
    assert r.status_code == HTTP_INTERNAL_SERVER_ERROR
    assert r.json() == {
        "error": "Something went wrong!",
        "code": "INTERNAL_ERROR",
        "trace_id": "req-500",
    }
    assert "secret" not in r.text
    assert r.headers["X-Request-ID"] == "req-500"
    assert "X-Process-Time-ms" in r.headers
    assert counted._value.get() == before + 1  # type: ignore[attr-defined]

    # la trace complète reste côté serveur
    (record,) = [rec for rec in caplog.records if rec.name == "backend.apigw.errors"]
    assert "/api/boom" in record.getMessage()
    assert record.exc_info is not None
    assert record.exc_info[0] is RuntimeError


def test_storage_failure_is_a_hidden_500(client, monkeypatch, clock) -> None:
    with patch("backend.infra.repositories.redis.Redis.from_url") as from_url:
        from_url.return_value = Mock()
        repo = RedisUserRepo("redis://localhost:6379/0")
    repo.client.get.return_value = json.dumps(
        {
            "id": "u1",
            "name": "Ada",
            "email": "ada@example.com",
            "password_hash": "x",
            "birthdate": "2000-07-15",
            "zodiac_sign": "Cancer",
            "horoscope_history": [],
        }
    )
    repo.client.transaction.side_effect = redis.ConnectionError(
        "Error 111 connecting to redis-prod.internal:6379. Connection refused."
    )
    monkeypatch.setattr(container, "user_repo", repo)
    monkeypatch.setattr(container, "accounts", AccountService(repo))
    monkeypatch.setattr(container, "horoscopes", HoroscopeService(repo, clock=clock))
    token = create_access_token(
        container.settings.JWT_SECRET, container.settings.JWT_ALG, 60, {"sub": "u1"}
    )

    r = client.get("/api/horoscope/today", headers={"Authorization": f"Bearer {token}"})
    assert r.status_code == HTTP_INTERNAL_SERVER_ERROR
    assert r.json()["error"] == "Something went wrong!"
    assert r.json()["code"] == "INTERNAL_ERROR"
    assert "redis" not in r.text.lower()
    assert r.headers["X-Request-ID"]


def test_request_id_and_timing_headers(client) -> None:
    r = client.get("/health", headers={"X-Request-ID": "abc123"})
    assert r.headers["X-Request-ID"] == "abc123"
    assert int(r.headers["X-Process-Time-ms"]) >= 0
    assert client.get("/health").headers["X-Request-ID"]


def test_metrics_exposed(client) -> None:
    client.get("/api/horoscope/signs")
    r = client.get("/metrics")
    assert r.status_code == HTTP_OK
    assert "http_requests_total" in r.text
    assert "horoscope_served_total" in r.text
