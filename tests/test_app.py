from __future__ import annotations

import importlib.util
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from accounts.app import create_app
from accounts.core import config as core_config
from accounts.core.errors import STATUS_BY_KIND
from tests.conftest import cheap_hasher, make_settings, user_payload


def test_health_and_security_headers(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"ok": True}
    assert resp.headers["X-Content-Type-Options"] == "nosniff"
    assert resp.headers["X-Frame-Options"] == "DENY"


def test_unknown_route_uses_error_envelope(client):
    resp = client.get("/nowhere")
    assert resp.status_code == 404
    assert resp.json()["error"] is True


def test_status_table_is_the_single_mapping():
    assert STATUS_BY_KIND["validation"] == 400
    assert STATUS_BY_KIND["duplicate"] == 400
    assert STATUS_BY_KIND["unauthorized"] == 401
    assert STATUS_BY_KIND["not_found"] == 404
    assert STATUS_BY_KIND["store"] == 500


def test_login_rate_limit(tmp_path):
    settings = make_settings(tmp_path / "rl.db", auth_rate_limit=1)
    with TestClient(create_app(settings, hasher=cheap_hasher())) as client:
        first = client.post("/login", json={"email": "a@example.com", "password": "whatever1"})
        assert first.status_code == 404
        second = client.post("/login", json={"email": "a@example.com", "password": "whatever1"})
        assert second.status_code == 429
        assert second.json()["error"] is True


def test_cors_exposes_authorization_header(tmp_path):
    settings = make_settings(tmp_path / "cors.db", cors_origins=("http://localhost:5173",))
    with TestClient(create_app(settings, hasher=cheap_hasher())) as client:
        resp = client.post("/users/add", json=user_payload(), headers={"Origin": "http://localhost:5173"})
        assert resp.status_code == 201
        assert resp.headers["access-control-allow-origin"] == "http://localhost:5173"
        assert "authorization" in resp.headers["access-control-expose-headers"].lower()


@pytest.fixture()
def clean_env(monkeypatch):
    for name in ("APP_ENV", "DATABASE_URL", "TOKEN_SECRET", "TOKEN_TTL_SECONDS", "LOG_LEVEL", "CORS_ORIGINS", "AUTH_RATE_LIMIT", "HOST", "PORT"):
        monkeypatch.delenv(name, raising=False)
    core_config.get_settings.cache_clear()
    yield monkeypatch
    core_config.get_settings.cache_clear()


def test_settings_from_environment(clean_env):
    clean_env.setenv("TOKEN_SECRET", "from-env-secret")
    clean_env.setenv("TOKEN_TTL_SECONDS", "120")
    clean_env.setenv("CORS_ORIGINS", "https://a.example/, https://b.example")
    clean_env.setenv("AUTH_RATE_LIMIT", "not-a-number")
    settings = core_config.get_settings()
    assert settings.token_secret == "from-env-secret"
    assert settings.token_ttl_seconds == 120
    assert settings.cors_origins == ("https://a.example", "https://b.example")
    assert settings.auth_rate_limit == 10
    assert settings.database_url.startswith("sqlite:///")


def test_prod_requires_token_secret(clean_env):
    clean_env.setenv("APP_ENV", "prod")
    with pytest.raises(RuntimeError):
        core_config.get_settings()


def _load_script(name: str):
    path = Path(__file__).resolve().parents[1] / "scripts" / f"{name}.py"
    spec = importlib.util.spec_from_file_location(f"scripts_{name}", path)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_add_user_script(clean_env, tmp_path, capsys):
    clean_env.setenv("DATABASE_URL", f"sqlite:///{tmp_path / 'cli.db'}")
    clean_env.setenv("TOKEN_SECRET", "cli-secret-0123456789")
    script = _load_script("add_user")
    argv = ["--first", "Ada", "--last", "Lovelace", "--username", "adalove", "--email", "ada@example.com", "--phone", "555-0100"]
    assert script.main(argv) == 0
    out = capsys.readouterr().out
    assert "OK: user registered" in out
    assert "password:" in out

    assert script.main(argv) == 1
    assert "already" in capsys.readouterr().err


def test_server_address_from_environment(clean_env):
    settings = core_config.get_settings()
    assert (settings.host, settings.port) == ("127.0.0.1", 8000)
    core_config.get_settings.cache_clear()
    clean_env.setenv("HOST", "0.0.0.0")
    clean_env.setenv("PORT", "9001")
    settings = core_config.get_settings()
    assert (settings.host, settings.port) == ("0.0.0.0", 9001)


def test_unhandled_error_keeps_security_headers(tmp_path):
    app = create_app(make_settings(tmp_path / "boom.db"), hasher=cheap_hasher())

    def boom():
        raise RuntimeError("secret internals")

    app.add_api_route("/boom", boom)
    with TestClient(app, raise_server_exceptions=False) as client:
        resp = client.get("/boom")
    assert resp.status_code == 500
    assert resp.json() == {"error": True, "message": "Internal server error"}
    assert resp.headers["Cache-Control"] == "no-store"
    assert resp.headers["X-Content-Type-Options"] == "nosniff"
    assert "Content-Security-Policy" in resp.headers
