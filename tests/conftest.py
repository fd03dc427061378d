from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Make the accounts package importable when running from a checkout
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from fastapi.testclient import TestClient  # noqa: E402

from accounts.app import create_app  # noqa: E402
from accounts.core.config import Settings  # noqa: E402
from accounts.core.security import Argon2PasswordHasher  # noqa: E402
from accounts.db import session as db_session  # noqa: E402

TEST_SECRET = "test-token-secret-0123456789abcdef"


def cheap_hasher() -> Argon2PasswordHasher:
    """Real Argon2 with minimal cost so the suite stays fast."""
    return Argon2PasswordHasher(time_cost=1, memory_cost=1024, parallelism=1)


def make_settings(db_file: Path, **overrides) -> Settings:
    values = dict(
        app_env="test",
        database_url=f"sqlite:///{db_file}",
        token_secret=TEST_SECRET,
        token_ttl_seconds=0,
        log_level="WARNING",
        cors_origins=(),
        auth_rate_limit=0,
        auth_rate_window_seconds=60,
    )
    values.update(overrides)
    return Settings(**values)


def _dispose(url: str) -> None:
    try:
        db_session.get_engine(url).dispose()
    except Exception:
        pass
    db_session.get_engine.cache_clear()
    db_session._get_sessionmaker.cache_clear()  # type: ignore[attr-defined]


@pytest.fixture()
def settings(tmp_path):
    """Settings pointing at a temporary SQLite file; engines are disposed on teardown."""
    cfg = make_settings(tmp_path / "test.db")
    yield cfg
    _dispose(cfg.database_url)


@pytest.fixture()
def app(settings):
    return create_app(settings, hasher=cheap_hasher())


@pytest.fixture()
def client(app):
    with TestClient(app) as test_client:
        yield test_client


def user_payload(**overrides) -> dict:
    payload = {
        "firstName": "Ada",
        "lastName": "Lovelace",
        "userName": "adalove",
        "email": "ada@example.com",
        "phone": "+44 20 7946 0000",
        "password": "correct-horse-battery",
    }
    payload.update(overrides)
    return payload
