"""
Configuration helpers for the accounts backend.

Settings are read from the environment once at startup and handed to
``create_app`` so that routers and services never fetch os.environ directly.
"""

from dataclasses import dataclass
from functools import lru_cache
import os

from loguru import logger

_DEV_TOKEN_SECRET = "dev-insecure-token-secret-change-me"


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    app_env: str
    database_url: str
    token_secret: str
    token_ttl_seconds: int
    log_level: str
    cors_origins: tuple[str, ...]
    auth_rate_limit: int
    auth_rate_window_seconds: int
    host: str = "127.0.0.1"
    port: int = 8000


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    def _int(value: str, default: int = 0) -> int:
        try:
            return int(value)
        except (TypeError, ValueError):
            return default

    app_env = (os.getenv("APP_ENV") or "dev").lower()
    token_secret = (os.getenv("TOKEN_SECRET") or "").strip()
    if not token_secret:
        if app_env == "prod":
            raise RuntimeError("TOKEN_SECRET must be configured in production.")
        logger.warning("TOKEN_SECRET not set; using an insecure development secret")
        token_secret = _DEV_TOKEN_SECRET

    origins = tuple(o.strip().rstrip("/") for o in (os.getenv("CORS_ORIGINS") or "").split(",") if o.strip())

    return Settings(
        app_env=app_env,
        database_url=(os.getenv("DATABASE_URL") or "sqlite:///./accounts.db").strip(),
        token_secret=token_secret,
        token_ttl_seconds=max(0, _int(os.getenv("TOKEN_TTL_SECONDS", "0"), 0)),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
        cors_origins=origins,
        auth_rate_limit=_int(os.getenv("AUTH_RATE_LIMIT", "10"), 10),
        auth_rate_window_seconds=_int(os.getenv("AUTH_RATE_WINDOW_SECONDS", "60"), 60),
        host=(os.getenv("HOST") or "127.0.0.1").strip(),
        port=_int(os.getenv("PORT", "8000"), 8000),
    )
