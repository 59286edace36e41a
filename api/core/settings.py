"""
Environment-backed settings.

Every value is read at call time so tests can monkeypatch the environment.
"""

from __future__ import annotations

import os

DEFAULT_CORS_ORIGINS = ("http://localhost:5173", "http://127.0.0.1:5173")


def _env_str(name: str, default: str) -> str:
    return os.environ.get(name, default).strip() or default


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name, "").strip().lower()
    if not raw:
        return default
    return raw in {"1", "true", "yes", "on"}


def app_env() -> str:
    return _env_str("APP_ENV", "development").lower()


def is_production() -> bool:
    return app_env() == "production"


def cors_origins() -> list[str]:
    raw = os.environ.get("CORS_ORIGINS", "").strip()
    if not raw:
        return list(DEFAULT_CORS_ORIGINS)
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


def log_level() -> str:
    return _env_str("LOG_LEVEL", "INFO").upper()


def db_pool_max_size() -> int:
    return max(1, _env_int("DB_POOL_MAX_SIZE", 5))


def db_command_timeout_s() -> int:
    return max(1, _env_int("DB_COMMAND_TIMEOUT_S", 30))


def likes_strict() -> bool:
    # Strict mode recomputes `likes` from `liked_by` on every toggle.
    return _env_bool("LIKES_STRICT", False)


def top_artifacts_limit() -> int:
    return max(1, _env_int("TOP_ARTIFACTS_LIMIT", 6))


def database_url() -> str:
    return os.environ.get("DATABASE_URL", "").strip()


def jwt_secret() -> str:
    # Local default keeps development simple.
    # In production, set ACCESS_TOKEN_SECRET in environment.
    return _env_str("ACCESS_TOKEN_SECRET", "dev-change-this-secret")


def jwt_algorithm() -> str:
    return _env_str("JWT_ALG", "HS256")


def access_token_expire_minutes() -> int:
    return max(1, _env_int("ACCESS_TOKEN_EXPIRE_MIN", 60))
