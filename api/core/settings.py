"""
Environment-driven settings.

Values are read on each call so tests (and a restarted worker) pick up
changes to `os.environ` without a reload.
"""

from __future__ import annotations

import os

SERVICE_NAME = "crmcafe-api"
SERVICE_VERSION = "1.0.0"

DEFAULT_CORS_ORIGINS = (
    "http://localhost:5173",
    "http://127.0.0.1:5173",
)


def _env_str(name: str, default: str) -> str:
    return os.environ.get(name, "").strip() or default


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def app_env() -> str:
    return _env_str("APP_ENV", "development")


def log_level() -> str:
    return _env_str("LOG_LEVEL", "debug").upper()


def host() -> str:
    return _env_str("HOST", "0.0.0.0")


def port() -> int:
    return _env_int("PORT", 3000)


def cors_origins() -> list[str]:
    raw = os.environ.get("CORS_ORIGINS", "").strip()
    if not raw:
        return list(DEFAULT_CORS_ORIGINS)
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


def db_pool_min_size() -> int:
    return max(1, _env_int("DB_POOL_MIN", 1))


def db_pool_max_size() -> int:
    return max(db_pool_min_size(), _env_int("DB_POOL_MAX", 5))


def db_command_timeout() -> float:
    return _env_float("DB_COMMAND_TIMEOUT", 30.0)


def db_ssl() -> str | None:
    # Mirrors libpq: PGSSLMODE=require encrypts without verifying the server cert.
    mode = os.environ.get("PGSSLMODE", "").strip().lower()
    return "require" if mode == "require" else None
