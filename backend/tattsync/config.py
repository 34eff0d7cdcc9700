# backend/tattsync/config.py
from __future__ import annotations
import os


def _env_flag(name: str, default: bool) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


class Config:
    # Optional "SECRET_KEY", with default dev key
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-secret-key-change-me")

    # Postgres in production, local SQLite file otherwise
    SQLALCHEMY_DATABASE_URI = os.environ.get(
        "DATABASE_URL",
        "sqlite:///tattsync.sqlite3",
    )
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # "sql" (persistent, transactional) or "memory" (in-process, dev only).
    # Chosen once at startup.
    REGISTRATION_STORE = os.environ.get("TATTSYNC_STORE", "sql")

    # Lifetime of tokens minted by `flask tokens issue`
    REGISTRATION_TOKEN_TTL_DAYS = int(os.environ.get("REGISTRATION_TOKEN_TTL_DAYS", "14"))

    # False keeps the fixed 30-day profile deadline on completion.
    # True uses the event's configured profile_deadline_days instead.
    PROFILE_DEADLINE_FROM_REQUIREMENTS = _env_flag("PROFILE_DEADLINE_FROM_REQUIREMENTS", False)

    CORS_ALLOWED_ORIGINS = [
        origin.strip()
        for origin in os.environ.get(
            "CORS_ALLOWED_ORIGINS",
            "http://localhost:5173,http://127.0.0.1:5173,http://localhost:4173,http://127.0.0.1:4173",
        ).split(",")
        if origin.strip()
    ]
