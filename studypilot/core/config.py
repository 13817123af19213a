# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Core configuration — all env-driven, zero hardcode.
Single source of truth for every tunable parameter.
"""

import os

DEFAULT_TEACHER_ACCOUNTS = (
    "teacher@studypilot.com:password123:Priya Sharma,"
    "demo@studypilot.com:demo:Demo Teacher"
)


def _parse_accounts(raw: str) -> dict[str, dict[str, str]]:
    """Parse ``email:password:Full Name`` triples into an account table."""
    accounts: dict[str, dict[str, str]] = {}
    for index, entry in enumerate(raw.split(","), start=1):
        parts = [p.strip() for p in entry.split(":", 2)]
        if len(parts) < 2 or not parts[0]:
            continue
        email = parts[0].lower()
        accounts[email] = {
            "id": str(index),
            "email": email,
            "password": parts[1],
            "name": parts[2] if len(parts) == 3 and parts[2] else email,
        }
    return accounts


class Settings:
    """Application settings loaded from environment variables."""

    SERVICE_NAME: str = os.getenv("SERVICE_NAME", "studypilot-planner")
    SERVICE_VERSION: str = os.getenv("SERVICE_VERSION", "1.0.0")
    SERVICE_PORT: int = int(os.getenv("SERVICE_PORT", "8010"))

    STORAGE_URL: str = os.getenv("STORAGE_URL", "sqlite:///studypilot.db")
    STORAGE_TABLE: str = os.getenv("STORAGE_TABLE", "kv_store")

    DAILY_SCHEDULE_KEY: str = os.getenv("DAILY_SCHEDULE_KEY", "schedule.daily")
    WEEKLY_SCHEDULE_KEY: str = os.getenv("WEEKLY_SCHEDULE_KEY", "schedule.weekly")
    NOTES_KEY: str = os.getenv("NOTES_KEY", "notes")
    SESSION_KEY: str = os.getenv("SESSION_KEY", "session.user")

    TEACHER_ACCOUNTS: dict[str, dict[str, str]] = _parse_accounts(
        os.getenv("TEACHER_ACCOUNTS", DEFAULT_TEACHER_ACCOUNTS)
    )

    CORS_ORIGINS: list[str] = os.getenv("CORS_ORIGINS", "*").split(",")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()


settings = Settings()
