"""Application settings loaded from environment variables via .env file."""

from pathlib import Path
import json
import re
from typing import Literal

from pydantic import ConfigDict, field_validator
from pydantic_settings import BaseSettings

REPO_ROOT = Path(__file__).resolve().parents[2]
BACKEND_DIR = Path(__file__).resolve().parents[1]


def _parse_email_set(raw: str) -> set[str]:
    """Parse a flexible email list string into a normalised set."""
    value = raw.strip()
    if not value:
        return set()

    if value.startswith("["):
        try:
            parsed = json.loads(value)
            if isinstance(parsed, list):
                candidates = [str(item) for item in parsed]
            else:
                candidates = [value]
        except json.JSONDecodeError:
            candidates = re.split(r"[,\s;]+", value)
    else:
        candidates = re.split(r"[,\s;]+", value)

    normalised: set[str] = set()
    for candidate in candidates:
        email = candidate.strip().strip("'\"").lower()
        if email:
            normalised.add(email)
    return normalised


class Settings(BaseSettings):
    # Database
    database_url: str = "sqlite+aiosqlite:///./lumora.db"
    sqlalchemy_echo: bool = False

    # JWT
    jwt_secret_key: str = "change-me-in-production"
    jwt_access_token_expire_minutes: int = 30
    jwt_refresh_token_expire_days: int = 7
    auth_cookie_secure: bool = False
    auth_cookie_samesite: Literal["lax", "strict", "none"] = "lax"

    # CORS
    cors_origins: list[str] = ["*"]

    # Head admins promoted at startup (comma, space, or JSON list).
    head_admin_email: str = ""

    # AI completion gateway
    ai_gateway_url: str = "https://ai.gateway.lovable.dev/v1/chat/completions"
    ai_gateway_api_key: str = ""
    ai_gateway_model: str = "google/gemini-2.5-flash"
    ai_gateway_timeout_seconds: float = 60.0

    # Rate limiting (course assistant)
    rate_limit_user_per_minute: int = 20
    rate_limit_global_per_minute: int = 300

    # Ad gate
    ad_dwell_seconds: int = 30
    ad_stage_token_ttl_minutes: int = 30

    # Presence
    presence_heartbeat_seconds: int = 30
    presence_online_window_seconds: int = 90

    # Listings
    audit_log_max_limit: int = 100
    leaderboard_size: int = 10

    @property
    def head_admin_email_set(self) -> set[str]:
        return _parse_email_set(self.head_admin_email)

    @field_validator("ai_gateway_url", mode="before")
    @classmethod
    def _strip_gateway_url(cls, value: str) -> str:
        return str(value).strip()

    @field_validator("database_url", mode="before")
    @classmethod
    def _normalise_database_url(cls, value: str) -> str:
        url = str(value).strip()
        # Hosted Postgres URLs often use the bare scheme; the async engine needs a driver.
        if url.startswith("postgres://"):
            url = url.replace("postgres://", "postgresql+asyncpg://", 1)
        elif url.startswith("postgresql://"):
            url = url.replace("postgresql://", "postgresql+asyncpg://", 1)
        return url

    model_config = ConfigDict(
        env_file=(str(REPO_ROOT / ".env"), str(BACKEND_DIR / ".env")),
        extra="ignore",
    )


settings = Settings()
