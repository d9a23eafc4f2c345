from functools import lru_cache
from urllib.parse import urlparse

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # App
    app_name: str = "ScopeLock"
    app_env: str = "development"  # development, testing, production
    debug: bool = False

    # Database
    database_url: str = "postgresql+asyncpg://localhost:5432/scopelock"
    database_pool_size: int = 5
    database_max_overflow: int = 10
    database_echo: bool = False

    # Email (Resend)
    resend_api_key: str | None = None  # If not set, emails are logged but not sent
    email_from: str = "ScopeLock <noreply@scopelock.com>"
    email_send_timeout_seconds: int = 10
    app_url: str = "http://localhost:3000"  # Frontend URL for review links

    # Review links
    review_token_bytes: int = 32

    # Activity log
    activity_page_size: int = 50

    @field_validator("app_url")
    @classmethod
    def validate_app_url(cls, v: str) -> str:
        """Review links are built as {app_url}/review/{token}."""
        parsed = urlparse(v)
        if parsed.scheme not in ("http", "https") or not parsed.hostname:
            raise ValueError("APP_URL must be an absolute http(s) URL")
        return v.rstrip("/")

    @field_validator("review_token_bytes")
    @classmethod
    def validate_review_token_bytes(cls, v: int) -> int:
        if v < 16:
            raise ValueError("REVIEW_TOKEN_BYTES must be at least 16")
        return v


@lru_cache
def get_settings() -> Settings:
    return Settings()
