"""Application configuration."""

import os

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")

DEFAULT_ML_API_URL = "https://malikgrd786-nutrition-yolo-model.hf.space/api/predict"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    jwt_secret: str
    supabase_url: str
    supabase_service_key: str
    ml_api_url: str = DEFAULT_ML_API_URL
    prediction_timeout_seconds: float = 30.0
    prediction_max_retries: int = 0
    prediction_retry_backoff_seconds: float = 1.0
    upload_dir: str = "uploads"
    max_upload_bytes: int = 10 * 1024 * 1024
    cors_origins: str = "http://localhost:3000,http://localhost:5173"
    port: int = 5000
    token_ttl_days: int = 7
    cookie_secure: bool = True
    summary_timezone: str | None = None
    db_connect_retries: int = 5
    db_connect_retry_delay_seconds: float = 5.0
    crash_flush_delay_seconds: float = 1.0
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    @field_validator("jwt_secret")
    @classmethod
    def _require_secret(cls, value: str) -> str:
        cleaned = value.strip()
        if not cleaned:
            raise ValueError("JWT_SECRET must be set to a non-empty value")
        return cleaned


def parse_cors_origins(raw: str | None) -> list[str]:
    """Parse allowed CORS origins from env."""
    if raw is None:
        return []
    origins: list[str] = []
    for chunk in raw.split(","):
        value = chunk.strip().rstrip("/")
        if value and value not in origins:
            origins.append(value)
    return origins
