"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    supabase_photos_bucket: str = "photos"
    redis_url: str | None = None
    redis_connect_timeout_seconds: float = 10.0
    jwt_secret: str
    jwt_algorithm: str = "HS256"
    token_expire_days: int = 7
    photo_cache_ttl_seconds: int = 300
    photos_page_cache_ttl_seconds: int = 60
    default_page_size: int = 20
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )
