from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Central application settings loaded from environment variables or .env files."""

    api_prefix: str = "/api"
    api_key: int | None = None
    api_secret: str | None = None
    application_id: str | None = None
    private_key: str | None = None
    private_key_path: str | None = None
    session_location: str | None = None
    media_mode: str = "ROUTED"
    archive_mode: str = "MANUAL"
    jwt_default_ttl_seconds: int = 900
    allowed_origins: list[str] = ["*"]
    log_level: str = "INFO"

    model_config = SettingsConfigDict(env_prefix="VIDEO_", env_file=".env", env_file_encoding="utf-8", extra="ignore")


@lru_cache
def get_settings() -> Settings:
    return Settings()
