"""Application configuration using pydantic-settings."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Database
    database_path: str = Field(default="streaksync.db", alias="DATABASE_PATH")

    # Logging
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Day boundaries (IANA zone name, empty means the system zone)
    local_timezone: str = Field(default="", alias="LOCAL_TIMEZONE")

    # Parsing
    error_preview_length: int = Field(default=50, alias="ERROR_PREVIEW_LENGTH")

    # Ingestion
    dedupe_same_day_without_puzzle: bool = Field(default=False, alias="DEDUPE_SAME_DAY_WITHOUT_PUZZLE")


# Global settings instance
settings = Settings()


# Backwards compatibility - expose as Config class with uppercase attributes
class Config:
    """Backwards-compatible config interface."""

    DATABASE_PATH = settings.database_path
    LOG_LEVEL = settings.log_level.upper()
    LOCAL_TIMEZONE = settings.local_timezone
    ERROR_PREVIEW_LENGTH = settings.error_preview_length
    DEDUPE_SAME_DAY_WITHOUT_PUZZLE = settings.dedupe_same_day_without_puzzle
