"""Configuration management using Pydantic settings."""
from functools import lru_cache
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # App settings
    app_name: str = Field(default="Flashdeck API", description="Application name")
    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: str = Field(default="INFO", description="Root log level")
    api_prefix: str = Field(default="/api", description="Prefix for all REST resources")

    # Database settings
    database_url: str = Field(
        default="sqlite+aiosqlite:///./flashdeck.db",
        description="Async SQLAlchemy database URL",
    )
    db_echo: bool = Field(default=False, description="Enable SQLAlchemy query logging")

    # Media store settings
    upload_dir: str = Field(default="uploads", description="Directory holding flashcard images")
    max_image_bytes: int = Field(default=5 * 1024 * 1024, description="Upload size limit in bytes")

    # CORS settings
    cors_origins: List[str] = Field(
        default=["http://localhost:5173", "http://localhost:3000"],
        description="Allowed CORS origins",
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()
