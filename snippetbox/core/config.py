"""Application configuration using pydantic-settings."""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="SNIPPETBOX_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Application
    app_name: str = "Snippetbox"
    version: str = "0.1.0"
    debug: bool = False
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = Field(default=5000, description="Server port")

    # Paths
    config_path: Path = Field(
        default=Path("./config"),
        description="Path for configuration files and the SQLite database",
    )

    # Database
    database_url: str | None = Field(
        default=None,
        description="Database connection URL (defaults to SQLite under config_path)",
    )
    create_tables_on_startup: bool = Field(
        default=True,
        description="Create missing tables at startup instead of relying on alembic",
    )

    # CORS
    cors_origins: list[str] = Field(
        default=["*"],
        description="Allowed CORS origins",
    )

    # Auth provider
    jwt_secret_key: str = Field(
        default="change-me-in-production",
        description="Secret used to verify bearer tokens",
    )
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = Field(default=60 * 24, ge=1)

    # Listing
    default_page_size: int = Field(default=10, ge=1, le=100)
    max_page_size: int = Field(default=100, ge=1, le=1000)


# Global settings instance
settings = Settings()
