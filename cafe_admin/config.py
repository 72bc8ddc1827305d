"""Application configuration using pydantic-settings."""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Attributes:
        app_name: Name of the application.
        debug: Enable debug mode (also creates tables on startup).
        environment: Deployment environment name.
        database_url: Database connection URL.
        cors_origins: Origins allowed to call the API from a browser.
        import_max_file_bytes: Largest accepted import upload.
        csv_export_prefix: Optional prefix for downloaded CSV filenames.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Cafe Admin"
    debug: bool = False
    environment: Literal["development", "staging", "production"] = "development"

    # Database
    database_url: str = "sqlite:///./cafe_admin.db"

    # CORS (admin dashboard origin)
    cors_origins: list[str] = ["http://localhost:3000", "http://127.0.0.1:3000"]

    # Menu import/export
    import_max_file_bytes: int = 5 * 1024 * 1024
    csv_export_prefix: str = ""


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Returns:
        Settings: Application settings.
    """
    return Settings()
