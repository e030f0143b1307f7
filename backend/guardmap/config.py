"""
Application configuration using Pydantic Settings.
Loads from environment variables and .env file.
"""

from functools import lru_cache
from typing import Literal, Optional
from urllib.parse import quote_plus

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "GuardMap"
    app_env: str = "development"  # development, staging, production, test
    debug: bool = False
    log_level: str = "INFO"

    # Database - either a full URL or the discrete fields below
    database_url: Optional[str] = None
    db_host: str = "localhost"
    db_port: int = 5432
    db_name: str = "guardmap"
    db_user: str = "guardmap"
    db_pass: str = ""
    db_pool_size: int = 10

    # TLS towards the database
    db_ssl: bool = True
    db_ssl_verify: bool = True  # Set false for local development only

    # Schema
    run_migrations_on_startup: bool = True

    # Public URL used to build shareable snapshot links.
    # Falls back to the request's base URL when unset.
    public_base_url: Optional[str] = None

    # Comma-separated list of allowed frontend origins
    cors_origins: str = "http://localhost:3000,http://localhost:5173"

    # Locations
    location_list_order: Literal["newest_first", "oldest_first"] = "newest_first"
    default_radius_meters: int = 100

    # Display timezone (the deployment covers a single city)
    timezone: str = "Asia/Riyadh"

    @property
    def is_production(self) -> bool:
        return self.app_env == "production"

    @property
    def cors_origin_list(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    @property
    def sqlalchemy_url(self) -> str:
        """Database URL, built from the discrete fields when no URL is given."""
        if self.database_url:
            return self.database_url
        return "postgresql://%s:%s@%s:%s/%s" % (
            quote_plus(self.db_user),
            quote_plus(self.db_pass),
            self.db_host,
            self.db_port,
            self.db_name,
        )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
