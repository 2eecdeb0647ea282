"""
Foundation settings for the Cosmic packages.
"""

from typing import Literal

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class CosmicSettings(BaseSettings):
    """
    Core settings shared by the database layer and the CMS application.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="allow",
    )

    # --- Basic Environment ---
    DEBUG: bool = True
    ENVIRONMENT: Literal["development", "staging", "production"] = "development"

    # --- Listing & API Limits ---
    # Defaults mirror the public site's page size.
    DEFAULT_PAGE_SIZE: int = 10
    MAX_PAGE_SIZE: int = 100
    API_PREFIX: str = "/api"

    # --- Database Core ---
    DATABASE_URL: str = "sqlite+aiosqlite:///cosmic.db"
    DB_POOL_SIZE: int = 10
    DB_MAX_OVERFLOW: int = 20
    DB_ECHO: bool = False
    AUTO_CREATE_TABLES: bool = True

    # --- Logging ---
    LOG_LEVEL: str = "INFO"
    LOG_FILE: str | None = None

    # --- Feature Flags ---
    ENABLE_REQUEST_ID: bool = True
    ENABLE_CORS: bool = True
    CORS_ORIGINS: list[str] = ["*"]

    @model_validator(mode="after")
    def validate_page_bounds(self) -> "CosmicSettings":
        if self.DEFAULT_PAGE_SIZE < 1 or self.MAX_PAGE_SIZE < 1:
            raise ValueError("Page sizes must be positive.")
        if self.DEFAULT_PAGE_SIZE > self.MAX_PAGE_SIZE:
            raise ValueError("DEFAULT_PAGE_SIZE cannot exceed MAX_PAGE_SIZE.")
        return self

    def is_development(self) -> bool:
        return self.DEBUG or self.ENVIRONMENT == "development"


# Singleton instance for core use
cosmic_settings = CosmicSettings()
