"""
Centralised config for the entire application.

This module consolidates all configuration settings, loading sensitive values
from environment variables and providing typed, validated access to them
through a singleton `settings` object.
"""

import os
from urllib.parse import quote_plus
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Centralized application settings.

    Pydantic's BaseSettings will automatically load values from a `.env` file
    or from system environment variables. Backend credentials are optional:
    when they are missing the backend is reported as not configured instead
    of failing at import time.
    """
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore", case_sensitive=False)

    # --- CORE SETTINGS ---
    # The root directory of the project, parent of the package directory.
    PROJECT_ROOT: Path = Path(__file__).parent.parent.resolve()
    ENVIRONMENT: str = "development"

    # --- DOCUMENT STORE ---
    # "json" keeps documents on local disk, "postgres" uses DATABASE_URL.
    STORE_BACKEND: str = "json"
    POSTGRES_USER: Optional[str] = None
    POSTGRES_PASSWORD: Optional[str] = None
    POSTGRES_HOST: Optional[str] = None
    POSTGRES_PORT: Optional[int] = 5432
    POSTGRES_DB: Optional[str] = None
    DATABASE_URL: Optional[str] = Field(None, validate_default=True)

    # --- BLOB STORAGE ---
    STORAGE_BUCKET: Optional[str] = None
    STORAGE_API_URL: str = "https://firebasestorage.googleapis.com/v0/b"
    STORAGE_TOKEN: Optional[str] = None

    # --- PLAN GENERATION ---
    DEFAULT_GOAL: str = "conditioning"
    DEFAULT_WORKOUTS_PER_WEEK: int = 3
    EXERCISES_PER_DAY: int = 3

    # --- POINTS ---
    WORKOUT_DAY_POINTS: int = 10
    DIET_DAY_POINTS: int = 5

    def __init__(self, **values):
        super().__init__(**values)
        # An explicit DATABASE_URL wins over the individual POSTGRES_* parts
        if self.DATABASE_URL:
            return
        db_host = os.getenv("DB_HOST_OVERRIDE", self.POSTGRES_HOST)
        if self.POSTGRES_USER and self.POSTGRES_PASSWORD and db_host and self.POSTGRES_DB:
            # URL-encode user/pass to support special characters like @ and #
            user_enc = quote_plus(self.POSTGRES_USER)
            pass_enc = quote_plus(self.POSTGRES_PASSWORD)
            self.DATABASE_URL = (
                f"postgresql://{user_enc}:{pass_enc}@{db_host}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"
            )

    @property
    def backend_configured(self) -> bool:
        """True when the selected document store has everything it needs."""
        if self.STORE_BACKEND == "json":
            return True
        if self.STORE_BACKEND == "postgres":
            return bool(self.DATABASE_URL)
        return False

    @property
    def storage_configured(self) -> bool:
        return bool(self.STORAGE_BUCKET and self.STORAGE_TOKEN)

    # --- FILE PATHS (derived from PROJECT_ROOT) ---
    @property
    def log_path(self) -> Path:
        return self.PROJECT_ROOT / "logs/fitweek.log"

    @property
    def store_path(self) -> Path:
        return self.PROJECT_ROOT / "data/store"

    @property
    def blob_path(self) -> Path:
        return self.PROJECT_ROOT / "data/blobs"


# Create a single, importable instance of the settings
settings = Settings()
