"""Application settings and configuration."""

from __future__ import annotations

import os
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseSettings(BaseModel):
    """SQLite database configuration."""

    model_config = ConfigDict(validate_assignment=True)

    path: str = "hospital.db"
    timeout: float = Field(default=5.0, gt=0)


class BillingSettings(BaseModel):
    """Tariffs applied when generating bills."""

    model_config = ConfigDict(validate_assignment=True)

    room_charge_per_day: float = Field(default=500.0, ge=0)
    medication_markup: float = Field(default=1.2, ge=1.0)
    due_days: int = Field(default=30, ge=0)


class Settings(BaseSettings):
    """Application configuration.

    Settings are loaded from environment variables or .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_nested_delimiter="__",
    )

    # Database Configuration
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)

    # Billing Configuration
    billing: BillingSettings = Field(default_factory=BillingSettings)

    # Logging
    log_level: str = "INFO"

    def __init__(self, **data: Any) -> None:
        """Initialize settings with environment variable overrides."""
        super().__init__(**data)
        self._load_env_overrides()

    def _load_env_overrides(self) -> None:
        """Load environment variable overrides for nested settings."""
        # Database overrides
        if path := os.getenv("CLINICALAPI_DB_PATH"):
            self.database.path = path

        # Billing overrides
        if rate := os.getenv("ROOM_CHARGE_PER_DAY"):
            self.billing.room_charge_per_day = float(rate)
        if markup := os.getenv("MEDICATION_MARKUP"):
            self.billing.medication_markup = float(markup)
        if days := os.getenv("BILL_DUE_DAYS"):
            self.billing.due_days = int(days)
