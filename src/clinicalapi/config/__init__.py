"""Configuration module."""

from clinicalapi.config.settings import BillingSettings, DatabaseSettings, Settings

__all__ = ["BillingSettings", "DatabaseSettings", "Settings"]
