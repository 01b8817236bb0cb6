"""
assetbook/config.py  -  Runtime settings

Values come from ASSETBOOK_* environment variables (or a local .env file) and
fall back to the defaults below.
"""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="ASSETBOOK_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Price lookup
    lookup_timeout: float = Field(default=10.0, gt=0)   # seconds per round trip
    history_period: str   = "5d"                        # window the last close is taken from

    # Persistence
    default_file: str = "portfolio.json"

    # Logging
    log_level: str           = "WARNING"
    log_file:  Optional[str] = None


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get or create the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reload_settings() -> Settings:
    """Re-read settings from the environment (used by tests)."""
    global _settings
    _settings = Settings()
    return _settings
