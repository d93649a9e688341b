"""
Configuration management for the GoMarket cart
"""


import threading
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from gomarket_cart.infrastructure.utilities.constants import StorageSettings


class Settings(BaseSettings):
    """Application settings"""

    # Persistence configuration
    storage_key: str = Field(StorageSettings.PRODUCTS_KEY, min_length=1)
    storage_backend: Literal["memory", "sqlalchemy"] = StorageSettings.MEMORY_BACKEND
    database_url: str = StorageSettings.DEFAULT_DATABASE_URL

    # Application settings
    log_level: str = "INFO"
    log_dir: str = "logs"
    environment: str = "development"

    model_config = SettingsConfigDict(
        env_prefix="GOMARKET_CART_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Normalize and validate the log level name"""
        level = value.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {value}")
        return level


_settings_instance: Settings | None = None
_settings_lock = threading.Lock()


def get_config() -> Settings:
    """Get the global settings instance, ensuring thread safety."""
    global _settings_instance
    if _settings_instance is None:
        with _settings_lock:
            if _settings_instance is None:
                _settings_instance = Settings()
    return _settings_instance


def reset_config() -> None:
    """Drop the cached settings so the next call re-reads the environment"""
    global _settings_instance
    with _settings_lock:
        _settings_instance = None
