"""
Goal service configuration.

Copyright (C) 2025 Maigie

Licensed under the Business Source License 1.1 (BUSL-1.1).
See LICENSE file in the repository root for details.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Settings for the Health Goal Service.

    Values are read from environment variables or a local .env file.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    APP_NAME: str = "Health Goal Service"
    APP_DESCRIPTION: str = "In-memory CRUD service for health goals"
    APP_VERSION: str = "1.0.0"
    ENVIRONMENT: str = "development"
    DEBUG: bool = False

    HOST: str = "0.0.0.0"
    PORT: int = 3000

    # Empty means: DEBUG in development, INFO elsewhere
    LOG_LEVEL: str = ""

    SENTRY_DSN: str = ""
    SENTRY_TRACES_SAMPLE_RATE: float = 0.0


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
