"""
API gateway configuration.

Copyright (C) 2025 Maigie

Licensed under the Business Source License 1.1 (BUSL-1.1).
See LICENSE file in the repository root for details.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings for the API gateway."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    APP_NAME: str = "API Gateway"
    APP_VERSION: str = "1.0.0"
    ENVIRONMENT: str = "development"
    DEBUG: bool = False

    HOST: str = "0.0.0.0"
    PORT: int = 8080

    UPSTREAM_URL: str = "http://localhost:3000"
    UPSTREAM_TIMEOUT: float = 30.0

    CORS_ORIGINS: list[str] = ["*"]

    LOG_LEVEL: str = ""

    SENTRY_DSN: str = ""
    SENTRY_TRACES_SAMPLE_RATE: float = 0.0

    @property
    def upstream_health_url(self) -> str:
        """Health URL advertised for the goal service."""
        return f"{self.UPSTREAM_URL.rstrip('/')}/health"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
