"""Configuration for the Tuiter data layer using pydantic-settings.

Supports layered sources: env > .env > defaults.
"""
from __future__ import annotations

import logging
from enum import Enum
from typing import Optional
from urllib.parse import quote_plus

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class Environment(str, Enum):
    """Deployment environments."""
    DEVELOPMENT = "development"
    TEST = "test"
    PRODUCTION = "production"


class MongoSettings(BaseSettings):
    """MongoDB connection settings."""

    model_config = SettingsConfigDict(
        env_prefix="TUITER_MONGO_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    uri: Optional[str] = Field(default=None, description="Full connection string; overrides host/port/credentials")
    host: str = Field(default="localhost", description="MongoDB host")
    port: int = Field(default=27017, description="MongoDB port")
    user: Optional[str] = Field(default=None, description="MongoDB user")
    password: Optional[str] = Field(default=None, description="MongoDB password")
    database: str = Field(default="tuiter", description="Database name")

    users_collection: str = Field(default="users", description="Collection holding user documents")
    follows_collection: str = Field(default="follows", description="Collection holding follow edges")

    # Driver tuning
    server_selection_timeout_ms: int = Field(default=5000, ge=0, description="Server selection timeout")
    max_pool_size: int = Field(default=100, gt=0, description="Max connections in the driver pool")
    app_name: str = Field(default="tuiter", description="Application name reported to the server")

    @field_validator("uri")
    @classmethod
    def _blank_uri_is_unset(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not value.strip():
            return None
        return value

    @property
    def connection_uri(self) -> str:
        """MongoDB connection string."""
        if self.uri:
            return self.uri
        if self.user:
            credentials = quote_plus(self.user)
            if self.password:
                credentials = f"{credentials}:{quote_plus(self.password)}"
            return f"mongodb://{credentials}@{self.host}:{self.port}"
        return f"mongodb://{self.host}:{self.port}"


class TuiterSettings(BaseSettings):
    """Top-level settings for services using the data layer."""

    model_config = SettingsConfigDict(
        env_prefix="TUITER_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    environment: Environment = Field(default=Environment.DEVELOPMENT, description="Deployment environment")
    log_level: str = Field(default="INFO", description="Root log level")
    mongo: MongoSettings = Field(default_factory=MongoSettings)

    @field_validator("log_level")
    @classmethod
    def _normalise_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {value}")
        return level


_settings: Optional[TuiterSettings] = None


def configure_settings(settings: TuiterSettings) -> TuiterSettings:
    """Install ``settings`` as the process-wide configuration."""
    global _settings
    _settings = settings
    logger.debug("Configured settings for environment %s", settings.environment.value)
    return settings


def get_settings() -> TuiterSettings:
    """Return the configured settings, loading them from the environment on first use."""
    global _settings
    if _settings is None:
        _settings = TuiterSettings()
    return _settings


def reset_settings() -> None:
    """Forget the configured settings. Used by tests."""
    global _settings
    _settings = None


__all__ = [
    "Environment",
    "MongoSettings",
    "TuiterSettings",
    "configure_settings",
    "get_settings",
    "reset_settings",
]
