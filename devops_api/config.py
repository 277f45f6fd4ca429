"""Flat environment-variable configuration."""

import os
from functools import lru_cache
from importlib import metadata

from pydantic import BaseModel, ConfigDict

DEFAULT_VERSION = "1.0.0"
TEST_ENVIRONMENT = "test"


def _env(*keys: str, default=None):
    for key in keys:
        value = os.getenv(key)
        if value:
            return value
    return default


def _package_version() -> str:
    try:
        return metadata.version("devops-api")
    except metadata.PackageNotFoundError:
        return DEFAULT_VERSION


class Settings(BaseModel):
    """Read-only settings injected into the request handlers."""

    model_config = ConfigDict(frozen=True)

    host: str = "0.0.0.0"
    port: int = 3000
    environment: str = "development"
    version: str = DEFAULT_VERSION
    weather_api_key: str = "your_api_key_here"

    @property
    def is_test(self) -> bool:
        return self.environment == TEST_ENVIRONMENT

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from the process environment.

        Returns:
            A Settings instance with defaults for every unset variable.
        """
        return cls(
            host=_env("HOST", default="0.0.0.0"),
            port=int(_env("PORT", default="3000")),
            environment=_env("APP_ENV", "NODE_ENV", default="development"),
            version=_env("APP_VERSION", default=None) or _package_version(),
            weather_api_key=_env("WEATHER_API_KEY", default="your_api_key_here"),
        )


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings, read once on first use."""
    return Settings.from_env()
