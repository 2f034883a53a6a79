"""
Application settings using Pydantic.

Provides environment-based configuration loading with ITCOMPLIANCE_ prefix.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings."""

    # Policy overrides (YAML); None = built-in policy
    policy_file: str | None = None

    # Logging
    log_level: str = "WARNING"
    debug: bool = False

    # CLI output format: table or json
    default_format: str = "table"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        env_prefix = "ITCOMPLIANCE_"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
