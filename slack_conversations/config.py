"""
Configuration management for the Slack conversations client.

This module uses Pydantic Settings for environment-based configuration
with validation and type checking.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Client settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Logging
    debug: bool = Field(default=False, description="Log submitted form keys for every call")
    log_level: str = Field(default="INFO", description="Logging level")

    # Slack Web API
    slack_bot_token: str = Field(
        default="",
        description="Slack token attached to every API call"
    )
    slack_api_url: str = Field(
        default="https://slack.com/api/",
        description="Base URL the method name is appended to"
    )
    slack_timeout: float = Field(
        default=30.0,
        description="Transport timeout in seconds for a single HTTP round-trip"
    )


# Global settings instance
settings = Settings()
