"""Labeler configuration using pydantic-settings.

This module defines the LabelerSettings class that reads configuration
from environment variables (and an optional .env file) once at start-up.
Only the GitHub token is required; without Text Analytics credentials the
key-phrase labeling rule is skipped.
"""

import logging

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_WELCOME_MESSAGE = "Thanks for opening this issue!"


class LabelerSettings(BaseSettings):
    """Issue labeler configuration from environment variables.

    Required fields (must be set via environment variables):
    - github_token: GitHub API token for posting comments and labels
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    # -------------------------------------------------------------------------
    # GitHub Configuration
    # -------------------------------------------------------------------------
    # GitHub API token for creating comments and labels
    github_token: str

    # Base URL for GitHub API (supports GitHub Enterprise)
    github_base_url: str = "https://api.github.com"

    # Secret for validating webhook signatures; empty disables the check
    webhook_secret: str = ""

    # Comment posted on newly opened issues
    welcome_message: str = DEFAULT_WELCOME_MESSAGE

    # -------------------------------------------------------------------------
    # Text Analytics Configuration
    # -------------------------------------------------------------------------
    # Cognitive Services subscription key
    text_analytics_key: str = ""

    # Base URL of the Text Analytics resource
    text_analytics_endpoint: str = ""

    # Timeout in seconds for a key-phrase request
    text_analytics_timeout: float = 5.0

    # -------------------------------------------------------------------------
    # Server Configuration
    # -------------------------------------------------------------------------
    # Host address to bind the server to
    host: str = "0.0.0.0"

    # Port number for the server
    port: int = 8080

    # Root logging level
    log_level: str = "INFO"

    @property
    def key_phrases_enabled(self) -> bool:
        """Key phrases are only extracted when both credentials are set."""
        return bool(
            self.text_analytics_key.strip() and self.text_analytics_endpoint.strip()
        )

    # -------------------------------------------------------------------------
    # Validators
    # -------------------------------------------------------------------------
    @field_validator("github_token")
    @classmethod
    def validate_github_token(cls, v: str) -> str:
        """Validate that GitHub token is not empty."""
        if not v or not v.strip():
            raise ValueError("github_token cannot be empty")
        return v

    @field_validator("github_base_url")
    @classmethod
    def validate_github_base_url(cls, v: str) -> str:
        """Validate that the GitHub base URL is a valid URL format."""
        if not v.startswith(("http://", "https://")):
            raise ValueError("github_base_url must start with http:// or https://")
        return v

    @field_validator("text_analytics_endpoint")
    @classmethod
    def validate_text_analytics_endpoint(cls, v: str) -> str:
        """Validate the endpoint format when one is configured."""
        if v and not v.startswith(("http://", "https://")):
            raise ValueError(
                "text_analytics_endpoint must start with http:// or https://"
            )
        return v

    @field_validator("text_analytics_timeout")
    @classmethod
    def validate_text_analytics_timeout(cls, v: float) -> float:
        """Validate that the timeout is positive."""
        if v <= 0:
            raise ValueError("text_analytics_timeout must be positive")
        return v

    @field_validator("port")
    @classmethod
    def validate_port(cls, v: int) -> int:
        """Validate that port is in valid range."""
        if not 1 <= v <= 65535:
            raise ValueError("port must be between 1 and 65535")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate that the log level is a known logging level name."""
        level = v.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown log_level: {v}")
        return level


def get_settings() -> LabelerSettings:
    """Create and return LabelerSettings instance.

    Returns:
        LabelerSettings: Configured settings instance.

    Raises:
        pydantic.ValidationError: If required fields are missing or invalid.
    """
    return LabelerSettings()
