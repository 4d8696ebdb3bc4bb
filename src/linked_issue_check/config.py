"""
Configuration management for Linked-Issue Check.
"""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    # GitHub settings
    github_token: Optional[str] = Field(default=None, json_schema_extra={"env": "GITHUB_TOKEN"})
    github_repository: Optional[str] = Field(default=None, json_schema_extra={"env": "GITHUB_REPOSITORY"})
    github_event_path: Optional[str] = Field(default=None, json_schema_extra={"env": "GITHUB_EVENT_PATH"})
    github_api_url: str = Field(default="https://api.github.com", json_schema_extra={"env": "GITHUB_API_URL"})
    github_graphql_url: str = Field(default="https://api.github.com/graphql", json_schema_extra={"env": "GITHUB_GRAPHQL_URL"})

    # Detection settings
    closing_issues_limit: int = Field(default=10, json_schema_extra={"env": "CLOSING_ISSUES_LIMIT"})
    request_timeout: float = Field(default=30.0, json_schema_extra={"env": "REQUEST_TIMEOUT"})

    # Logging settings
    log_level: str = Field(default="INFO", json_schema_extra={"env": "LOG_LEVEL"})
    log_file: Optional[str] = Field(default=None, json_schema_extra={"env": "LOG_FILE"})

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # Ignore unexpected environment variables
    )


# Global settings instance with error handling to prevent import-time failures
try:
    _settings = Settings()
except Exception as e:
    # A malformed variable (e.g. CLOSING_ISSUES_LIMIT=abc) must not break `--help`
    import warnings

    warnings.warn(f"Failed to load settings: {e}. Using default configuration.")
    _settings = Settings.model_construct()

settings: Settings = _settings
