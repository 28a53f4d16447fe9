"""
Core configuration module for genelib.

This module manages process-level settings (logging and Logfire export) using
Pydantic Settings, with environment variable and .env file support. Settings
for an individual evolution run live in src.genelib.core.config.
"""

from typing import Any, Dict

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseSettings):
    """
    Process settings with environment variable support.

    All settings can be overridden via environment variables.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Application settings
    app_name: str = "genelib"
    app_version: str = "1.0.0"
    environment: str = Field(default="development")

    # Logging settings
    log_level: str = Field(default="INFO")

    # Logfire settings
    logfire_token: str = Field(default="")
    logfire_service_name: str = Field(default="genelib")
    logfire_environment: str = Field(default="development")

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v):
        """Accept log levels in any case."""
        level = str(v).upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        return level

    def get_logfire_settings(self) -> Dict[str, Any]:
        """Get Logfire configuration."""
        return {
            "token": self.logfire_token or None,
            "service_name": self.logfire_service_name,
            "environment": self.logfire_environment,
        }

    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment.lower() == "production"


# Create global settings instance
settings = Settings()
