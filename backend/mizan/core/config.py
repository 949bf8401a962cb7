# mizan/core/config.py
"""
Application configuration using Pydantic Settings
"""
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List
import json
from pydantic import field_validator


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables
    """

    # Application
    APP_NAME: str = "Mizan"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"

    # CORS
    CORS_ORIGINS: str = '["http://localhost:3000"]'

    # Office calendar. Blank means the host's local time.
    OFFICE_TIMEZONE: str = ""

    # Alerts
    POA_WARNING_DAYS: int = 30
    UNKNOWN_CASE_LABEL: str = "Unknown case"
    UNKNOWN_CLIENT_LABEL: str = "Unknown"

    @field_validator("OFFICE_TIMEZONE", "LOG_LEVEL", mode="before")
    @classmethod
    def strip_value(cls, v: str) -> str:
        if isinstance(v, str):
            return v.strip()
        return v

    # Pydantic v2 configuration
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore"
    )

    @property
    def cors_origins_list(self) -> List[str]:
        """Parse CORS origins from string to list"""
        try:
            return json.loads(self.CORS_ORIGINS)
        except json.JSONDecodeError:
            return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]


# Create settings instance
settings = Settings()
