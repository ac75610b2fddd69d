"""
Configuration management for Support Desk.
"""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings.

    Values come from the environment (case-insensitive field names) or a
    local ``.env`` file. The settings object is built once per process and
    treated as read-only afterwards.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application
    app_name: str = Field(default="Support Ticketing System")
    debug: bool = Field(default=False)
    environment: str = Field(default="development")

    # API
    api_host: str = Field(default="127.0.0.1")
    api_port: int = Field(default=3000)

    # Database
    database_url: str = Field(default="sqlite:///./support_desk.db")
    db_pool_size: int = Field(default=5, ge=1)

    # Security
    jwt_secret: Optional[str] = Field(
        default=None,
        description="HMAC signing secret. A random per-process secret is used when unset.",
    )
    jwt_algorithm: str = Field(default="HS256")
    token_expire_hours: int = Field(default=24, ge=1)

    # Logging
    log_level: str = Field(default="INFO")
    log_format: str = Field(default="json")

    # Notifications
    notification_sender: str = Field(default="Support Team")


# Global settings instance
settings = Settings()


def get_settings() -> Settings:
    """Get application settings."""
    return settings
