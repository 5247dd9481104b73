"""
Configuration settings for the ProjectFy core.
Values are loaded from environment variables or a local .env file.
"""

from pydantic_settings import BaseSettings
from pydantic import Field
from typing import Literal


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    app_name: str = "ProjectFy"
    debug: bool = Field(default=False)
    environment: str = Field(default="production")

    # Storage
    storage_backend: Literal["sqlite", "redis", "memory"] = Field(default="sqlite")
    database_url: str = Field(default="sqlite+aiosqlite:///./data/projectfy.db")
    database_echo: bool = Field(default=False)
    redis_url: str = Field(default="redis://localhost:6379")
    redis_prefix: str = Field(default="projectfy:")

    # Attachments
    attachments_dir: str = Field(default="./data/attachments")

    # Dashboard / reports
    occupancy_capacity: int = Field(default=5)
    report_top_projects: int = Field(default=5)
    report_hours_order: Literal["insertion", "magnitude"] = Field(default="insertion")

    # Alerts
    dedupe_deadline_alerts: bool = Field(default=True)
    timezone: str = Field(default="America/Sao_Paulo")

    # Registration defaults
    default_weekly_hours: int = Field(default=40)
    default_daily_hours: int = Field(default=8)

    # Password hashing (scrypt work factor, must be a power of two)
    password_hash_n: int = Field(default=2 ** 14)

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


# Global settings instance
settings = Settings()


def get_settings() -> Settings:
    """Get the application settings."""
    return settings
