"""
Application configuration and environment settings.
"""
from datetime import date
from pydantic_settings import BaseSettings
from pydantic import field_validator
from typing import List, Union


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    APP_NAME: str = "Kickoff"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Database
    DATABASE_URL: str = "sqlite:///./kickoff.db"
    DB_ECHO: bool = False

    # CORS
    CORS_ORIGINS: Union[List[str], str] = ["http://localhost:3000"]

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def parse_cors_origins(cls, v):
        """Parse CORS_ORIGINS from comma-separated string or list."""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    # Trip
    TRIP_NAME: str = "KICKOFF 2026"
    TRIP_START_DATE: date = date(2026, 6, 11)
    CURRENCY_SYMBOL: str = "$"  # Used in shareable text summaries only

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
