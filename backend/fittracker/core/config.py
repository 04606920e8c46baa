"""
Application configuration.
All values loaded from environment variables (or a local .env file).
"""
from typing import List

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    # Database
    DATABASE_URL: str = "postgresql+asyncpg://postgres:postgres@db:5432/fittracker"

    # CORS
    CORS_ORIGINS: List[str] = ["http://localhost:3000", "http://127.0.0.1:3000"]

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "json"  # json or console

    # Coaching defaults
    # One of: Standard, Fat Loss, Muscle
    DEFAULT_RECOMP_FOCUS: str = "Standard"
    HEADLINE_EXERCISE: str = "Bench Press"

    # Progressive overload thresholds (lbs of e1RM gained per session)
    OVERLOAD_HIGH_VELOCITY_SLOPE: float = 2.5
    OVERLOAD_STEADY_SLOPE: float = 0.5
    OVERLOAD_PLATEAU_SLOPE: float = -1.0
    OVERLOAD_DETRAINING_DAYS: float = 14.0

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
