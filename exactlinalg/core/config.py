"""
Library configuration.

Centralized defaults for the square-root calculator and logging, overridable
through environment variables prefixed with ``EXACTLINALG_``.
"""

from decimal import Decimal
from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Library settings"""

    model_config = SettingsConfigDict(
        env_prefix="EXACTLINALG_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Square root calculator
    SQRT_PRECISION: Decimal = Decimal("0.0000000001")
    SQRT_SCALE: int = 10
    SQRT_ROUNDING_MODE: str = "HALF_UP"
    SQRT_MAX_ITERATIONS: int = 100

    # Significant digits used for inexact conversions (34 matches DECIMAL128)
    WORKING_PRECISION: int = 34

    # Logging
    LOG_LEVEL: str = "WARNING"
    LOG_FORMAT: str = "text"  # json or text
    LOG_FILE: Optional[str] = None


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


# Global settings instance
settings = get_settings()
