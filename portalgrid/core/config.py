"""Core configuration settings for the server."""

import os
from functools import lru_cache
from typing import Union

from loguru import logger
from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Server settings loaded from environment variables."""

    # Development settings
    reload: bool = False
    debug: bool = False
    log_level: str = "INFO"

    # API settings
    api_host: str = "localhost"
    api_port: int = 8001

    # CORS settings
    cors_origins: Union[list[str], str] = ["http://localhost:3000"]

    # Defaults for newly created layouts
    default_layout_name: str = "default"
    default_cols: int = 12
    default_row_height: int = 90
    default_gap: int = 8

    @field_validator("default_cols", "default_row_height")
    @classmethod
    def validate_positive(cls, value: int) -> int:
        """Grid defaults must be at least one cell / pixel."""
        if value < 1:
            raise ValueError(f"Grid default must be positive, got {value}")
        return value

    @field_validator("default_gap")
    @classmethod
    def validate_gap(cls, value: int) -> int:
        if value < 0:
            raise ValueError(f"Gap cannot be negative, got {value}")
        return value

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        valid_levels = ["TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR"]
        level = value.upper()
        if level not in valid_levels:
            logger.warning(f"Invalid log_level '{value}', defaulting to 'INFO'")
            return "INFO"
        return level

    @field_validator("cors_origins", mode="before")
    @classmethod
    def parse_cors_origins(cls, value):
        """Parse the cors_origins setting.

        Args:
            value: Comma-separated string or list of origins

        Returns:
            List of origins
        """
        if isinstance(value, str):
            origins = [origin.strip() for origin in value.split(",") if origin.strip()]
            logger.info(f"[Config] Parsed cors_origins: {origins}")
            return origins
        elif value is None:
            return []

        return value

    class Config:
        env_prefix = "PORTALGRID_"
        env_file = str(os.getenv("PORTALGRID_ENV_FILE", ".env"))
        env_file_encoding = "utf-8"
        extra = "ignore"


@lru_cache
def get_server_settings() -> Settings:
    """Get cached server settings instance.

    Returns:
        Settings instance configured for server operations
    """
    return Settings()
