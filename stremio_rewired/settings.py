"""Process settings for the CLI and for addons served with uvicorn."""

import logging
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .launch import STAGING_URL

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"
LOG_DATEFMT = "%H:%M:%S"
LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class Settings(BaseSettings):
    """Read from ``STREMIO_REWIRED_*`` environment variables or a .env file."""

    model_config = SettingsConfigDict(
        env_prefix="STREMIO_REWIRED_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    host: str = Field(default="0.0.0.0", description="Server host address")
    port: int = Field(default=7000, description="Server port number", ge=1, le=65535)
    log_level: str = Field(default="INFO", description="Logging level")
    staging_url: str = Field(
        default=STAGING_URL,
        description="Stremio web app used to inspect a local addon",
    )
    open_browser: bool = Field(
        default=False,
        description="Open the staging inspector when an addon starts",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"Invalid log level: {v}")
        return level


@lru_cache
def get_settings() -> Settings:
    return Settings()


def setup_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt=LOG_DATEFMT)
