"""Configuration via environment variables (prefix ``FIELDGUARD_``)."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """fieldguard settings loaded from environment variables."""

    # Rejection
    REJECT_STATUS_CODE: int = Field(default=400, ge=400, le=499)

    # Logging
    DEBUG: bool = False
    LOG_LEVEL: str = "info"

    # Demo server
    APP_NAME: str = "fieldguard"
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    model_config = {"env_prefix": "FIELDGUARD_", "env_file": ".env", "env_file_encoding": "utf-8"}


@lru_cache
def get_settings() -> Settings:
    return Settings()
