"""Application configuration settings."""

import os
from datetime import datetime

from pydantic_settings import BaseSettings, SettingsConfigDict


def _get_default_database_url() -> str:
    """Get the default database URL, using a mounted volume path if available."""
    if os.path.isdir("/data"):
        return "sqlite:////data/energydash.db"
    return "sqlite:///./energydash.db"


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
    )

    PROJECT_NAME: str = "EnergyDash"
    VERSION: str = "0.1.0"
    DEBUG: bool = True
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    LOG_LEVEL: str = "INFO"

    DATABASE_URL: str = _get_default_database_url()

    # Signs the session cookie used for flash messages
    SECRET_KEY: str = "your-secret-key-change-this-in-production"

    # Bounds enforced on site preferences
    MIN_VAL: float = -9007199254740991
    MAX_VAL: float = 9007199254740991
    MIN_DATE: datetime = datetime(1970, 1, 1)
    MAX_DATE: datetime = datetime(6970, 1, 1)
    MAX_ERRORS: int = 75

    # Reset window given to new meters that don't specify one
    DEFAULT_RESET_START: str = "00:00:00"
    DEFAULT_RESET_END: str = "23:59:59.999999"


settings = Settings()
