"""
Application configuration.

All configuration is loaded from environment variables.
Never hardcode connection strings or per-install choices
such as the currency symbol in code.
"""

import os
from functools import lru_cache

from dotenv import load_dotenv

# Load .env file into environment variables
load_dotenv()


class Settings:
    """Application settings loaded from environment variables."""

    # Application
    APP_NAME: str = "Bookkeeping Ledger"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"

    # Server
    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT", "8000"))

    # Database
    DATABASE_URL: str = os.getenv(
        "DATABASE_URL",
        "sqlite:///./bookkeeping.db"
    )

    # Environment
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

    # Bookkeeping
    # The currency symbol used until the user picks one in settings.
    DEFAULT_CURRENCY: str = os.getenv("DEFAULT_CURRENCY", "৳")
    # Requests without an X-Username header act as this user.
    DEFAULT_USERNAME: str = os.getenv("DEFAULT_USERNAME", "default")
    SEED_DEFAULT_ACCOUNTS: bool = (
        os.getenv("SEED_DEFAULT_ACCOUNTS", "true").lower() == "true"
    )


@lru_cache()
def get_settings() -> Settings:
    """
    Return cached settings instance.

    Using lru_cache means the Settings object is created once
    and reused for all subsequent calls. This avoids reading
    environment variables repeatedly.
    """
    return Settings()
