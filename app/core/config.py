"""
app/core/config.py

Application Configuration Loader

Loads and manages application settings from environment variables
using Pydantic's BaseSettings with `.env` support.
Covers database, JWT, Redis, S3, SendGrid, OTP timing and the
free-tier wallet defaults used when accounts are created.
"""

import logging
import os
from pathlib import Path
from typing import TYPE_CHECKING

from pydantic import EmailStr
from pydantic_settings import BaseSettings, SettingsConfigDict

# ---------------------------------------------------
# Logger Configuration
# ---------------------------------------------------
logger = logging.getLogger(__name__)

# ---------------------------------------------------
# Base Directory Calculation
# ---------------------------------------------------
BASE_DIR = Path(__file__).resolve().parent.parent.parent
DEFAULT_DOTENV_PATH = BASE_DIR / ".env"


# ---------------------------------------------------
# Settings Definition
# ---------------------------------------------------
class Settings(BaseSettings):
    """
    Application-wide settings loaded from environment variables.
    """

    # --- Pydantic Settings Configuration ---
    model_config = SettingsConfigDict(
        env_file=str(DEFAULT_DOTENV_PATH),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # --- General Application Settings ---
    APP_NAME: str
    DEBUG: bool
    LOG_LEVEL: str
    BASE_URL: str

    # --- Database Settings ---
    DATABASE_URL: str
    TEST_DATABASE_URL: str

    # --- JWT Authentication Settings ---
    SECRET_KEY: str
    ALGORITHM: str
    ACCESS_TOKEN_EXPIRE_MINUTES: int

    # --- Redis Settings ---
    REDIS_HOST: str
    REDIS_PORT: int
    REDIS_DB: int
    CACHE_PREFIX: str = "cache:nikahfirst:"
    CACHE_TTL_SECONDS: int = 3600

    # --- AWS S3 Storage Settings ---
    AWS_ACCESS_KEY_ID: str
    AWS_SECRET_ACCESS_KEY: str
    AWS_REGION: str
    AWS_S3_BUCKET: str

    # --- Email Service Settings---
    SENDGRID_API_KEY: str
    MAIL_FROM: EmailStr
    MAIL_FROM_NAME: str
    EMAILS_ENABLED: bool
    MAIL_TEMPLATES_DIR: str
    SUPPORT_EMAIL: EmailStr

    # --- Security & Rate Limiting Settings ---
    MAX_FAILED_ATTEMPTS: int
    IP_PENALTY_DURATION: int
    FAILED_ATTEMPTS_WINDOW: int
    RATE_LIMIT_ENABLED: bool = True

    # --- Email OTP Settings ---
    OTP_EXPIRE_MINUTES: int = 10
    OTP_MAX_ATTEMPTS: int = 3
    OTP_RESEND_COOLDOWN_SECONDS: int = 60
    REGISTRATION_OTP_WINDOW_MINUTES: int = 30

    # --- Phone Verification Settings ---
    PHONE_OTP_EXPIRE_HOURS: int = 24
    PHONE_OTP_MAX_ATTEMPTS: int = 5
    PHONE_REQUEST_COOLDOWN_MINUTES: int = 30
    PHONE_CHANGE_COOLDOWN_DAYS: int = 30

    # --- Free Tier Wallet Defaults ---
    FREE_TIER_INITIAL_CREDITS: int = 3
    FREE_TIER_CREDIT_LIMIT: int = 5
    FREE_TIER_REDEMPTION_WINDOW_DAYS: int = 15

    # --- Photo Upload Settings ---
    PHOTO_MAX_PER_PROFILE: int = 6
    PHOTO_MAX_SIZE_MB: int = 5

    # --- Super Admin Bootstrap ---
    SUPER_ADMIN_EMAIL: EmailStr
    SUPER_ADMIN_PASSWORD: str
    SUPER_ADMIN_NAME: str = "Super Admin"

    # --- CORS Settings ---
    CORS_ALLOWED_ORIGINS: str

    # --- Calculated Properties ---
    @property
    def cors_origins(self) -> list[str]:
        """Parses the CORS_ALLOWED_ORIGINS string into a list."""
        if not self.CORS_ALLOWED_ORIGINS:
            return []
        return [origin.strip() for origin in self.CORS_ALLOWED_ORIGINS.split(",") if origin.strip()]

    @property
    def db_url(self) -> str:
        """
        Returns the appropriate database URL as a STRING based on the testing environment.
        """
        is_testing = os.getenv("PYTEST_CURRENT_TEST") is not None
        url_str = str(self.TEST_DATABASE_URL if is_testing else self.DATABASE_URL)
        if self.DEBUG:
            logger.debug(f"[CONFIG] Using DATABASE URL: {url_str}")
        return url_str

    @property
    def mail_templates_path(self) -> Path:
        """Returns the absolute path to the mail templates directory."""
        return BASE_DIR / self.MAIL_TEMPLATES_DIR

    @property
    def redis_url(self) -> str:
        return f"redis://{self.REDIS_HOST}:{self.REDIS_PORT}/{self.REDIS_DB}"


# ---------------------------------------------------
# Instantiate Settings Globally
# ---------------------------------------------------

if TYPE_CHECKING:
    # Stub settings for type hinting and editor assistance
    settings = Settings(
        APP_NAME="",
        DEBUG=False,
        LOG_LEVEL="",
        BASE_URL="",
        DATABASE_URL="",
        TEST_DATABASE_URL="",
        SECRET_KEY="",
        ALGORITHM="",
        ACCESS_TOKEN_EXPIRE_MINUTES=0,
        REDIS_HOST="",
        REDIS_PORT=0,
        REDIS_DB=0,
        AWS_ACCESS_KEY_ID="",
        AWS_SECRET_ACCESS_KEY="",
        AWS_REGION="",
        AWS_S3_BUCKET="",
        SENDGRID_API_KEY="",
        MAIL_FROM="",
        MAIL_FROM_NAME="",
        EMAILS_ENABLED=False,
        MAIL_TEMPLATES_DIR="",
        SUPPORT_EMAIL="",
        MAX_FAILED_ATTEMPTS=0,
        IP_PENALTY_DURATION=0,
        FAILED_ATTEMPTS_WINDOW=0,
        SUPER_ADMIN_EMAIL="",
        SUPER_ADMIN_PASSWORD="",
        CORS_ALLOWED_ORIGINS="",
    )
else:
    settings = Settings()

# ---------------------------------------------------
# Post-Instantiation Validation
# ---------------------------------------------------
templates_path = settings.mail_templates_path
if not templates_path.is_dir():
    error_message = f"Email templates directory not found at resolved path: {templates_path} (expected value from MAIL_TEMPLATES_DIR in .env)"
    logger.error(error_message)
    raise ValueError(error_message)
else:
    logger.info(f"Email templates directory found at: {templates_path}")
