"""
Platform configuration — environment-driven settings for all modules.
"""

import logging
from enum import Enum
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings


class Environment(str, Enum):
    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"


class Settings(BaseSettings):
    """Central configuration for HoopCoach."""

    # ── App ──────────────────────────────────────────────
    APP_NAME: str = "HoopCoach"
    APP_VERSION: str = "1.0.0"
    ENVIRONMENT: Environment = Environment.DEVELOPMENT
    DEBUG: bool = True

    # ── API ──────────────────────────────────────────────
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8000
    API_PREFIX: str = "/api/v1"
    CORS_ORIGINS: list[str] = ["*"]

    # ── Logging ──────────────────────────────────────────
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "%(asctime)s | %(name)s | %(levelname)s | %(message)s"

    # ── AI vision collaborator ───────────────────────────
    GEMINI_API_KEY: str = Field(default="")
    GEMINI_MODEL: str = "gemini-1.5-pro"
    VIDEO_MIME_TYPE: str = "video/mp4"
    MAX_VIDEO_SIZE_MB: int = 200
    USE_EXAMPLE_ON_QUOTA: bool = True

    # ── Timeline sync ────────────────────────────────────
    MATCH_TOLERANCE_SECONDS: float = 2.0
    OVERLAY_DWELL_SECONDS: float = 5.0
    SAMPLE_INTERVAL_SECONDS: float = 0.1
    SAMPLE_EPSILON_SECONDS: float = 0.05
    SKIP_SECONDS: float = 10.0

    # ── Analysis progress ticker ─────────────────────────
    PROGRESS_TICK_SECONDS: float = 0.5
    PROGRESS_STEP: int = 5
    PROGRESS_CAP: int = 95

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Return the process-wide settings, built once on first use."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def configure_logging(settings: Optional[Settings] = None) -> None:
    """Attach a single stream handler to the ``hoopcoach`` logger tree."""
    settings = settings or get_settings()
    logger = logging.getLogger("hoopcoach")
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(settings.LOG_FORMAT))
        logger.addHandler(handler)
    logger.setLevel(settings.LOG_LEVEL.upper())
