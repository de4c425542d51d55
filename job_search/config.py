import logging
from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

BASE_DIR = Path(__file__).resolve().parent.parent

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """
    Configuration for the job search pipeline, read from the environment or `.env`.
    """

    model_config = SettingsConfigDict(
        env_file=BASE_DIR / ".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Credentials for the authenticated API mode (not used by guest search yet)
    LINKEDIN_CLIENT_ID: Optional[str] = None
    LINKEDIN_CLIENT_SECRET: Optional[str] = None

    LINKEDIN_HOST: str = "www.linkedin.com"

    # HTTP
    REQUEST_TIMEOUT: float = 10.0  # seconds

    # Pagination & retries
    BATCH_SIZE: int = 25
    MAX_CONSECUTIVE_ERRORS: int = 3
    BACKOFF_UNIT: float = 1.0  # seconds; the n-th consecutive failure waits 2**n units
    PAGE_DELAY_BASE: float = 2.0  # seconds between successful pages
    PAGE_DELAY_JITTER: float = 1.0

    # Cache
    CACHE_TTL: float = 3600.0  # seconds

    # Defaults used when a free-text query is interpreted
    DEFAULT_LOCATION: str = "London"
    DEFAULT_LIMIT: int = 10

    LOG_LEVEL: str = "INFO"


def warn_if_missing_credentials(settings: Settings) -> bool:
    """
    Log a warning when the API credentials are absent. Returns True if both are set.
    """
    if settings.LINKEDIN_CLIENT_ID and settings.LINKEDIN_CLIENT_SECRET:
        return True
    logger.warning("LinkedIn API credentials not found in environment variables.")
    return False


settings = Settings()
