import logging
from typing import Optional

from fake_useragent import UserAgent

logger = logging.getLogger(__name__)

# Used when the fake_useragent dataset can't be loaded
FALLBACK_UA = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/124.0.0.0 Safari/537.36"
)


class UserAgentProvider:
    """
    Rotating pool of real browser user-agent strings.
    """

    _ua: Optional[UserAgent] = None

    @classmethod
    def initialize(cls):
        """
        Load the user-agent pool if not already done.
        """
        if cls._ua is None:
            try:
                cls._ua = UserAgent(fallback=FALLBACK_UA)
            except Exception as e:
                logger.warning("Failed to initialize fake_useragent, using fallback: %s", e)

    @classmethod
    def get_random(cls) -> str:
        """
        Return a random user-agent string, or the fallback if the pool is unavailable.
        """
        cls.initialize()
        if cls._ua:
            return cls._ua.random
        return FALLBACK_UA
