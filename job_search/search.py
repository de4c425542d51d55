"""Search orchestration: cache lookup, paginated fetch with backoff, write-through.

One query runs start to finish on the calling thread. Pages are requested
strictly one after another; the pauses between them are deliberate pacing and
must not be parallelized away.
"""

from __future__ import annotations

import logging
import time
from typing import Callable, List, Optional

from .cache import JobCache
from .config import Settings
from .errors import FatalSearchError, FetchError
from .models import JobRecord, SearchQuery
from .normalize import cache_key
from .sources.base import PageExtractor, PageFetcher
from .utils import jittered_delay

logger = logging.getLogger(__name__)


class JobSearch:
    """Run a `SearchQuery` against a fetcher/extractor pair, backed by a cache."""

    def __init__(
        self,
        fetcher: PageFetcher,
        extractor: PageExtractor,
        cache: JobCache,
        batch_size: int = 25,
        max_consecutive_errors: int = 3,
        backoff_unit_s: float = 1.0,
        page_delay_s: float = 2.0,
        page_jitter_s: float = 1.0,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.fetcher = fetcher
        self.extractor = extractor
        self.cache = cache
        self._batch_size = batch_size
        self._max_errors = max_consecutive_errors
        self._backoff_unit = backoff_unit_s
        self._page_delay = page_delay_s
        self._page_jitter = page_jitter_s
        self._sleep = sleep

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        fetcher: PageFetcher,
        extractor: PageExtractor,
        cache: Optional[JobCache] = None,
    ) -> "JobSearch":
        return cls(
            fetcher,
            extractor,
            cache if cache is not None else JobCache(ttl_s=settings.CACHE_TTL),
            batch_size=settings.BATCH_SIZE,
            max_consecutive_errors=settings.MAX_CONSECUTIVE_ERRORS,
            backoff_unit_s=settings.BACKOFF_UNIT,
            page_delay_s=settings.PAGE_DELAY_BASE,
            page_jitter_s=settings.PAGE_DELAY_JITTER,
        )

    def close(self) -> None:
        self.fetcher.close()

    def search(self, query: SearchQuery) -> List[JobRecord]:
        """Return up to `query.limit` records (all available when limit is 0).

        Fetch failures are retried with exponential backoff; after
        `max_consecutive_errors` in a row the records gathered so far are
        returned as-is. Anything else that goes wrong raises FatalSearchError.
        """
        try:
            key = cache_key(query)
            cached = self.cache.get(key)
            if cached is not None:
                logger.info("Returning cached results for %s", key)
                return cached

            records = self._collect(query)

            if records:
                self.cache.set(key, records)
            return records
        except Exception as exc:
            logger.exception("Fatal error in job fetching")
            raise FatalSearchError(str(exc)) from exc

    def _collect(self, query: SearchQuery) -> List[JobRecord]:
        records: List[JobRecord] = []
        start = 0
        errors = 0

        while True:
            try:
                raw_page = self.fetcher.fetch_page(query, start)
            except FetchError as exc:
                errors += 1
                logger.warning("Error fetching batch at start=%d (attempt %d): %s", start, errors, exc)
                if errors >= self._max_errors:
                    logger.warning("Max consecutive errors reached. Stopping with %d jobs.", len(records))
                    break
                self._sleep(self._backoff_unit * (2**errors))
                continue

            batch = self.extractor.parse(raw_page)
            if not batch:
                break

            records.extend(batch)
            logger.info("Fetched %d jobs. Total: %d", len(batch), len(records))

            if query.limit and len(records) >= query.limit:
                records = records[: query.limit]
                break

            errors = 0
            start += self._batch_size
            self._sleep(jittered_delay(self._page_delay, self._page_jitter))

        return records
