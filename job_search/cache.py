"""In-process TTL cache for search results."""

from __future__ import annotations

import logging
import threading
import time
from typing import Callable, Dict, List, NamedTuple, Optional, Sequence, Tuple

from .models import JobRecord

logger = logging.getLogger(__name__)


class CacheEntry(NamedTuple):
    records: Tuple[JobRecord, ...]
    created_at: float


class JobCache:
    """Maps a cache key (offset-zero search URL) to the records it produced.

    An entry is served while `now - created_at <= ttl_s`. Expired entries are
    dropped lazily by `get`, or all at once by `sweep`. The clock is injectable
    so tests can move time forward without sleeping.
    """

    def __init__(self, ttl_s: float = 3600.0, clock: Callable[[], float] = time.monotonic) -> None:
        self._ttl = ttl_s
        self._clock = clock
        self._entries: Dict[str, CacheEntry] = {}
        self._lock = threading.Lock()

    @property
    def ttl(self) -> float:
        return self._ttl

    def _expired(self, entry: CacheEntry, now: float) -> bool:
        return now - entry.created_at > self._ttl

    def get(self, key: str) -> Optional[List[JobRecord]]:
        """Return the cached records for `key`, or None when absent or expired."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if self._expired(entry, self._clock()):
                del self._entries[key]
                return None
            # Fresh list per hit; the stored snapshot must not change under callers.
            return list(entry.records)

    def set(self, key: str, records: Sequence[JobRecord]) -> None:
        with self._lock:
            self._entries[key] = CacheEntry(tuple(records), self._clock())

    def sweep(self) -> int:
        """Delete every expired entry. Returns how many were removed."""
        with self._lock:
            now = self._clock()
            stale = [k for k, e in self._entries.items() if self._expired(e, now)]
            for key in stale:
                del self._entries[key]
        if stale:
            logger.debug("Swept %d expired cache entries", len(stale))
        return len(stale)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
