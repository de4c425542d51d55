"""Base classes for source connectors.

A connector is split in two so a markup change only touches the extractor:
the fetcher turns (query, offset) into raw page text, the extractor turns raw
page text into records.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List

from ..models import JobRecord, SearchQuery


class PageFetcher(ABC):
    """Fetches one batch of search results per call, without retrying."""

    @abstractmethod
    def fetch_page(self, query: SearchQuery, start: int) -> str:
        """Return the raw page for the batch at `start`.

        Raises:
            RateLimitError: the source throttled the request.
            TransientFetchError: any other failed attempt.
        """
        raise NotImplementedError

    def close(self) -> None:
        """Release any connections held between pages."""


class PageExtractor(ABC):
    """Parses a raw results page into job records."""

    @abstractmethod
    def parse(self, raw_page: str) -> List[JobRecord]:
        """Return records in page order. Must not raise; bad input yields []."""
        raise NotImplementedError
