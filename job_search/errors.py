"""Exception types raised by the search pipeline.

Per-card parse problems are not represented here: the extractor logs and drops
them. Fetch errors never reach callers either; `JobSearch` retries them and
returns partial results once it gives up.
"""

from __future__ import annotations

from typing import Optional


class JobSearchError(Exception):
    """Base class for all pipeline errors."""


class InputError(JobSearchError):
    """The caller's request was missing or malformed."""


class FetchError(JobSearchError):
    """A single page request failed."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class RateLimitError(FetchError):
    """The source answered 429 Too Many Requests."""

    def __init__(self, message: str = "Rate limit reached") -> None:
        super().__init__(message, status_code=429)


class TransientFetchError(FetchError):
    """Timeout, transport failure or any other non-success status."""


class FatalSearchError(JobSearchError):
    """Something outside the retry loop faulted (cache, extractor, ...)."""


class SearchFailedError(JobSearchError):
    """Generic failure surfaced by the caller-facing operation."""
