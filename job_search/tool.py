"""Caller-facing search operation.

`chat_linkedin_jobs` is what a tool host (an MCP server, a chat bot, the CLI)
invokes. It validates the arguments, interprets the free-text query, runs the
search and returns the records as a JSON string. Retry counts and backoff
never leak out: callers get records or a terminal error.
"""

from __future__ import annotations

import json
import logging
import threading
from typing import Any, Mapping, Optional, Sequence

from .config import Settings, settings as default_settings, warn_if_missing_credentials
from .errors import InputError, SearchFailedError
from .interpret import PassthroughInterpreter, QueryInterpreter
from .models import JobRecord
from .search import JobSearch
from .sources.linkedin import LinkedInCardExtractor, LinkedInFetcher

logger = logging.getLogger(__name__)

TOOL_NAME = "chat_linkedin_jobs"

TOOL_DEFINITION = {
    "name": TOOL_NAME,
    "description": "Search for jobs on LinkedIn using natural language",
    "inputSchema": {
        "type": "object",
        "properties": {
            "query": {
                "type": "string",
                "description": "Natural language query for job search (e.g., 'software engineer jobs in London')",
            },
        },
        "required": ["query"],
    },
}

_default_search: Optional[JobSearch] = None
_default_lock = threading.Lock()

# Credentials are checked once, when a tool host loads this module.
warn_if_missing_credentials(default_settings)


def build_search(cfg: Settings) -> JobSearch:
    """Wire the LinkedIn connector and a fresh cache according to `cfg`."""
    fetcher = LinkedInFetcher(timeout_s=cfg.REQUEST_TIMEOUT)
    return JobSearch.from_settings(cfg, fetcher, LinkedInCardExtractor())


def get_default_search() -> JobSearch:
    """Process-wide search instance, created on first use."""
    global _default_search
    with _default_lock:
        if _default_search is None:
            _default_search = build_search(default_settings)
        return _default_search


def records_to_json(records: Sequence[JobRecord]) -> str:
    return json.dumps([r.to_payload() for r in records], indent=2, ensure_ascii=False)


def chat_linkedin_jobs(
    arguments: Optional[Mapping[str, Any]],
    search: Optional[JobSearch] = None,
    interpreter: Optional[QueryInterpreter] = None,
) -> str:
    """Run a free-text job search and return the records as a JSON array.

    Raises:
        InputError: `query` is missing, empty or not a string.
        SearchFailedError: the search itself failed.
    """
    raw = (arguments or {}).get("query")
    if not raw or not isinstance(raw, str):
        raise InputError("Query is required and must be a string")

    if search is None:
        search = get_default_search()
    if interpreter is None:
        interpreter = PassthroughInterpreter(
            location=default_settings.DEFAULT_LOCATION,
            limit=default_settings.DEFAULT_LIMIT,
        )

    try:
        query = interpreter.extract(raw)
        records = search.search(query)
    except Exception as exc:
        logger.error("Error fetching jobs: %s", exc)
        raise SearchFailedError("Failed to fetch jobs") from exc

    return records_to_json(records)


def clear_cache() -> int:
    """Drop expired entries from the default search's cache."""
    return get_default_search().cache.sweep()


def cache_size() -> int:
    return len(get_default_search().cache)
