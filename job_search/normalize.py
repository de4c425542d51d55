"""Query normalization.

This module contains the deterministic mapping from a `SearchQuery` to the
guest search endpoint's URL:
- lookup tables from loose filter values to the source's filter tokens
- page offset arithmetic
- URL assembly in a fixed parameter order

The URL for offset zero doubles as the cache key, so everything here must stay
pure: same query in, byte-identical URL out.
"""

from __future__ import annotations

from typing import Dict, List, Tuple
from urllib.parse import urlencode

from .models import SearchQuery


PAGE_SIZE = 25
SEARCH_PATH = "/jobs-guest/jobs/api/seeMoreJobPostings/search"


DATE_POSTED_TOKENS: Dict[str, str] = {
    "past month": "r2592000",
    "past week": "r604800",
    "24hr": "r86400",
}

EXPERIENCE_TOKENS: Dict[str, str] = {
    "internship": "1",
    "entry level": "2",
    "associate": "3",
    "senior": "4",
    "director": "5",
    "executive": "6",
}

JOB_TYPE_TOKENS: Dict[str, str] = {
    "full time": "F",
    "full-time": "F",
    "part time": "P",
    "part-time": "P",
    "contract": "C",
    "temporary": "T",
    "volunteer": "V",
    "internship": "I",
}

REMOTE_TOKENS: Dict[str, str] = {
    "on-site": "1",
    "on site": "1",
    "remote": "2",
    "hybrid": "3",
}

# Keyed by the exact string the caller passed; "40k" or "40,000" don't match.
SALARY_TOKENS: Dict[str, str] = {
    "40000": "1",
    "60000": "2",
    "80000": "3",
    "100000": "4",
    "120000": "5",
}

SORT_TOKENS: Dict[str, str] = {
    "recent": "DD",
    "relevant": "R",
}


def _lookup(table: Dict[str, str], value: str) -> str:
    return table.get((value or "").lower(), "")


def date_posted_token(value: str) -> str:
    return _lookup(DATE_POSTED_TOKENS, value)


def experience_token(value: str) -> str:
    return _lookup(EXPERIENCE_TOKENS, value)


def job_type_token(value: str) -> str:
    return _lookup(JOB_TYPE_TOKENS, value)


def remote_token(value: str) -> str:
    return _lookup(REMOTE_TOKENS, value)


def salary_token(value: str) -> str:
    return SALARY_TOKENS.get(value or "", "")


def sort_token(value: str) -> str:
    return _lookup(SORT_TOKENS, value)


def page_offset(query: SearchQuery) -> int:
    """Offset contributed by the query's page multiplier."""
    return query.page * PAGE_SIZE


def build_params(query: SearchQuery, start: int) -> List[Tuple[str, str]]:
    """Return the request parameters in their fixed order, empty filters omitted."""
    params: List[Tuple[str, str]] = []

    if query.keyword:
        params.append(("keywords", query.keyword))
    if query.location:
        params.append(("location", query.location))

    for name, token in (
        ("f_TPR", date_posted_token(query.date_since_posted)),
        ("f_SB2", salary_token(query.salary)),
        ("f_E", experience_token(query.experience_level)),
        ("f_WT", remote_token(query.remote_filter)),
        ("f_JT", job_type_token(query.job_type)),
    ):
        if token:
            params.append((name, token))

    params.append(("start", str(start + page_offset(query))))

    sort = sort_token(query.sort_by)
    if sort:
        params.append(("sortBy", sort))

    return params


def build_url(query: SearchQuery, start: int = 0) -> str:
    """Absolute search URL for the batch beginning at `start`."""
    # '+' is the word separator from SearchQuery; keep it literal so it decodes to a space.
    return f"https://{query.host}{SEARCH_PATH}?" + urlencode(build_params(query, start), safe="+")


def cache_key(query: SearchQuery) -> str:
    """Cache key for a query: its offset-zero URL, which encodes every filter."""
    return build_url(query, 0)
