"""LinkedIn guest job search package.

The package is laid out like a small connector engine:
- `models.py` defines the query and record schema.
- `normalize.py` maps a query to the source's request URL (also the cache key).
- `sources/` contains the fetcher and markup extractor for the source.
- `search.py` drives pagination, backoff and caching.
- `tool.py` is the caller-facing operation.
"""

from .cache import JobCache
from .models import JobRecord, SearchQuery
from .search import JobSearch

__all__ = ["JobCache", "JobRecord", "JobSearch", "SearchQuery"]
