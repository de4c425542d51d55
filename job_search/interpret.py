"""Turning a free-text request into a `SearchQuery`.

Only a pass-through interpreter ships today. Swap in a smarter
`QueryInterpreter` (NER, LLM, ...) without touching the search pipeline.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from .models import SearchQuery


class QueryInterpreter(ABC):
    """Maps raw user text to structured search criteria."""

    @abstractmethod
    def extract(self, raw_text: str) -> SearchQuery:
        raise NotImplementedError


class PassthroughInterpreter(QueryInterpreter):
    """Use the whole text as the keyword filter, with a fixed location and limit."""

    def __init__(self, location: str = "London", limit: int = 10) -> None:
        self._location = location
        self._limit = limit

    def extract(self, raw_text: str) -> SearchQuery:
        return SearchQuery(keyword=raw_text, location=self._location, limit=self._limit)
