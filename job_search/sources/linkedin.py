"""LinkedIn guest search connector.

The guest endpoint returns an HTML fragment: a flat run of `<li>` result cards,
25 per batch, addressed by a `start` offset. No login is involved; we only send
the headers a browser would send for the same-origin XHR on the public jobs page.
"""

from __future__ import annotations

import logging
import threading
from typing import Callable, List, Optional

import httpx
from bs4 import BeautifulSoup
from bs4.element import Tag

from ..errors import RateLimitError, TransientFetchError
from ..models import SALARY_NOT_SPECIFIED, JobRecord, SearchQuery
from ..normalize import build_url
from ..utils import collapse_whitespace
from .base import PageExtractor, PageFetcher
from .user_agent import UserAgentProvider

logger = logging.getLogger(__name__)


# Result card selectors. Centralized so a layout change only touches this block.
CARD_SELECTOR = "li"
TITLE_SELECTOR = ".base-search-card__title"
COMPANY_SELECTOR = ".base-search-card__subtitle"
LOCATION_SELECTOR = ".job-search-card__location"
DATE_SELECTOR = "time"
SALARY_SELECTOR = ".job-search-card__salary-info"
LINK_SELECTOR = ".base-card__full-link"
LOGO_SELECTOR = ".artdeco-entity-image"
LISTDATE_SELECTOR = ".job-search-card__listdate"


class LinkedInFetcher(PageFetcher):
    """Single-attempt fetch of one result batch.

    One `httpx.Client` is kept open across pages so consecutive batches reuse
    the connection; call `close()` (or use the fetcher as a context manager)
    when done.
    """

    def __init__(
        self,
        timeout_s: float = 10.0,
        user_agent: Callable[[], str] = UserAgentProvider.get_random,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self._timeout = timeout_s
        self._user_agent = user_agent
        self._transport = transport
        self._client: Optional[httpx.Client] = None
        self._lock = threading.Lock()

    def _get_client(self) -> httpx.Client:
        with self._lock:
            if self._client is None or self._client.is_closed:
                self._client = httpx.Client(
                    timeout=self._timeout, follow_redirects=True, transport=self._transport
                )
            return self._client

    def close(self) -> None:
        with self._lock:
            if self._client is not None:
                self._client.close()
                self._client = None

    def __enter__(self) -> "LinkedInFetcher":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def _headers(self, host: str) -> dict:
        return {
            "User-Agent": self._user_agent(),
            "Accept": "application/json, text/javascript, */*; q=0.01",
            "Accept-Language": "en-US,en;q=0.9",
            "Accept-Encoding": "gzip, deflate",
            "Referer": f"https://{host}/jobs",
            "X-Requested-With": "XMLHttpRequest",
            "Connection": "keep-alive",
            "Sec-Fetch-Dest": "empty",
            "Sec-Fetch-Mode": "cors",
            "Sec-Fetch-Site": "same-origin",
            "Cache-Control": "no-cache",
            "Pragma": "no-cache",
        }

    def fetch_page(self, query: SearchQuery, start: int) -> str:
        url = build_url(query, start)
        try:
            resp = self._get_client().get(url, headers=self._headers(query.host))
        except httpx.TimeoutException as exc:
            raise TransientFetchError(f"Timed out fetching start={start}: {exc}") from exc
        except httpx.RequestError as exc:
            raise TransientFetchError(f"Request failed for start={start}: {exc}") from exc

        if resp.status_code == 429:
            raise RateLimitError()
        if resp.status_code != 200:
            raise TransientFetchError(
                f"Unexpected status {resp.status_code} for start={start}",
                status_code=resp.status_code,
            )
        return resp.text


def _text(card: Tag, selector: str) -> str:
    el = card.select_one(selector)
    return el.get_text().strip() if el is not None else ""


def _attr(card: Tag, selector: str, attr: str) -> Optional[str]:
    el = card.select_one(selector)
    if el is None:
        return None
    value = el.get(attr)
    return value.strip() if isinstance(value, str) and value.strip() else None


class LinkedInCardExtractor(PageExtractor):
    """Turn a guest search HTML fragment into JobRecords."""

    def _parse_card(self, card: Tag) -> Optional[JobRecord]:
        position = _text(card, TITLE_SELECTOR)
        company = _text(card, COMPANY_SELECTOR)
        if not position or not company:
            return None

        salary = collapse_whitespace(_text(card, SALARY_SELECTOR))

        return JobRecord(
            position=position,
            company=company,
            location=_text(card, LOCATION_SELECTOR),
            date=_attr(card, DATE_SELECTOR, "datetime"),
            salary=salary or SALARY_NOT_SPECIFIED,
            job_url=_attr(card, LINK_SELECTOR, "href") or "",
            company_logo=_attr(card, LOGO_SELECTOR, "data-delayed-url") or "",
            ago_time=_text(card, LISTDATE_SELECTOR),
        )

    def parse(self, raw_page: str) -> List[JobRecord]:
        try:
            cards = BeautifulSoup(raw_page or "", "html.parser").select(CARD_SELECTOR)
        except Exception:
            logger.exception("Error parsing job list")
            return []

        out: List[JobRecord] = []
        for card in cards:
            try:
                record = self._parse_card(card)
            except Exception as e:
                logger.warning("Error parsing job card: %s", e)
                continue
            if record is not None:
                out.append(record)
        return out
