"""LinkedIn connector: card extraction and single-attempt fetch classification."""

import httpx
import pytest

from job_search.errors import RateLimitError, TransientFetchError
from job_search.models import SearchQuery
from job_search.normalize import build_url
from job_search.sources.linkedin import LinkedInCardExtractor, LinkedInFetcher


# Trimmed-down guest search fragment with the markup the endpoint actually serves
SAMPLE_HTML = """
<li>
  <div class="base-card base-search-card job-search-card">
    <a class="base-card__full-link" href="https://uk.linkedin.com/jobs/view/software-engineer-at-monzo-3901">
      <span class="sr-only">Software Engineer</span>
    </a>
    <div class="search-entity-media">
      <img class="artdeco-entity-image" data-delayed-url="https://media.licdn.com/monzo-logo.png" alt="Monzo">
    </div>
    <div class="base-search-card__info">
      <h3 class="base-search-card__title">
        Software Engineer
      </h3>
      <h4 class="base-search-card__subtitle">
        <a href="https://uk.linkedin.com/company/monzo">Monzo</a>
      </h4>
      <div class="base-search-card__metadata">
        <span class="job-search-card__location">London, England, United Kingdom</span>
        <span class="job-search-card__salary-info">
          £70,000.00
          -
          £90,000.00
        </span>
        <time class="job-search-card__listdate" datetime="2024-05-01">
          2 weeks ago
        </time>
      </div>
    </div>
  </div>
</li>
<li>
  <div class="base-card">
    <h3 class="base-search-card__title">Orphan Listing</h3>
    <span class="job-search-card__location">Leeds</span>
  </div>
</li>
<li>
  <div class="base-card">
    <h3 class="base-search-card__title">Data Analyst</h3>
    <h4 class="base-search-card__subtitle">Ocado</h4>
  </div>
</li>
<li>
  <div class="base-card">
    <h4 class="base-search-card__subtitle">Nameless Ltd</h4>
  </div>
</li>
<li>
  <div class="base-card">
    <h3 class="base-search-card__title">Platform Engineer</h3>
    <h4 class="base-search-card__subtitle">Wise</h4>
    <span class="job-search-card__location">Remote</span>
  </div>
</li>
"""


def test_extracts_full_card():
    jobs = LinkedInCardExtractor().parse(SAMPLE_HTML)
    first = jobs[0]
    assert first.position == "Software Engineer"
    assert first.company == "Monzo"
    assert first.location == "London, England, United Kingdom"
    assert first.date == "2024-05-01"
    assert first.salary == "£70,000.00 - £90,000.00"
    assert first.job_url == "https://uk.linkedin.com/jobs/view/software-engineer-at-monzo-3901"
    assert first.company_logo == "https://media.licdn.com/monzo-logo.png"
    assert first.ago_time == "2 weeks ago"


def test_drops_cards_missing_position_or_company_and_keeps_order():
    jobs = LinkedInCardExtractor().parse(SAMPLE_HTML)
    assert [j.position for j in jobs] == ["Software Engineer", "Data Analyst", "Platform Engineer"]
    assert all(j.position and j.company for j in jobs)


def test_missing_optional_fields_get_defaults():
    jobs = LinkedInCardExtractor().parse(SAMPLE_HTML)
    minimal = jobs[1]
    assert minimal.salary == "Not specified"
    assert minimal.location == ""
    assert minimal.date is None
    assert minimal.job_url == ""
    assert minimal.company_logo == ""
    assert minimal.ago_time == ""


def test_payload_uses_wire_names_and_omits_missing_date():
    jobs = LinkedInCardExtractor().parse(SAMPLE_HTML)
    full, minimal = jobs[0].to_payload(), jobs[1].to_payload()
    assert full["jobUrl"].startswith("https://uk.linkedin.com/jobs/view/")
    assert full["companyLogo"] == "https://media.licdn.com/monzo-logo.png"
    assert full["agoTime"] == "2 weeks ago"
    assert full["date"] == "2024-05-01"
    assert "date" not in minimal
    assert set(minimal) == {"position", "company", "location", "salary", "jobUrl", "companyLogo", "agoTime"}


def test_empty_or_unrelated_page_yields_nothing():
    extractor = LinkedInCardExtractor()
    assert extractor.parse("") == []
    assert extractor.parse("<html><body><p>Sign in to continue</p></body></html>") == []


def test_card_level_errors_drop_only_that_card():
    class Flaky(LinkedInCardExtractor):
        def _parse_card(self, card):
            if "Ocado" in card.get_text():
                raise ValueError("unexpected markup")
            return super()._parse_card(card)

    jobs = Flaky().parse(SAMPLE_HTML)
    assert [j.company for j in jobs] == ["Monzo", "Wise"]


# --- fetcher ---


def _fetcher(handler):
    return LinkedInFetcher(user_agent=lambda: "test-agent/1.0", transport=httpx.MockTransport(handler))


def test_fetch_page_returns_body_and_sends_browser_headers():
    seen = {}

    def handler(request):
        seen["url"] = str(request.url)
        seen["headers"] = request.headers
        return httpx.Response(200, text="<li>ok</li>")

    query = SearchQuery(keyword="software engineer", location="London")
    assert _fetcher(handler).fetch_page(query, 25) == "<li>ok</li>"
    assert seen["url"] == build_url(query, 25)
    assert seen["headers"]["user-agent"] == "test-agent/1.0"
    assert seen["headers"]["referer"] == "https://www.linkedin.com/jobs"
    assert seen["headers"]["x-requested-with"] == "XMLHttpRequest"
    assert seen["headers"]["cache-control"] == "no-cache"


def test_429_is_rate_limit():
    fetcher = _fetcher(lambda request: httpx.Response(429))
    with pytest.raises(RateLimitError) as info:
        fetcher.fetch_page(SearchQuery(keyword="x"), 0)
    assert info.value.status_code == 429


@pytest.mark.parametrize("status", [204, 400, 403, 500, 503])
def test_other_statuses_are_transient(status):
    fetcher = _fetcher(lambda request: httpx.Response(status))
    with pytest.raises(TransientFetchError) as info:
        fetcher.fetch_page(SearchQuery(keyword="x"), 0)
    assert info.value.status_code == status
    assert not isinstance(info.value, RateLimitError)


@pytest.mark.parametrize("exc", [httpx.ConnectError("refused"), httpx.ReadTimeout("slow")])
def test_network_errors_are_transient(exc):
    def handler(request):
        raise exc

    with pytest.raises(TransientFetchError) as info:
        _fetcher(handler).fetch_page(SearchQuery(keyword="x"), 0)
    assert info.value.status_code is None


def test_fetcher_reuses_one_client_until_closed():
    fetcher = _fetcher(lambda request: httpx.Response(200, text="<li></li>"))
    query = SearchQuery(keyword="x")

    fetcher.fetch_page(query, 0)
    client = fetcher._client
    fetcher.fetch_page(query, 25)
    assert fetcher._client is client

    fetcher.close()
    assert client.is_closed
    assert fetcher._client is None

    fetcher.fetch_page(query, 50)
    assert fetcher._client is not client
    fetcher.close()


def test_fetcher_context_manager_closes_client():
    with _fetcher(lambda request: httpx.Response(200, text="")) as fetcher:
        fetcher.fetch_page(SearchQuery(keyword="x"), 0)
        client = fetcher._client
    assert client.is_closed
