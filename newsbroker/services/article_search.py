"""
Article Search Service

Queries the NewsAPI /everything endpoint for one feed at a time.
Failures come back as typed errors on the SearchResult instead of being
raised, so the caller decides whether to abort. No retries, no caching.
"""

import logging
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Iterable, Optional, Union

import httpx

from newsbroker.config import Settings
from newsbroker.errors import ConfigurationError, TransportError, UpstreamError

logger = logging.getLogger(__name__)

# Configuration
MAX_PAGE_SIZE = 50  # NewsAPI hard limit per request
DEFAULT_PAGE_SIZE = 15
SORT_BY = 'publishedAt'
USER_AGENT = 'NewsBroker/1.0'

SearchError = Union[ConfigurationError, UpstreamError, TransportError]


@dataclass
class SearchResult:
    """Outcome of one provider call: articles, or the error that stopped it."""
    articles: list[dict] = field(default_factory=list)
    error: Optional[SearchError] = None
    latency_ms: Optional[int] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def raise_for_error(self) -> list[dict]:
        """Return the articles, or raise the stored error."""
        if self.error is not None:
            raise self.error
        return self.articles


def clamp_page_size(page_size: int) -> int:
    """Clamp to the provider range [1, MAX_PAGE_SIZE]."""
    return max(1, min(int(page_size), MAX_PAGE_SIZE))


def format_since(since: datetime) -> str:
    """Render a cutoff as ISO-8601 UTC, the format NewsAPI expects for 'from'."""
    if since.tzinfo is None:
        since = since.replace(tzinfo=timezone.utc)
    return since.astimezone(timezone.utc).strftime('%Y-%m-%dT%H:%M:%SZ')


def build_search_params(
    query: str,
    domains: Optional[Iterable[str]] = None,
    since: Optional[datetime] = None,
    page_size: int = DEFAULT_PAGE_SIZE,
) -> dict:
    """
    Build NewsAPI query parameters.

    Args:
        query: Boolean keyword expression
        domains: Hostname allow-list (omitted when empty)
        since: Exclude articles published before this time
        page_size: Requested result count (clamped)

    Returns:
        Dict of query string parameters
    """
    params = {
        'q': query,
        'sortBy': SORT_BY,
        'pageSize': str(clamp_page_size(page_size)),
    }
    domain_list = [d for d in (domains or []) if d]
    if domain_list:
        params['domains'] = ','.join(domain_list)
    if since is not None:
        params['from'] = format_since(since)
    return params


class ArticleSearchClient:
    """Thin NewsAPI client bound to one Settings instance."""

    def __init__(self, settings: Settings, http_client: Optional[httpx.Client] = None):
        self.settings = settings
        self._http = http_client

    def search(
        self,
        query: str,
        domains: Optional[Iterable[str]] = None,
        since: Optional[datetime] = None,
        page_size: int = DEFAULT_PAGE_SIZE,
        timeout: Optional[float] = None,
    ) -> SearchResult:
        """
        Run one search against the provider.

        Args:
            query: Boolean keyword expression
            domains: Restrict results to these hostnames
            since: Exclude articles published strictly before this time
            page_size: Max results, clamped to MAX_PAGE_SIZE
            timeout: Per-call deadline in seconds (defaults to settings)

        Returns:
            SearchResult with articles or a typed error
        """
        if not self.settings.newsapi_key:
            logger.error("NEWSAPI_KEY not configured, refusing to call provider")
            return SearchResult(error=ConfigurationError("NEWSAPI_KEY environment variable not set"))

        params = build_search_params(query, domains, since, page_size)
        url = f"{self.settings.newsapi_base_url.rstrip('/')}/everything"
        headers = {
            'X-Api-Key': self.settings.newsapi_key,
            'User-Agent': USER_AGENT,
        }
        if timeout is None:
            timeout = self.settings.request_timeout

        start_time = time.time()
        try:
            if self._http is not None:
                response = self._http.get(url, params=params, headers=headers, timeout=timeout)
            else:
                response = httpx.get(url, params=params, headers=headers, timeout=timeout)
        except httpx.TimeoutException as e:
            logger.error(f"NewsAPI timeout after {timeout}s for '{query[:50]}': {e}")
            return SearchResult(error=TransportError(f"Timeout: provider took longer than {timeout} seconds"))
        except httpx.RequestError as e:
            logger.error(f"NewsAPI request failed for '{query[:50]}': {e}")
            return SearchResult(error=TransportError(f"Error fetching articles: {e}"))

        latency_ms = int((time.time() - start_time) * 1000)

        if not response.is_success:
            logger.warning(f"NewsAPI returned HTTP {response.status_code} for '{query[:50]}'")
            return SearchResult(
                error=UpstreamError(response.status_code, response.text),
                latency_ms=latency_ms,
            )

        try:
            data = response.json()
        except ValueError:
            return SearchResult(
                error=UpstreamError(response.status_code, 'Provider returned invalid JSON'),
                latency_ms=latency_ms,
            )

        if not isinstance(data, dict):
            return SearchResult(
                error=UpstreamError(response.status_code, 'Provider returned unexpected payload'),
                latency_ms=latency_ms,
            )

        if data.get('status') == 'error':
            message = data.get('message') or data.get('code') or 'unknown provider error'
            return SearchResult(
                error=UpstreamError(response.status_code, message),
                latency_ms=latency_ms,
            )

        articles = [a for a in (data.get('articles') or []) if isinstance(a, dict)]
        logger.info(f"NewsAPI search '{query[:50]}': {len(articles)} results in {latency_ms}ms")
        return SearchResult(articles=articles, latency_ms=latency_ms)
