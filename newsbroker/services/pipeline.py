"""
Broker Pipeline - Request Orchestration

Single feed:  search → normalize → classify → (filter)
Digest:       per feed search → normalize → classify → merge → (filter) → compose

Feeds are fetched one at a time. The first failing feed aborts the whole
digest; there is no partial result.
"""

import json
import logging
import time
from datetime import datetime, timedelta, timezone
from typing import Iterable, Optional

from newsbroker.errors import ValidationError
from newsbroker.models import Digest, FeedDefinition, Item
from newsbroker.services.article_search import ArticleSearchClient, MAX_PAGE_SIZE
from newsbroker.services.classifier import DEFAULT_EXCLUDE_TAGS, classify_item
from newsbroker.services.deduplicator import merge
from newsbroker.services.digest_composer import SECTION_DEFINITIONS, compose
from newsbroker.services.feed_catalog import resolve_feeds
from newsbroker.services.item_normalizer import has_url, normalize_article

logger = logging.getLogger(__name__)

# Defaults
DEFAULT_ITEMS_LIMIT = 15
DEFAULT_WINDOW_HOURS = 168  # one week
DEFAULT_MAX_ITEMS_PER_SECTION = 6


def _since(hours: Optional[float], now: datetime) -> Optional[datetime]:
    if hours is None:
        return None
    try:
        return now - timedelta(hours=hours)
    except OverflowError:
        raise ValidationError("Invalid inputs: window too large")


def collect_items(
    feed: FeedDefinition,
    client: ArticleSearchClient,
    page_size: int,
    since: Optional[datetime],
    exclude: Iterable[str],
    now: Optional[datetime] = None,
    timeout: Optional[float] = None,
) -> list[Item]:
    """
    Fetch one feed and return its normalized, classified items.

    Raises:
        BrokerError: the search failed (configuration, upstream, transport)
    """
    result = client.search(feed.query, feed.domains, since=since, page_size=page_size, timeout=timeout)
    articles = result.raise_for_error()

    exclude = tuple(exclude)
    items = []
    skipped = 0
    for raw in articles:
        if not has_url(raw):
            skipped += 1
            continue
        item = normalize_article(raw, feed.feed_id, now=now)
        items.append(classify_item(item, exclude))

    if skipped:
        logger.debug(f"Feed '{feed.feed_id}': skipped {skipped} articles without URL")
    logger.info(f"Feed '{feed.feed_id}': {len(items)} items ({result.latency_ms}ms upstream)")
    return items


def filter_digital_first(items: Iterable[Item]) -> list[Item]:
    return [item for item in items if item.classification.digital_first]


def fetch_feed_items(
    feed: FeedDefinition,
    client: ArticleSearchClient,
    limit: int = DEFAULT_ITEMS_LIMIT,
    since_hours: Optional[float] = None,
    exclude: Iterable[str] = DEFAULT_EXCLUDE_TAGS,
    digital_first_only: bool = True,
    now: Optional[datetime] = None,
    timeout: Optional[float] = None,
) -> list[Item]:
    """
    Items for a single feed.

    Args:
        feed: Feed to query
        client: Search client
        limit: Requested page size (capped at MAX_PAGE_SIZE)
        since_hours: Only articles from the last N hours
        exclude: Exclusion tags for the classifier
        digital_first_only: Drop items not classified digital-first
        now: Reference time (defaults to current UTC time)
        timeout: Per-call provider deadline in seconds (defaults to settings)

    Returns:
        List of Items
    """
    if now is None:
        now = datetime.now(timezone.utc)

    items = collect_items(
        feed,
        client,
        page_size=min(limit, MAX_PAGE_SIZE),
        since=_since(since_hours, now),
        exclude=exclude,
        now=now,
        timeout=timeout,
    )
    if digital_first_only:
        items = filter_digital_first(items)
    return items


def build_digest(
    feed_ids: Iterable[str],
    client: ArticleSearchClient,
    window_hours: float = DEFAULT_WINDOW_HOURS,
    max_items_per_section: int = DEFAULT_MAX_ITEMS_PER_SECTION,
    digital_first_only: bool = True,
    exclude: Iterable[str] = DEFAULT_EXCLUDE_TAGS,
    now: Optional[datetime] = None,
    timeout: Optional[float] = None,
) -> Digest:
    """
    Build a newsletter digest across several feeds.

    Args:
        feed_ids: Requested feed ids (unknown ids are ignored)
        client: Search client
        window_hours: Trailing window of publish times to include
        max_items_per_section: Cap per digest section
        digital_first_only: Drop items not classified digital-first
        exclude: Exclusion tags for the classifier
        now: Reference time (defaults to current UTC time)
        timeout: Per-call provider deadline in seconds (defaults to settings)

    Returns:
        Digest

    Raises:
        ValidationError: No requested feed is known
        BrokerError: Any feed fetch failed
    """
    feeds = resolve_feeds(feed_ids)
    if not feeds:
        raise ValidationError('Invalid inputs')

    if now is None:
        now = datetime.now(timezone.utc)
    job_start = time.time()
    exclude = tuple(exclude)
    since = _since(window_hours, now)

    logger.info(json.dumps({
        "event": "digest_start",
        "timestamp": now.isoformat(),
        "feeds": [feed.feed_id for feed in feeds],
        "window_hours": window_hours,
    }))

    groups = [
        collect_items(feed, client, page_size=MAX_PAGE_SIZE, since=since, exclude=exclude, now=now,
                      timeout=timeout)
        for feed in feeds
    ]
    fetched = sum(len(group) for group in groups)

    items = merge(groups)
    unique = len(items)
    if digital_first_only:
        items = filter_digital_first(items)

    digest = compose(items, SECTION_DEFINITIONS, max_items_per_section, now=now)

    logger.info(json.dumps({
        "event": "digest_complete",
        "feeds": len(feeds),
        "items_fetched": fetched,
        "items_unique": unique,
        "items_kept": len(items),
        "citations": len(digest.citations),
        "duration_seconds": round(time.time() - job_start, 3),
    }))
    return digest
