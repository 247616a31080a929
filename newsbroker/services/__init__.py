"""
News Broker Services

This package contains the aggregation pipeline:
- feed_catalog: Curated feed definitions
- article_search: NewsAPI search client
- item_normalizer: Raw article → Item, content fingerprint
- classifier: Digital-first heuristic
- deduplicator: Merge feeds, unique by normalized URL
- digest_composer: Sections + citations
- pipeline: Orchestrate single-feed and digest requests
"""

from newsbroker.services.feed_catalog import list_feeds, get_feed, resolve_feeds
from newsbroker.services.article_search import ArticleSearchClient, SearchResult
from newsbroker.services.item_normalizer import normalize_article, fingerprint
from newsbroker.services.classifier import classify, classify_item
from newsbroker.services.deduplicator import normalize_url, merge
from newsbroker.services.digest_composer import compose, SECTION_DEFINITIONS
from newsbroker.services.pipeline import fetch_feed_items, build_digest

__all__ = [
    'list_feeds',
    'get_feed',
    'resolve_feeds',
    'ArticleSearchClient',
    'SearchResult',
    'normalize_article',
    'fingerprint',
    'classify',
    'classify_item',
    'normalize_url',
    'merge',
    'compose',
    'SECTION_DEFINITIONS',
    'fetch_feed_items',
    'build_digest',
]
