"""
Root pytest configuration for News Broker tests

Adds project root to Python path and provides common fixtures
"""
import sys
import os
from datetime import datetime, timezone

import pytest

# Add project root to Python path so tests can import newsbroker
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, project_root)

from newsbroker.config import Settings
from newsbroker.models import Classification, Item
from newsbroker.services.item_normalizer import fingerprint

FIXED_NOW = datetime(2026, 10, 19, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def fixed_now():
    """Fixed reference time for deterministic timestamps."""
    return FIXED_NOW


@pytest.fixture
def settings():
    """Settings with test credentials; never reads the environment."""
    return Settings(
        newsapi_key='test-newsapi-key',
        broker_key='test-broker-key',
        newsapi_base_url='https://newsapi.test/v2',
        request_timeout=5.0,
    )


@pytest.fixture
def make_raw_article():
    """
    Factory for NewsAPI article records.

    Usage:
        raw = make_raw_article(title="TikTok launches Shorts fund")
    """
    counter = {'n': 0}

    def _make(**overrides):
        counter['n'] += 1
        article = {
            'source': {'id': None, 'name': 'Example'},
            'author': 'Staff',
            'title': f"Creator news {counter['n']}",
            'description': 'YouTube creators try a new format.',
            'url': f"https://example.com/article/{counter['n']}",
            'publishedAt': '2026-10-18T09:30:00Z',
            'content': 'Body text…',
        }
        article.update(overrides)
        return article

    return _make


@pytest.fixture
def make_item():
    """
    Factory for Item instances.

    Usage:
        item = make_item(title="TikTok Shorts launch announced", digital_first=True)
    """
    counter = {'n': 0}

    def _make(
        title=None,
        url=None,
        source='tubefilter',
        snippet='',
        published_at='2026-10-18T09:30:00Z',
        digital_first=True,
        excluded_reasons=(),
    ):
        counter['n'] += 1
        if url is None:
            url = f"https://example.com/item/{counter['n']}"
        if title is None:
            title = f"Item {counter['n']}"
        return Item(
            id=fingerprint(url, published_at),
            title=title,
            url=url,
            source=source,
            published_at=published_at,
            snippet=snippet,
            classification=Classification(
                digital_first=digital_first,
                excluded_reasons=tuple(excluded_reasons),
            ),
        )

    return _make
