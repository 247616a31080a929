"""
Item Normalizer

Turns a raw NewsAPI article record into the canonical Item.
"""

import hashlib
from datetime import datetime, timezone
from typing import Optional

from newsbroker.models import Item

UNTITLED = '(untitled)'

# Unit separator; never appears in a URL or an ISO timestamp
FINGERPRINT_SEPARATOR = '\x1f'


def utc_now_iso(now: Optional[datetime] = None) -> str:
    """ISO-8601 UTC timestamp with a Z suffix."""
    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return now.astimezone(timezone.utc).isoformat(timespec='seconds').replace('+00:00', 'Z')


def fingerprint(url: str, published_at: str) -> str:
    """SHA-256 identity of an article: stable across repeated fetches."""
    payload = f"{url}{FINGERPRINT_SEPARATOR}{published_at}"
    return hashlib.sha256(payload.encode('utf-8')).hexdigest()


def _clean(value) -> str:
    if value is None:
        return ''
    return str(value).strip()


def has_url(raw: dict) -> bool:
    """True if the record carries a usable URL."""
    return bool(_clean(raw.get('url')))


def normalize_article(raw: dict, feed_id: str, now: Optional[datetime] = None) -> Item:
    """
    Build an Item from one provider record.

    Args:
        raw: NewsAPI article dict (title, description, url, publishedAt)
        feed_id: Owning feed
        now: Normalization time, used when publishedAt is missing

    Returns:
        Item with a placeholder classification
    """
    url = _clean(raw.get('url'))
    published_at = _clean(raw.get('publishedAt')) or utc_now_iso(now)

    return Item(
        id=fingerprint(url, published_at),
        title=_clean(raw.get('title')) or UNTITLED,
        url=url,
        source=feed_id,
        published_at=published_at,
        snippet=_clean(raw.get('description')),
    )
