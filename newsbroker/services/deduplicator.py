"""
Deduplication Service

Merges per-feed item lists into one list that is unique by URL.
URLs are compared after normalization so tracking params, www. prefixes
and trailing slashes do not defeat the match.
"""

import logging
from typing import Iterable
from urllib.parse import urlparse, urlunparse, parse_qs, urlencode

from newsbroker.models import Item

logger = logging.getLogger(__name__)

# Query parameters to always remove (tracking)
REMOVE_PARAMS = {
    'utm_source', 'utm_medium', 'utm_campaign', 'utm_term', 'utm_content',
    'fbclid', 'gclid', 'ref', 'mc_cid', 'mc_eid',
    '_ga', '_gl', 'ncid', 'ocid', 'sr_share', 'taid', 'cmpid',
}


def normalize_url(url: str) -> str:
    """
    Normalize a URL into a dedup key.

    Rules:
    1. Lowercase, strip whitespace
    2. Standardize to https://
    3. Remove www. prefix
    4. Remove trailing slashes from path
    5. Remove tracking query parameters
    6. Remove fragments (#...)

    Args:
        url: Original URL

    Returns:
        Normalized URL string ('' for empty input)
    """
    if not url:
        return ''

    try:
        parsed = urlparse(url.lower().strip())
    except ValueError as e:
        logger.warning(f"URL normalization failed for '{url}': {e}")
        return url.strip()

    netloc = parsed.netloc
    if netloc.startswith('www.'):
        netloc = netloc[4:]

    path = parsed.path.rstrip('/')

    query = ''
    if parsed.query:
        params = parse_qs(parsed.query, keep_blank_values=False)
        kept = {k: v for k, v in params.items() if k not in REMOVE_PARAMS}
        query = urlencode(sorted(kept.items()), doseq=True) if kept else ''

    return urlunparse(('https', netloc, path, '', query, ''))


def merge(groups: Iterable[Iterable[Item]]) -> list[Item]:
    """
    Merge item lists into one list unique by normalized URL.

    On collision the last-seen item wins. Output order is the order in which
    each URL was first seen. Surviving items are returned untouched.

    Args:
        groups: One item sequence per feed fetch

    Returns:
        Deduplicated items
    """
    merged: dict[str, Item] = {}
    total = 0

    for group in groups:
        for item in group:
            total += 1
            key = normalize_url(item.url) or item.url
            if key in merged:
                logger.debug(f"Duplicate URL replaced: {item.url} (from {item.source})")
            # dict keeps the first insertion position when a key is reassigned
            merged[key] = item

    unique = list(merged.values())
    logger.info(f"Deduplication: {total} → {len(unique)} ({total - len(unique)} duplicates removed)")
    return unique
