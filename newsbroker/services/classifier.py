"""
Digital-First Classifier

Keyword heuristic deciding whether an article is about platform-native,
creator-economy content rather than broadcast TV or subscription streaming.

Exclusion runs first: any requested exclusion tag whose pattern matches
disqualifies the item. Only then does the digital-first hint decide.
"""

import re
from dataclasses import replace
from typing import Iterable, Optional, Union

from newsbroker.models import Classification, Item

# Ordered exclusion vocabulary. excluded_reasons follow this order.
EXCLUSION_PATTERNS: dict[str, re.Pattern] = {
    'linear': re.compile(
        r'\b(?:broadcast\w*|linear tv|linear television|cable(?: tv| network)?|syndicat\w*'
        r'|network tv|primetime|prime-time)\b'
    ),
    'streaming': re.compile(
        r'\b(?:streaming|netflix|hulu|peacock|prime video|hbo max|paramount plus|disney plus'
        r'|apple tv)\b|disney\+|paramount\+|\bmax original'
    ),
}

DIGITAL_FIRST_HINT = re.compile(
    r'\b(?:youtube|tiktok|instagram|shorts|reels|creators?|creator economy|influencers?'
    r'|web series|newsletters?|substack|patreon|twitch|snapchat|digital-first|podcasts?)\b'
)

DEFAULT_EXCLUDE_TAGS = ('linear', 'streaming')


def parse_exclude_tags(value: Optional[Union[str, Iterable[str]]]) -> tuple[str, ...]:
    """
    Accept a comma-separated string or a list of tags.

    None means "use the defaults"; an empty string or list means "exclude nothing".
    """
    if value is None:
        return DEFAULT_EXCLUDE_TAGS
    if isinstance(value, str):
        parts = value.split(',')
    else:
        parts = value
    return tuple(str(p).strip().lower() for p in parts if p is not None and str(p).strip())


def classify(title: str, description: str, url: str, exclude_tags: Iterable[str]) -> Classification:
    """
    Classify article text.

    Args:
        title: Article title
        description: Article description/snippet
        url: Article URL (slugs often carry useful keywords)
        exclude_tags: Exclusion tags to apply; unknown tags are ignored

    Returns:
        Classification
    """
    blob = ' '.join([title or '', description or '', url or '']).lower()
    requested = set(exclude_tags)

    excluded = tuple(
        tag for tag, pattern in EXCLUSION_PATTERNS.items()
        if tag in requested and pattern.search(blob)
    )
    hinted = DIGITAL_FIRST_HINT.search(blob) is not None

    return Classification(
        digital_first=not excluded and hinted,
        excluded_reasons=excluded,
    )


def classify_item(item: Item, exclude_tags: Iterable[str]) -> Item:
    """Return a copy of item with its classification attached."""
    return replace(item, classification=classify(item.title, item.snippet, item.url, exclude_tags))
