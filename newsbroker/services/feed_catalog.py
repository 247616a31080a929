"""
Feed Catalog

Static registry of curated feeds. Each feed approximates a trend source that
has no direct API by pairing a boolean search query with the outlets that
cover it. Defined once at import time and never modified.
"""

import logging
from typing import Iterable

from newsbroker.errors import NotFoundError
from newsbroker.models import FeedDefinition

logger = logging.getLogger(__name__)


FEEDS: tuple[FeedDefinition, ...] = (
    FeedDefinition(
        feed_id='tubefilter',
        name='Tubefilter',
        homepage='https://www.tubefilter.com',
        content_type='trade_news',
        domains=('tubefilter.com',),
        query='(YouTube OR TikTok OR creator OR "creator economy")',
    ),
    FeedDefinition(
        feed_id='ppc_land',
        name='PPC Land',
        homepage='https://ppc.land',
        content_type='ad_platform_news',
        domains=('ppc.land',),
        query='(TikTok OR YouTube OR ads OR creator)',
    ),
    FeedDefinition(
        feed_id='hollywood_reporter',
        name='Hollywood Reporter',
        homepage='https://www.hollywoodreporter.com',
        content_type='entertainment_news',
        domains=('hollywoodreporter.com',),
        query='(YouTube OR TikTok OR creator OR "digital-first")',
    ),
    FeedDefinition(
        feed_id='publishpress',
        name='PublishPress',
        homepage='https://publishpress.com',
        content_type='publishing_news',
        domains=('publishpress.com',),
        query='(creator OR newsletter OR YouTube OR TikTok)',
    ),
    FeedDefinition(
        feed_id='google_news_youtube_series_us_en',
        name='YouTube Series (proxy)',
        content_type='trend_proxy',
        domains=(
            'tubefilter.com',
            'hollywoodreporter.com',
            'variety.com',
            'deadline.com',
        ),
        query='(YouTube AND (series OR "creator series" OR episodic))',
    ),
    FeedDefinition(
        feed_id='tiktok_creativecenter_trends',
        name='TikTok Trends (proxy)',
        content_type='trend_proxy',
        domains=(
            'adweek.com',
            'digiday.com',
            'socialmediatoday.com',
            'sproutsocial.com',
        ),
        query='(TikTok AND (trends OR trending OR hashtags OR sounds))',
    ),
)

_FEEDS_BY_ID = {feed.feed_id: feed for feed in FEEDS}


def list_feeds() -> list[FeedDefinition]:
    """Return all feeds in registration order."""
    return list(FEEDS)


def get_feed(feed_id: str) -> FeedDefinition:
    """
    Look up a feed by id.

    Raises:
        NotFoundError: feed_id is not registered
    """
    feed = _FEEDS_BY_ID.get(feed_id)
    if feed is None:
        raise NotFoundError('Unknown feed_id')
    return feed


def resolve_feeds(feed_ids: Iterable[str]) -> list[FeedDefinition]:
    """
    Resolve requested ids to known feeds.

    Unknown ids are dropped, repeats collapse, request order is kept.
    """
    resolved = []
    seen = set()
    for feed_id in feed_ids:
        if feed_id in seen:
            continue
        seen.add(feed_id)
        feed = _FEEDS_BY_ID.get(feed_id)
        if feed is None:
            logger.warning(f"Ignoring unknown feed_id '{feed_id}'")
            continue
        resolved.append(feed)
    return resolved
