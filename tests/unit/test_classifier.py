"""
Unit tests for the digital-first classifier.

Covers exclusion-first ordering, the inclusion hint, determinism and tag parsing.
"""

import pytest

from newsbroker.models import Classification
from newsbroker.services.classifier import (
    DEFAULT_EXCLUDE_TAGS, classify, classify_item, parse_exclude_tags,
)


class TestClassify:
    """Tests for classify function."""

    def test_tiktok_shorts_launch_is_digital_first(self):
        result = classify('TikTok Shorts launch announced', '', 'https://example.com/a', ['linear', 'streaming'])
        assert result == Classification(digital_first=True, excluded_reasons=())

    def test_netflix_streaming_excluded(self):
        result = classify('Netflix streaming numbers', 'Subscribers grow', 'https://example.com/b', ['streaming'])
        assert result.excluded_reasons == ('streaming',)
        assert result.digital_first is False

    def test_exclusion_wins_over_hint(self):
        """A YouTube story about cable syndication is still excluded."""
        result = classify('YouTube creators sign cable syndication deal', '', '', ['linear'])
        assert result.excluded_reasons == ('linear',)
        assert result.digital_first is False

    def test_no_hint_is_not_digital_first(self):
        result = classify('Quarterly earnings beat estimates', 'Shares rose', 'https://example.com/c', [])
        assert result == Classification(digital_first=False, excluded_reasons=())

    def test_tag_not_requested_is_ignored(self):
        """Streaming terms only exclude when 'streaming' is requested."""
        result = classify('Creator show moves to Netflix', '', '', ['linear'])
        assert result.excluded_reasons == ()
        assert result.digital_first is True

    def test_reasons_follow_vocabulary_order(self):
        text = 'Broadcast network and streaming rivals'
        forward = classify(text, '', '', ['linear', 'streaming'])
        backward = classify(text, '', '', ['streaming', 'linear'])
        assert forward.excluded_reasons == ('linear', 'streaming')
        assert backward.excluded_reasons == ('linear', 'streaming')

    def test_unknown_tags_ignored(self):
        result = classify('YouTube creator update', '', '', ['podcasts', 'radio'])
        assert result.excluded_reasons == ()
        assert result.digital_first is True

    def test_url_slug_contributes(self):
        result = classify('Big week', '', 'https://example.com/instagram-reels-update', [])
        assert result.digital_first is True

    def test_case_insensitive(self):
        assert classify('YOUTUBE', '', '', []).digital_first is True
        assert classify('LINEAR TV ratings', '', '', ['linear']).excluded_reasons == ('linear',)

    def test_livestreaming_not_streaming_brand(self):
        """Word boundaries: 'livestreaming' is not the literal 'streaming'."""
        result = classify('Twitch livestreaming record', '', '', ['streaming'])
        assert result.excluded_reasons == ()
        assert result.digital_first is True

    def test_deterministic(self):
        args = ('Hulu and YouTube', 'cable bundle', 'https://example.com/d', ['linear', 'streaming'])
        assert classify(*args) == classify(*args)

    @pytest.mark.parametrize('title', [
        'Netflix streaming deal for YouTube star',
        'TikTok creator fund expands',
        'Cable ratings slump',
        'Newsletter platforms court creators',
    ])
    def test_digital_first_implies_no_exclusions(self, title):
        result = classify(title, '', '', DEFAULT_EXCLUDE_TAGS)
        if result.digital_first:
            assert result.excluded_reasons == ()


class TestClassifyItem:
    """Tests for classify_item helper."""

    def test_returns_new_item_with_classification(self, make_item):
        item = make_item(title='Instagram Reels adds payouts', digital_first=False)
        classified = classify_item(item, DEFAULT_EXCLUDE_TAGS)

        assert classified.classification.digital_first is True
        assert classified.id == item.id
        # Original untouched
        assert item.classification.digital_first is False


class TestParseExcludeTags:
    """Tests for parse_exclude_tags helper."""

    def test_none_gives_defaults(self):
        assert parse_exclude_tags(None) == ('linear', 'streaming')

    def test_comma_string(self):
        assert parse_exclude_tags('Linear, streaming ,') == ('linear', 'streaming')

    def test_list(self):
        assert parse_exclude_tags(['streaming']) == ('streaming',)

    def test_empty_means_nothing(self):
        assert parse_exclude_tags('') == ()
        assert parse_exclude_tags([]) == ()
