"""
Unit tests for URL normalization and cross-feed merging.
"""

from newsbroker.services.deduplicator import merge, normalize_url


class TestNormalizeUrl:
    """Tests for normalize_url function."""

    def test_basic_url_unchanged(self):
        assert normalize_url("https://example.com/article/123") == "https://example.com/article/123"

    def test_http_converted_to_https(self):
        assert normalize_url("http://example.com/article") == "https://example.com/article"

    def test_www_removed(self):
        assert normalize_url("https://www.example.com/article") == "https://example.com/article"

    def test_trailing_slashes_removed(self):
        assert normalize_url("https://example.com/article///") == "https://example.com/article"

    def test_tracking_params_removed(self):
        url = "https://example.com/article?utm_source=twitter&utm_medium=social&fbclid=abc"
        assert normalize_url(url) == "https://example.com/article"

    def test_article_id_preserved(self):
        assert normalize_url("https://example.com/story?id=12345") == "https://example.com/story?id=12345"

    def test_combined_normalization(self):
        url = "http://www.EXAMPLE.com/article/?utm_source=rss&id=123&fbclid=xyz"
        assert normalize_url(url) == "https://example.com/article?id=123"

    def test_fragment_removed(self):
        assert normalize_url("https://example.com/article#section1") == "https://example.com/article"

    def test_empty_url_returns_empty(self):
        assert normalize_url("") == ""
        assert normalize_url(None) == ""


class TestMerge:
    """Tests for merge function."""

    def test_no_duplicates(self, make_item):
        items = [make_item(), make_item(), make_item()]
        assert merge([items]) == items

    def test_same_url_across_feeds_last_seen_wins(self, make_item):
        first = make_item(url="https://example.com/shared", source='tubefilter', title='From Tubefilter')
        second = make_item(url="https://example.com/shared", source='ppc_land', title='From PPC Land')

        merged = merge([[first], [second]])

        assert len(merged) == 1
        assert merged[0] is second

    def test_duplicate_within_one_feed(self, make_item):
        a = make_item(url="https://example.com/x", title='Old')
        b = make_item(url="https://example.com/x", title='New')
        merged = merge([[a, b]])
        assert [i.title for i in merged] == ['New']

    def test_order_is_first_seen_key_order(self, make_item):
        a1 = make_item(url="https://example.com/a", title='a1')
        b = make_item(url="https://example.com/b", title='b')
        a2 = make_item(url="https://example.com/a", title='a2')

        merged = merge([[a1, b], [a2]])

        assert [i.title for i in merged] == ['a2', 'b']

    def test_normalized_urls_collapse(self, make_item):
        a = make_item(url="https://example.com/story?utm_source=rss")
        b = make_item(url="http://www.example.com/story/")
        merged = merge([[a], [b]])
        assert merged == [b]

    def test_output_urls_unique(self, make_item):
        groups = [
            [make_item(url=f"https://example.com/{n % 3}") for n in range(7)],
            [make_item(url=f"https://example.com/{n % 4}") for n in range(5)],
        ]
        merged = merge(groups)
        urls = [i.url for i in merged]
        assert len(urls) == len(set(urls))
        assert len(merged) == 4

    def test_survivors_not_modified(self, make_item):
        item = make_item(url="https://example.com/keep", snippet='unchanged')
        merged = merge([[item]])
        assert merged[0] == item
        assert merged[0].snippet == 'unchanged'

    def test_empty_input(self):
        assert merge([]) == []
        assert merge([[], []]) == []
