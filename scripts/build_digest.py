#!/usr/bin/env python
"""
Build a Digest from the Command Line

Runs the same pipeline as POST /v1/newsletter/digest and prints the digest
JSON to stdout. Handy for checking feed queries without running the server.

Usage:
    python scripts/build_digest.py --sources tubefilter ppc_land
    python scripts/build_digest.py --sources tubefilter --window-hours 48 --include-all

Environment:
    NEWSAPI_KEY - NewsAPI credential (required)

Exit codes:
    0 - Success
    1 - Failure
"""

import argparse
import json
import logging
import os
import sys

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dotenv import load_dotenv
load_dotenv()

from newsbroker.config import Settings
from newsbroker.errors import BrokerError
from newsbroker.services.article_search import ArticleSearchClient
from newsbroker.services.classifier import parse_exclude_tags
from newsbroker.services.feed_catalog import list_feeds
from newsbroker.services.pipeline import (
    DEFAULT_MAX_ITEMS_PER_SECTION, DEFAULT_WINDOW_HOURS, build_digest,
)

# Logs go to stderr so stdout stays valid JSON
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler(sys.stderr)
    ]
)
logger = logging.getLogger('build_digest')


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description='Build a digital-first digest')
    parser.add_argument(
        '--sources',
        nargs='+',
        default=[feed.feed_id for feed in list_feeds()],
        help='Feed ids to include (default: all feeds)'
    )
    parser.add_argument(
        '--window-hours',
        type=int,
        default=DEFAULT_WINDOW_HOURS,
        help=f'Trailing window in hours (default: {DEFAULT_WINDOW_HOURS})'
    )
    parser.add_argument(
        '--max-items',
        type=int,
        default=DEFAULT_MAX_ITEMS_PER_SECTION,
        help=f'Max items per section (default: {DEFAULT_MAX_ITEMS_PER_SECTION})'
    )
    parser.add_argument(
        '--include-all',
        action='store_true',
        help='Keep items that are not classified digital-first'
    )
    parser.add_argument(
        '--exclude',
        default=None,
        help='Comma-separated exclusion tags (default: linear,streaming)'
    )
    parser.add_argument(
        '--timeout',
        type=float,
        default=None,
        help='Per-feed provider timeout in seconds (default: REQUEST_TIMEOUT)'
    )
    return parser.parse_args(argv)


def main(argv=None):
    """Main entry point."""
    args = parse_args(argv)
    client = ArticleSearchClient(Settings.from_env(load_dotenv_file=False))

    try:
        digest = build_digest(
            args.sources,
            client,
            window_hours=args.window_hours,
            max_items_per_section=args.max_items,
            digital_first_only=not args.include_all,
            exclude=parse_exclude_tags(args.exclude),
            timeout=args.timeout,
        )
    except BrokerError as e:
        logger.error(f"Digest failed: {e.message}")
        return 1

    print(json.dumps(digest.to_dict(), indent=2, ensure_ascii=False))
    return 0


if __name__ == '__main__':
    sys.exit(main())
