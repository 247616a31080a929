"""
Flask Routes for the News Broker

Includes:
- Health check endpoint (unauthenticated)
- GET  /v1/sources
- GET  /v1/feeds/<feed_id>/items
- POST /v1/newsletter/digest

All /v1 routes require the shared secret in the X-API-Key header.
"""

import hmac
import logging
from datetime import datetime, timezone

from flask import Blueprint, current_app, jsonify, request
from werkzeug.exceptions import HTTPException

from newsbroker.config import Settings
from newsbroker.errors import BrokerError, ConfigurationError, UnauthorizedError, ValidationError
from newsbroker.services.article_search import ArticleSearchClient
from newsbroker.services.classifier import parse_exclude_tags
from newsbroker.services.feed_catalog import get_feed, list_feeds
from newsbroker.services.pipeline import (
    DEFAULT_ITEMS_LIMIT, DEFAULT_MAX_ITEMS_PER_SECTION, DEFAULT_WINDOW_HOURS,
    build_digest, fetch_feed_items,
)

logger = logging.getLogger(__name__)

# Create blueprints
main = Blueprint('main', __name__)
api = Blueprint('api', __name__, url_prefix='/v1')

API_KEY_HEADER = 'X-API-Key'
TRUE_VALUES = {'1', 'true', 'yes', 'on'}
FALSE_VALUES = {'0', 'false', 'no', 'off'}
MAX_WINDOW_HOURS = 24 * 365 * 10  # ten years


def get_settings() -> Settings:
    return current_app.extensions['newsbroker']


def get_search_client() -> ArticleSearchClient:
    return ArticleSearchClient(get_settings())


# =============================================================================
# Input parsing helpers
# =============================================================================

def parse_positive_int(value, name: str, default=None, maximum=None):
    """Parse a positive integer query/body value; None or '' gives default."""
    if value is None or value == '':
        return default
    if isinstance(value, bool) or (isinstance(value, float) and not value.is_integer()):
        raise ValidationError(f"Invalid inputs: {name} must be a positive integer")
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid inputs: {name} must be a positive integer")
    if number < 1:
        raise ValidationError(f"Invalid inputs: {name} must be a positive integer")
    if maximum is not None and number > maximum:
        raise ValidationError(f"Invalid inputs: {name} must be at most {maximum}")
    return number


def parse_bool(value, name: str, default: bool = True) -> bool:
    if value is None or value == '':
        return default
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in TRUE_VALUES:
        return True
    if text in FALSE_VALUES:
        return False
    raise ValidationError(f"Invalid inputs: {name} must be a boolean")


# =============================================================================
# Auth + error handling
# =============================================================================

@api.before_request
def require_api_key():
    """Reject /v1 requests whose X-API-Key does not match the broker key."""
    broker_key = get_settings().broker_key
    if not broker_key:
        raise ConfigurationError("BROKER_KEY environment variable not set")

    supplied = request.headers.get(API_KEY_HEADER)
    if not supplied or not hmac.compare_digest(supplied.encode(), broker_key.encode()):
        raise UnauthorizedError()


@main.app_errorhandler(BrokerError)
def handle_broker_error(error: BrokerError):
    if error.status_code >= 500:
        logger.error(f"{type(error).__name__} on {request.method} {request.path}: {error.message}")
    else:
        logger.info(f"{type(error).__name__} on {request.method} {request.path}: {error.message}")
    return jsonify(error.to_dict()), error.status_code


@main.app_errorhandler(Exception)
def handle_unexpected_error(error: Exception):
    # Werkzeug 404/405 etc. as JSON
    if isinstance(error, HTTPException):
        return jsonify({'message': error.description}), error.code
    logger.exception(f"Unhandled error on {request.method} {request.path}: {error}")
    return jsonify({'message': 'Internal server error'}), 500


# =============================================================================
# Routes
# =============================================================================

@main.route('/health')
def health_check():
    """Health check endpoint."""
    return {'status': 'healthy', 'timestamp': datetime.now(timezone.utc).isoformat()}


@api.route('/sources')
def list_sources():
    """List the curated feeds."""
    return jsonify({'sources': [feed.to_source_dict() for feed in list_feeds()]})


@api.route('/feeds/<feed_id>/items')
def feed_items(feed_id: str):
    """
    Fetch, classify and (optionally) filter one feed.

    Query params:
        limit: page size, capped at 50 (default 15)
        since_hours: only articles from the last N hours
        digital_first_only: default true
        exclude: comma-separated exclusion tags (default linear,streaming)
    """
    feed = get_feed(feed_id)

    limit = parse_positive_int(request.args.get('limit'), 'limit', DEFAULT_ITEMS_LIMIT)
    since_hours = parse_positive_int(
        request.args.get('since_hours'), 'since_hours', maximum=MAX_WINDOW_HOURS
    )
    digital_first_only = parse_bool(request.args.get('digital_first_only'), 'digital_first_only')

    exclude_values = request.args.getlist('exclude')
    exclude = parse_exclude_tags(','.join(exclude_values) if exclude_values else None)

    items = fetch_feed_items(
        feed,
        get_search_client(),
        limit=limit,
        since_hours=since_hours,
        exclude=exclude,
        digital_first_only=digital_first_only,
    )
    return jsonify({'items': [item.to_dict() for item in items]})


@api.route('/newsletter/digest', methods=['POST'])
def newsletter_digest():
    """
    Compose a sectioned digest across several feeds.

    Body:
        sources: list of feed ids (required, non-empty)
        window_hours: default 168
        max_items_per_section: default 6
        digital_first_only: default true
        exclude: list of exclusion tags (default ["linear", "streaming"])
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError('Invalid inputs')

    sources = data.get('sources')
    if not isinstance(sources, list) or not sources:
        raise ValidationError('Invalid inputs')
    if not all(isinstance(s, str) for s in sources):
        raise ValidationError('Invalid inputs')

    exclude = data.get('exclude')
    if exclude is not None and not isinstance(exclude, (list, str)):
        raise ValidationError('Invalid inputs: exclude must be a list of tags')

    digest = build_digest(
        sources,
        get_search_client(),
        window_hours=parse_positive_int(
            data.get('window_hours'), 'window_hours', DEFAULT_WINDOW_HOURS, maximum=MAX_WINDOW_HOURS
        ),
        max_items_per_section=parse_positive_int(
            data.get('max_items_per_section'), 'max_items_per_section', DEFAULT_MAX_ITEMS_PER_SECTION
        ),
        digital_first_only=parse_bool(data.get('digital_first_only'), 'digital_first_only'),
        exclude=parse_exclude_tags(exclude),
    )
    return jsonify(digest.to_dict())
