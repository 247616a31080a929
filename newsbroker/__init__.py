"""
News Broker Flask Application Factory
"""
import logging

from flask import Flask

from newsbroker.config import Settings

logger = logging.getLogger(__name__)


def create_app(config=None, settings: Settings = None):
    """
    Flask application factory

    Args:
        config: Optional configuration dictionary (NEWSAPI_KEY, BROKER_KEY,
                NEWSAPI_BASE_URL, NEWSAPI_TIMEOUT override the environment)
        settings: Optional prebuilt Settings (skips the environment entirely)

    Returns:
        Flask application instance
    """
    app = Flask(__name__)

    # Load custom configuration
    if config:
        app.config.from_mapping(config)

    if settings is None:
        settings = Settings.from_env().with_overrides(app.config)

    if not settings.broker_key:
        logger.warning("BROKER_KEY not set - all /v1 requests will fail")
    if not settings.newsapi_key:
        logger.warning("NEWSAPI_KEY not set - feed fetches will fail")

    app.extensions['newsbroker'] = settings

    # Register blueprints
    from newsbroker.routes import main, api
    app.register_blueprint(main)
    app.register_blueprint(api)

    return app
