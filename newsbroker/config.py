"""
Configuration for the News Broker

Settings are read once at startup and handed to the services that need them.
Core services never look at the process environment themselves.
"""
import os
from dataclasses import dataclass, replace
from typing import Mapping, Optional

from dotenv import load_dotenv

DEFAULT_NEWSAPI_BASE_URL = 'https://newsapi.org/v2'
DEFAULT_REQUEST_TIMEOUT = 30.0  # seconds


@dataclass(frozen=True)
class Settings:
    """Broker configuration (credentials + upstream endpoint)."""
    newsapi_key: Optional[str] = None
    broker_key: Optional[str] = None
    newsapi_base_url: str = DEFAULT_NEWSAPI_BASE_URL
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT

    @classmethod
    def from_env(cls, load_dotenv_file: bool = True) -> 'Settings':
        """
        Build settings from environment variables.

        Args:
            load_dotenv_file: Load a .env file first (local development)

        Returns:
            Settings instance
        """
        if load_dotenv_file:
            load_dotenv()

        return cls(
            newsapi_key=os.environ.get('NEWSAPI_KEY') or None,
            broker_key=os.environ.get('BROKER_KEY') or None,
            newsapi_base_url=os.environ.get('NEWSAPI_BASE_URL', DEFAULT_NEWSAPI_BASE_URL),
            request_timeout=float(os.environ.get('NEWSAPI_TIMEOUT', DEFAULT_REQUEST_TIMEOUT)),
        )

    def with_overrides(self, config: Mapping) -> 'Settings':
        """Apply Flask-style upper-case overrides (NEWSAPI_KEY, BROKER_KEY, ...)."""
        overrides = {}
        if 'NEWSAPI_KEY' in config:
            overrides['newsapi_key'] = config['NEWSAPI_KEY']
        if 'BROKER_KEY' in config:
            overrides['broker_key'] = config['BROKER_KEY']
        if 'NEWSAPI_BASE_URL' in config:
            overrides['newsapi_base_url'] = config['NEWSAPI_BASE_URL']
        if 'NEWSAPI_TIMEOUT' in config:
            overrides['request_timeout'] = float(config['NEWSAPI_TIMEOUT'])
        return replace(self, **overrides) if overrides else self
