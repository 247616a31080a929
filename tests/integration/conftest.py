"""
Pytest configuration for integration tests

Provides a Flask test client wired to test settings
"""
import pytest

from newsbroker import create_app

API_KEY = 'test-broker-key'


@pytest.fixture
def app(settings):
    """Create app with explicit test settings."""
    app = create_app({'TESTING': True}, settings=settings)
    return app


@pytest.fixture
def client(app):
    """Create test client."""
    with app.test_client() as client:
        yield client


@pytest.fixture
def auth_headers():
    return {'X-API-Key': API_KEY}
