"""Shared pytest configuration and fixtures for oauth2-twitter tests."""

import os

import pytest

# Import HTTP mocking fixtures from fixtures module
pytest_plugins = ["tests.fixtures.mock_http"]

from tests.config import TEST_CLIENT_ID, TEST_CLIENT_SECRET, TEST_REDIRECT_URI

_CONFIG_ENV_VARS = (
    "TWITTER_CLIENT_ID",
    "TWITTER_CLIENT_SECRET",
    "TWITTER_REDIRECT_URI",
    "TWITTER_SCOPES",
    "OAUTH_HTTP_TIMEOUT",
    "LOG_LEVEL",
)


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: marks tests as unit tests (fast, no external deps)")
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests (full flow over mocked HTTP)"
    )


def pytest_collection_modifyitems(config, items):
    """Add markers to tests based on their location."""
    for item in items:
        if "tests/unit/" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        elif "tests/integration/" in str(item.fspath):
            item.add_marker(pytest.mark.integration)


@pytest.fixture(scope="function", autouse=True)
def clean_config_environment():
    """Remove configuration variables so a developer's .env never leaks into tests."""
    original_env = {key: os.environ.get(key) for key in _CONFIG_ENV_VARS}

    try:
        for key in _CONFIG_ENV_VARS:
            os.environ.pop(key, None)
        yield
    finally:
        for key, value in original_env.items():
            if value is None:
                os.environ.pop(key, None)
            else:
                os.environ[key] = value


@pytest.fixture
def twitter_env():
    """Minimal environment for CLI and Settings tests. Not real credentials."""
    os.environ["TWITTER_CLIENT_ID"] = TEST_CLIENT_ID
    os.environ["TWITTER_CLIENT_SECRET"] = TEST_CLIENT_SECRET
    os.environ["TWITTER_REDIRECT_URI"] = TEST_REDIRECT_URI
    yield
