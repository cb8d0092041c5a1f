"""Root pytest configuration for all tests."""

import logging

import pytest

# atlassian-python-api logs missing pages at ERROR level; store tests look
# up missing pages on purpose.
logging.getLogger("atlassian").setLevel(logging.WARNING)


@pytest.fixture(autouse=True)
def _clear_confluence_env(monkeypatch):
    """Keep real Confluence credentials out of unit tests."""
    for name in ("CONFLUENCE_URL", "CONFLUENCE_USER", "CONFLUENCE_API_TOKEN"):
        monkeypatch.delenv(name, raising=False)
