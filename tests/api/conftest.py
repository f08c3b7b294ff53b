"""Fixtures for HTTP service tests."""

import pytest
from fastapi.testclient import TestClient

from digipin.api import create_app

API = '/api/digipin'


@pytest.fixture
def app(test_config):
    return create_app(test_config)


@pytest.fixture
def client(app):
    """In-process client for the service."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def api_url():
    """Build a URL under the API prefix."""
    def _url(path: str) -> str:
        return f"{API}{path}"
    return _url
