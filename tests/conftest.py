"""Pytest configuration and shared fixtures for typed-api-client tests."""

import os

import pytest

from typed_api_client.configuration import ApiClientOptions
from typed_api_client.testing import FakeApiTokenProvider, InMemoryRestClientService


@pytest.fixture(autouse=True)
def clear_env(monkeypatch):
    """Auto-cleanup: Clear client-related environment variables before each test.

    This prevents test pollution when testing environment configuration.
    """
    test_prefixes = ("TEST_", "API_CLIENT_", "USERS_API_", "AZURE_")

    for key in list(os.environ.keys()):
        if any(key.startswith(prefix) for prefix in test_prefixes):
            monkeypatch.delenv(key, raising=False)

    yield


@pytest.fixture
def in_memory_transport():
    return InMemoryRestClientService()


@pytest.fixture
def fake_token_provider():
    return FakeApiTokenProvider()


@pytest.fixture
def api_key_options():
    return ApiClientOptions.create("https://api.example.com").with_api_key_authentication("test-key")
