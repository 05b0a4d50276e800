"""Shared pytest fixtures and Hypothesis configuration."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient
from hypothesis import Verbosity, settings

from fieldguard.config import get_settings
from fieldguard.main import create_app

# Configure Hypothesis settings for the test suite
settings.register_profile("ci", max_examples=200, deadline=None)
settings.register_profile("dev", max_examples=50, deadline=None)
settings.register_profile("debug", max_examples=10, deadline=None, verbosity=Verbosity.verbose)


@pytest.fixture(autouse=True)
def _fresh_settings():
    """Settings are cached; tests that patch the environment need a clean cache."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def client() -> TestClient:
    with TestClient(create_app()) as test_client:
        yield test_client
