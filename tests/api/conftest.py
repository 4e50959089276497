"""Shared fixtures for API tests"""
import pytest

from citelink.api.routes.citations import limiter


@pytest.fixture(autouse=True)
def reset_rate_limiter():
    """Isolate tests from the module-level rate limiter's in-memory counters"""
    limiter.reset()
    yield
    limiter.reset()
