"""Root conftest for pytest configuration and shared fixtures.

This conftest is loaded before both testpaths (tests/ and etrade/),
making its fixtures available to centralized tests AND colocated tests.
"""

import os

import pytest

# Register pytest-asyncio plugin at the root level
pytest_plugins = ("pytest_asyncio",)

# ---------------------------------------------------------------------------
# Environment variables: must be set before any etrade module import
# Uses setdefault so real env vars are never overridden.
# ---------------------------------------------------------------------------
os.environ.setdefault("ETRADE_LOG_LEVEL", "WARNING")


# ---------------------------------------------------------------------------
# Shared fake fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def fake_transport():
    """Fake Transport that records dispatched requests."""
    from etrade.adapters.transport.fake import FakeTransport

    return FakeTransport()
