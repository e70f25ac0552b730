"""
Pytest configuration and shared fixtures.

This module provides common fixtures and utilities used across all tests.
"""

import pytest

from aeolus_map.events import EventBus
from aeolus_map.registry import SourceRegistry
from aeolus_map.session import MapSession
from aeolus_map.sources import _FETCHERS
from aeolus_map.viz.backends import InMemoryMap

# ============================================================================
# Location Fixtures
# ============================================================================


@pytest.fixture
def new_york():
    """Default reference location."""
    return {"lat": 40.7128, "lon": -74.0060}


@pytest.fixture
def london():
    """A second reference location."""
    return {"lat": 51.5074, "lon": -0.1278}


# ============================================================================
# Registry and Map Fixtures
# ============================================================================


@pytest.fixture
def bus():
    return EventBus()


@pytest.fixture
def registry(new_york):
    """Empty registry at the default location, without an event bus."""
    return SourceRegistry(new_york)


@pytest.fixture
def memory_map():
    return InMemoryMap()


# ============================================================================
# Fetcher Fixtures
# ============================================================================


@pytest.fixture(autouse=True)
def clean_fetchers():
    """
    Restore the fetcher registry after each test.

    This ensures tests don't interfere with each other.
    """
    original = _FETCHERS.copy()

    yield

    _FETCHERS.clear()
    _FETCHERS.update(original)


@pytest.fixture
def stub_readings():
    """AQI values returned by the stub fetchers, keyed by source."""
    return {"CURRENT": 75, "SATELLITE": 160, "GROUND": None}


@pytest.fixture
def stub_fetchers(stub_readings):
    """
    Fetchers that return `stub_readings` without touching the network.

    Tests can mutate `stub_readings` between refreshes. A value that is an
    Exception instance is raised instead of returned.
    """

    def make(source):
        def fetch(src, location):
            value = stub_readings[source]
            if isinstance(value, Exception):
                raise value
            return {"source": src, "aqi": value}

        return fetch

    return {source: make(source) for source in ("CURRENT", "SATELLITE", "GROUND")}


@pytest.fixture
def session(stub_fetchers):
    """Session in COMPARISON layer with stations shown and stub fetchers."""
    return MapSession(layer="COMPARISON", show_auxiliary=True, fetchers=stub_fetchers)
