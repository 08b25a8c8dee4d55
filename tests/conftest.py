# tests/conftest.py
import os

import pytest
import sys
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from center_finder.errors import NoMatchError
from center_finder.models import ResolvedLocation
from center_finder.pacing import NoDelayPacer
from center_finder.reverse_geocoder import UNKNOWN_LOCATION


def pytest_configure(config):
    config.addinivalue_line("markers", "live: marks tests that hit the real Nominatim service (deselect with '-m not live')")


def pytest_collection_modifyitems(config, items):
    # Skip live tests unless --run-live is passed or RUN_LIVE_TESTS=1
    run_live = config.getoption("--run-live", default=False) or os.environ.get("RUN_LIVE_TESTS") == "1"
    if not run_live:
        skip_live = pytest.mark.skip(reason="Live tests skipped. Use --run-live or RUN_LIVE_TESTS=1")
        for item in items:
            if "live" in item.keywords:
                item.add_marker(skip_live)


def pytest_addoption(parser):
    parser.addoption("--run-live", action="store_true", default=False, help="Run live integration tests against Nominatim")


class FakeGeocoder:
    """Resolves from a lookup table; unknown addresses raise NoMatchError."""

    def __init__(self, known: dict):
        self.known = known
        self.calls = []

    async def resolve(self, address, city_context=None):
        self.calls.append((address, city_context))
        if address not in self.known:
            raise NoMatchError(address)
        return self.known[address]


class FakeReverseGeocoder:
    def __init__(self, label="Center Street, Delhi, India"):
        self._label = label
        self.calls = []

    async def label(self, center):
        self.calls.append(center)
        return self._label if self._label is not None else UNKNOWN_LOCATION


class CountingPacer(NoDelayPacer):
    def __init__(self):
        super().__init__()
        self.waits = 0

    async def wait(self):
        self.waits += 1


def make_location(address, lat, lon, canonical=None, **details):
    return ResolvedLocation(
        input_address=address,
        canonical_address=canonical or f"{address}, Delhi, India",
        lat=lat,
        lon=lon,
        address_details=details,
    )


@pytest.fixture
def delhi_locations():
    return {
        "Connaught Place": make_location("Connaught Place", 28.6315, 77.2167, city="New Delhi"),
        "Lajpat Nagar": make_location("Lajpat Nagar", 28.5677, 77.2433, city="Delhi"),
        "Karol Bagh": make_location("Karol Bagh", 28.6519, 77.1909, city="Delhi"),
    }


@pytest.fixture
def pacer():
    return CountingPacer()


@pytest.fixture
def location_factory():
    return make_location


@pytest.fixture
def geocoder_factory():
    return FakeGeocoder


@pytest.fixture
def fake_geocoder(delhi_locations):
    return FakeGeocoder(delhi_locations)


@pytest.fixture
def fake_reverse():
    return FakeReverseGeocoder()
