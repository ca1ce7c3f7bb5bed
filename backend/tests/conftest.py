from datetime import datetime, timezone

import pytest

from tablescout.services.geocoding import GeocodeCache
from tests.helpers import MISSION, SF, FakeProvider, FixedClock, mapbox_result


@pytest.fixture
def clock():
    return FixedClock(datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc))


@pytest.fixture
def provider():
    return FakeProvider(
        {
            "San Francisco": mapbox_result(*SF, place_name="San Francisco, California, United States"),
            "Mission District, San Francisco": mapbox_result(*MISSION, place_name="Mission District"),
            "Oakland": mapbox_result(37.8044, -122.2712),
            "Berkeley": mapbox_result(37.8715, -122.2730),
            "Palo Alto": mapbox_result(37.4419, -122.1430),
        }
    )


@pytest.fixture
def database_url(tmp_path):
    return f"sqlite:///{tmp_path / 'geocode.db'}"


@pytest.fixture
def cache(database_url, provider, clock):
    with GeocodeCache(database_url, provider, daily_limit=3, clock=clock) as c:
        yield c
