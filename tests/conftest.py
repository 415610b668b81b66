from datetime import datetime, timedelta

import pytest

from stationflow.traffic.types import Station, Trip

DAY = datetime(2024, 3, 1)


def at_minute(minute, day=DAY):
    return day + timedelta(minutes=minute)


@pytest.fixture
def make_trip():
    def _make(start_minute, end_minute, start="A", end="B", day=DAY):
        return Trip(
            start_station_id=start,
            end_station_id=end,
            started_at=at_minute(start_minute, day),
            ended_at=at_minute(end_minute, day),
        )

    return _make


@pytest.fixture
def stations():
    return [
        Station(id="A", name="Kendall T", lon=-71.0862, lat=42.3625),
        Station(id="B", name="MIT at Mass Ave", lon=-71.0936, lat=42.3581),
        Station(id="C", name="Central Square", lon=-71.1031, lat=42.3651),
    ]
