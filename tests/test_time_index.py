from datetime import datetime

import pandas as pd
import pytest

from stationflow.errors import MalformedTimestampError
from stationflow.traffic.time_index import MINUTES_PER_DAY, build, minutes_since_midnight
from stationflow.traffic.types import Role, Trip


def test_minutes_since_midnight_ignores_date():
    assert minutes_since_midnight(datetime(2024, 3, 1, 0, 0)) == 0
    assert minutes_since_midnight(datetime(2024, 3, 17, 8, 5, 59)) == 485
    assert minutes_since_midnight(pd.Timestamp("2024-03-31 23:59:30")) == 1439


@pytest.mark.parametrize("bad", [None, pd.NaT, float("nan"), "08:05"])
def test_minutes_since_midnight_rejects_malformed(bad):
    with pytest.raises(MalformedTimestampError):
        minutes_since_midnight(bad)


def test_every_trip_lands_in_one_bucket_per_role(make_trip):
    trips = [make_trip(m, (m * 7) % MINUTES_PER_DAY) for m in range(0, 1440, 13)]
    index = build(trips)

    assert len(index.departures_by_minute) == MINUTES_PER_DAY
    assert len(index.arrivals_by_minute) == MINUTES_PER_DAY

    for trip in trips:
        dep_hits = [m for m, b in enumerate(index.departures_by_minute) if trip in b]
        arr_hits = [m for m, b in enumerate(index.arrivals_by_minute) if trip in b]
        assert dep_hits == [minutes_since_midnight(trip.started_at)]
        assert arr_hits == [minutes_since_midnight(trip.ended_at)]

    assert len(index) == len(trips)
    assert index.skipped == 0


def test_bucket_keeps_insertion_order(make_trip):
    first = make_trip(485, 500, start="A")
    second = make_trip(485, 510, start="B")
    index = build([first, second])

    assert index.departures_by_minute[485] == (first, second)


def test_malformed_trips_are_skipped_and_counted(make_trip, capsys):
    good = make_trip(485, 500)
    no_start = Trip("A", "B", None, datetime(2024, 3, 1, 8, 20))
    nat_end = Trip("A", "B", datetime(2024, 3, 1, 8, 5), pd.NaT)

    index = build([good, no_start, nat_end])

    assert index.skipped == 2
    assert len(index) == 1
    assert sum(index.bucket_counts(Role.ARRIVAL)) == 1
    assert "Skipped 2 trip(s)" in capsys.readouterr().out


def test_hourly_counts_roll_up_buckets(make_trip):
    trips = [make_trip(485, 500), make_trip(479, 481), make_trip(1439, 0)]
    index = build(trips)

    dep = index.hourly_counts(Role.DEPARTURE)
    arr = index.hourly_counts(Role.ARRIVAL)

    assert len(dep) == 24
    assert dep[7] == 1 and dep[8] == 1 and dep[23] == 1
    assert arr[8] == 2 and arr[0] == 1
    assert sum(dep) == sum(arr) == 3


def test_index_is_immutable(make_trip):
    index = build([make_trip(10, 20)])

    with pytest.raises(AttributeError):
        index.departures_by_minute[10].append(make_trip(10, 20))
    with pytest.raises(Exception):
        index.skipped = 5
