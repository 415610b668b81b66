# stationflow/traffic/window.py
from __future__ import annotations

from itertools import chain
from typing import List, Tuple

from stationflow.errors import InvalidTimeFilterError
from stationflow.traffic.time_index import MINUTES_PER_DAY, TimeBucketIndex
from stationflow.traffic.types import Role, Trip

NO_FILTER = -1
WINDOW_MINUTES = 60


def validate_time_filter(value) -> int:
    """
    Accept NO_FILTER or an integer minute in [0, 1439]; reject everything
    else instead of wrapping it.
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidTimeFilterError(f"time filter must be an int, got {value!r}")
    if not NO_FILTER <= value < MINUTES_PER_DAY:
        raise InvalidTimeFilterError(
            f"time filter must be {NO_FILTER} or in [0, {MINUTES_PER_DAY - 1}], got {value}"
        )
    return value


def window_bounds(minute: int) -> Tuple[int, int]:
    """Inclusive (lo, hi) bucket bounds of the window centered on `minute`."""
    minute = validate_time_filter(minute)
    if minute == NO_FILTER:
        raise InvalidTimeFilterError("NO_FILTER has no window bounds")

    lo = (minute - WINDOW_MINUTES + MINUTES_PER_DAY) % MINUTES_PER_DAY
    hi = (minute + WINDOW_MINUTES) % MINUTES_PER_DAY
    return lo, hi


def window_minutes(minute: int) -> List[int]:
    """Bucket indices of the window, in query order (always 121 of them)."""
    lo, hi = window_bounds(minute)
    if lo <= hi:
        return list(range(lo, hi + 1))
    # wraps past midnight
    return list(range(lo, MINUTES_PER_DAY)) + list(range(0, hi + 1))


def query(index: TimeBucketIndex, role: Role, time_filter: int) -> List[Trip]:
    """
    Flattened trips for `role` whose bucket lies in the circular window
    [T - 60, T + 60] (both ends inclusive). NO_FILTER returns every trip.
    """
    time_filter = validate_time_filter(time_filter)
    buckets = index.buckets(role)

    if time_filter == NO_FILTER:
        return list(chain.from_iterable(buckets))

    lo, hi = window_bounds(time_filter)
    if lo <= hi:
        return list(chain.from_iterable(buckets[lo:hi + 1]))

    return list(chain(
        chain.from_iterable(buckets[lo:]),
        chain.from_iterable(buckets[:hi + 1]),
    ))
