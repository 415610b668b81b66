# stationflow/traffic/time_index.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Tuple

import pandas as pd
from colorama import Fore, Style

from stationflow.errors import MalformedTimestampError
from stationflow.traffic.types import Role, Trip

MINUTES_PER_DAY = 1440


def minutes_since_midnight(ts) -> int:
    """
    Wall-clock minute of day (hour * 60 + minute) of a timestamp.
    The date part is ignored.

    Raises MalformedTimestampError for None / NaT / anything without
    hour and minute fields.
    """
    if ts is None or pd.isna(ts):
        raise MalformedTimestampError(f"missing timestamp: {ts!r}")

    try:
        minute = int(ts.hour) * 60 + int(ts.minute)
    except (AttributeError, TypeError, ValueError) as e:
        raise MalformedTimestampError(f"unusable timestamp: {ts!r}") from e

    if not 0 <= minute < MINUTES_PER_DAY:
        raise MalformedTimestampError(f"minute {minute} out of range for {ts!r}")

    return minute


@dataclass(frozen=True)
class TimeBucketIndex:
    """
    departures_by_minute[m]: trips whose start minute is m
    arrivals_by_minute[m]:   trips whose end minute is m

    Both have exactly MINUTES_PER_DAY buckets; bucket order is insertion order.
    skipped: trips rejected at build time for malformed timestamps.
    """
    departures_by_minute: Tuple[Tuple[Trip, ...], ...]
    arrivals_by_minute: Tuple[Tuple[Trip, ...], ...]
    skipped: int = 0

    def buckets(self, role: Role) -> Tuple[Tuple[Trip, ...], ...]:
        if role is Role.DEPARTURE:
            return self.departures_by_minute
        if role is Role.ARRIVAL:
            return self.arrivals_by_minute
        raise ValueError(f"unknown role: {role!r}")

    def bucket_counts(self, role: Role) -> List[int]:
        return [len(b) for b in self.buckets(role)]

    def hourly_counts(self, role: Role) -> List[int]:
        counts = self.bucket_counts(role)
        return [sum(counts[h * 60:(h + 1) * 60]) for h in range(24)]

    def __len__(self) -> int:
        return sum(len(b) for b in self.departures_by_minute)


def build(trips: Iterable[Trip]) -> TimeBucketIndex:
    """
    Partition trips into minute-of-day buckets, departures by started_at and
    arrivals by ended_at. Trips with a malformed timestamp go into no bucket
    and are counted in `skipped`.
    """
    departures: List[List[Trip]] = [[] for _ in range(MINUTES_PER_DAY)]
    arrivals: List[List[Trip]] = [[] for _ in range(MINUTES_PER_DAY)]
    skipped = 0

    for trip in trips:
        try:
            start_minute = minutes_since_midnight(trip.started_at)
            end_minute = minutes_since_midnight(trip.ended_at)
        except MalformedTimestampError:
            skipped += 1
            continue

        departures[start_minute].append(trip)
        arrivals[end_minute].append(trip)

    if skipped:
        print(
            f"{Fore.YELLOW}Skipped {skipped} trip(s) with malformed "
            f"timestamps{Style.RESET_ALL}"
        )

    return TimeBucketIndex(
        departures_by_minute=tuple(tuple(b) for b in departures),
        arrivals_by_minute=tuple(tuple(b) for b in arrivals),
        skipped=skipped,
    )
