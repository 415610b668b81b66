# stationflow/traffic/aggregate.py
from __future__ import annotations

from dataclasses import replace
from typing import Callable, Dict, Iterable, List, Sequence

from stationflow.traffic.types import Role, Station, Trip

NO_DATA_FLOW_RATIO = 0.5


def _station_id(station: Station) -> str:
    return station.id


def _start_station(trip: Trip) -> str:
    return trip.start_station_id


def _end_station(trip: Trip) -> str:
    return trip.end_station_id


def count_by_station(
    trips: Iterable[Trip],
    role: Role,
    *,
    key: Callable[[Trip], str] | None = None,
) -> Dict[str, int]:
    """
    Group trips by station and count them. Default trip keys:
      DEPARTURE -> start_station_id
      ARRIVAL   -> end_station_id
    """
    if key is None:
        if role is Role.DEPARTURE:
            key = _start_station
        elif role is Role.ARRIVAL:
            key = _end_station
        else:
            raise ValueError(f"unknown role: {role!r}")

    counts: Dict[str, int] = {}
    for t in trips:
        sid = key(t)
        counts[sid] = counts.get(sid, 0) + 1

    return counts


def flow_ratio(departures: int, arrivals: int) -> float:
    total = departures + arrivals
    if total <= 0:
        return NO_DATA_FLOW_RATIO
    return departures / total


def aggregate(
    stations: Sequence[Station],
    departure_trips: Iterable[Trip],
    arrival_trips: Iterable[Trip],
    *,
    key: Callable[[Station], str] = _station_id,
    departure_key: Callable[[Trip], str] = _start_station,
    arrival_key: Callable[[Trip], str] = _end_station,
) -> List[Station]:
    """
    Fresh Station records (same order as `stations`) with departures,
    arrivals, total_traffic and flow_ratio recomputed from the given trips.

    Identifiers are matched on both sides: `key` reads a station's id,
    `departure_key` / `arrival_key` read the station id a trip refers to.

    Previous derived values on the input are ignored, never added to.
    Trips pointing at stations not in `stations` count for nothing.
    """
    dep_counts = count_by_station(departure_trips, Role.DEPARTURE, key=departure_key)
    arr_counts = count_by_station(arrival_trips, Role.ARRIVAL, key=arrival_key)

    out: List[Station] = []
    for s in stations:
        sid = key(s)
        dep = dep_counts.get(sid, 0)
        arr = arr_counts.get(sid, 0)

        out.append(
            replace(
                s,
                departures=dep,
                arrivals=arr,
                total_traffic=dep + arr,
                flow_ratio=flow_ratio(dep, arr),
            )
        )

    return out
