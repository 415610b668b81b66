# stationflow/data/dataset.py
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List

from colorama import Fore, Style

from stationflow.traffic import time_index
from stationflow.traffic.time_index import TimeBucketIndex
from stationflow.traffic.types import Station, Trip
from stationflow.util.stations import load_stations
from stationflow.util.trips import load_trips


@dataclass
class TrafficDataset:
    stations: List[Station]
    trips: List[Trip]
    index: TimeBucketIndex
    meta: dict


def load_dataset(
    trips_csv: str | Path,
    stations_json: str | Path,
    *,
    key_field: str = "short_name",
    progress: bool = True,
) -> TrafficDataset:
    """Load stations + trips and build the minute-of-day index once."""
    print(f"{Fore.CYAN}Loading station registry…{Style.RESET_ALL}")
    stations = load_stations(stations_json, key_field=key_field)

    trips = load_trips(trips_csv, progress=progress)

    print(f"{Fore.CYAN}Bucketing trips by minute of day…{Style.RESET_ALL}")
    index = time_index.build(trips)

    print(
        f"{Fore.GREEN}Indexed {len(index):,} trips across "
        f"{len(stations)} stations{Style.RESET_ALL}"
    )

    return TrafficDataset(
        stations=stations,
        trips=trips,
        index=index,
        meta={
            "trips_csv": str(trips_csv),
            "stations_json": str(stations_json),
            "key_field": key_field,
            "skipped": index.skipped,
        },
    )
