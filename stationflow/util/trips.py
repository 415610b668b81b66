# stationflow/util/trips.py
from __future__ import annotations

from pathlib import Path
from typing import List

import pandas as pd
from colorama import Fore, Style
from tqdm import tqdm

from stationflow.traffic.types import Trip

REQUIRED_COLUMNS = ["start_station_id", "end_station_id", "started_at", "ended_at"]


def _timestamp_or_none(ts):
    return None if pd.isna(ts) else ts


def load_trip_frame(trips_csv: str | Path) -> pd.DataFrame:
    """
    Loads a Bluebikes trip export with columns like:

      ride_id, rideable_type, started_at, ended_at, start_station_name,
      start_station_id, end_station_name, end_station_id, ...

    Returns a DataFrame with just the 4 columns the traffic engine uses.
    Timestamps are parsed as ISO 8601 (whole or fractional seconds, " " or "T"
    separator); ones that fail become NaT and are NOT dropped here.
    """
    df = pd.read_csv(
        trips_csv,
        dtype={"start_station_id": str, "end_station_id": str},
    )
    df.columns = [c.strip() for c in df.columns]

    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"Trips CSV missing column(s): {', '.join(missing)}")

    out = pd.DataFrame()
    out["start_station_id"] = df["start_station_id"].fillna("").astype(str).str.strip()
    out["end_station_id"] = df["end_station_id"].fillna("").astype(str).str.strip()
    out["started_at"] = pd.to_datetime(df["started_at"], format="ISO8601", errors="coerce")
    out["ended_at"] = pd.to_datetime(df["ended_at"], format="ISO8601", errors="coerce")

    return out


def load_trips(trips_csv: str | Path, *, progress: bool = True) -> List[Trip]:
    print(f"{Fore.CYAN}Loading trips from {trips_csv}…{Style.RESET_ALL}")
    df = load_trip_frame(trips_csv)

    rows = zip(
        df["start_station_id"],
        df["end_station_id"],
        df["started_at"],
        df["ended_at"],
    )
    if progress:
        rows = tqdm(rows, total=len(df), desc="Reading trips")

    trips = [
        Trip(
            start_station_id=s0,
            end_station_id=s1,
            started_at=_timestamp_or_none(t0),
            ended_at=_timestamp_or_none(t1),
        )
        for s0, s1, t0, t1 in rows
    ]

    print(f"{Fore.CYAN}Loaded {len(trips):,} trips{Style.RESET_ALL}")
    return trips
