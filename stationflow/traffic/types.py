# stationflow/traffic/types.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class Role(Enum):
    DEPARTURE = "departure"
    ARRIVAL = "arrival"


@dataclass(frozen=True)
class Trip:
    start_station_id: str
    end_station_id: str
    started_at: datetime | None
    ended_at: datetime | None


@dataclass(frozen=True)
class Station:
    id: str
    name: str
    lon: float
    lat: float
    departures: int = 0
    arrivals: int = 0
    total_traffic: int = 0
    flow_ratio: float = 0.5

    @property
    def has_traffic(self) -> bool:
        # flow_ratio == 0.5 also for balanced stations; this tells them apart
        return self.total_traffic > 0


@dataclass(frozen=True)
class StationView:
    station: Station
    radius: float
    color_ratio: float
