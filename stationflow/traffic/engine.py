# stationflow/traffic/engine.py
from __future__ import annotations

from typing import Iterable, List, Sequence

from stationflow.traffic import time_index, window
from stationflow.traffic.aggregate import aggregate
from stationflow.traffic.scales import DEFAULT_COLOR_THRESHOLDS, ScaleAdapter
from stationflow.traffic.time_index import TimeBucketIndex
from stationflow.traffic.types import Role, Station, StationView, Trip
from stationflow.traffic.window import NO_FILTER


class TrafficEngine:
    """
    Owns the bucket index, the base station list and the radius/color scales.

    Every update is one synchronous pass:
      window query (departures + arrivals) -> aggregate -> scale
    """

    def __init__(
        self,
        stations: Sequence[Station],
        index: TimeBucketIndex,
        *,
        color_thresholds: Sequence[float] = DEFAULT_COLOR_THRESHOLDS,
    ):
        self.stations = tuple(stations)
        self.index = index
        self.current_filter = NO_FILTER

        # radius domain comes from the unfiltered view, once
        unfiltered = self.stations_for(NO_FILTER)
        self.scales = ScaleAdapter.from_stations(
            unfiltered, color_thresholds=color_thresholds
        )

    @classmethod
    def from_trips(
        cls,
        stations: Sequence[Station],
        trips: Iterable[Trip],
        **kwargs,
    ) -> "TrafficEngine":
        return cls(stations, time_index.build(trips), **kwargs)

    def stations_for(self, time_filter: int) -> List[Station]:
        departures = window.query(self.index, Role.DEPARTURE, time_filter)
        arrivals = window.query(self.index, Role.ARRIVAL, time_filter)
        return aggregate(self.stations, departures, arrivals)

    def view_for(self, time_filter: int) -> List[StationView]:
        """Per-station view for a filter; does not touch current_filter."""
        stations = self.stations_for(time_filter)
        filter_active = time_filter != NO_FILTER

        return [
            StationView(
                station=s,
                radius=self.scales.radius_for(s.total_traffic, filter_active),
                color_ratio=self.scales.color_ratio_for(s.flow_ratio),
            )
            for s in stations
        ]

    def update(self, time_filter: int) -> List[StationView]:
        views = self.view_for(time_filter)
        self.current_filter = time_filter
        return views
