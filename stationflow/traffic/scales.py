# stationflow/traffic/scales.py
from __future__ import annotations

import math
from bisect import bisect_right
from typing import Sequence, Tuple

UNFILTERED_RADIUS_RANGE = (0.0, 25.0)
FILTERED_RADIUS_RANGE = (3.0, 50.0)

DEFAULT_COLOR_THRESHOLDS = (1 / 3, 2 / 3)
COLOR_RATIO_VALUES = (0.0, 0.5, 1.0)


class SqrtScale:
    """
    Square-root scale (d3.scaleSqrt semantics): area of a circle grows
    linearly with the input. No clamping; an empty domain maps everything
    to the middle of the range.
    """

    def __init__(self, domain: Tuple[float, float], range_: Tuple[float, float]):
        self.domain = (float(domain[0]), float(domain[1]))
        self.range = (float(range_[0]), float(range_[1]))

    def __call__(self, x: float) -> float:
        d0 = math.sqrt(self.domain[0])
        d1 = math.sqrt(self.domain[1])
        r0, r1 = self.range

        span = d1 - d0
        if span == 0:
            return r0 + (r1 - r0) * 0.5

        t = (math.sqrt(x) - d0) / span
        return r0 + (r1 - r0) * t


class QuantizeScale:
    """
    Maps [0, 1] to discrete values; thresholds split the domain so that
    x < thresholds[0] -> values[0], ..., x >= thresholds[-1] -> values[-1].
    """

    def __init__(
        self,
        thresholds: Sequence[float] = DEFAULT_COLOR_THRESHOLDS,
        values: Sequence[float] = COLOR_RATIO_VALUES,
    ):
        if len(values) != len(thresholds) + 1:
            raise ValueError("need exactly one more value than thresholds")
        if list(thresholds) != sorted(thresholds):
            raise ValueError("thresholds must be ascending")

        self.thresholds = tuple(float(t) for t in thresholds)
        self.values = tuple(float(v) for v in values)

    def __call__(self, x: float) -> float:
        return self.values[bisect_right(self.thresholds, x)]


class ScaleAdapter:
    """
    Visual encodings for aggregated station traffic.

    The radius domain is fixed from the unfiltered dataset; filtering only
    switches the output range.
    """

    def __init__(
        self,
        max_total_traffic: int,
        *,
        color_thresholds: Sequence[float] = DEFAULT_COLOR_THRESHOLDS,
        unfiltered_range: Tuple[float, float] = UNFILTERED_RADIUS_RANGE,
        filtered_range: Tuple[float, float] = FILTERED_RADIUS_RANGE,
    ):
        if max_total_traffic < 0:
            raise ValueError("max_total_traffic must be >= 0")

        self.max_total_traffic = int(max_total_traffic)
        self._unfiltered = SqrtScale((0, self.max_total_traffic), unfiltered_range)
        self._filtered = SqrtScale((0, self.max_total_traffic), filtered_range)
        self._color = QuantizeScale(color_thresholds)

    @classmethod
    def from_stations(cls, stations, **kwargs) -> "ScaleAdapter":
        """Build from stations aggregated WITHOUT a time filter."""
        max_total = max((s.total_traffic for s in stations), default=0)
        return cls(max_total, **kwargs)

    def radius_for(self, total_traffic: int, filter_active: bool) -> float:
        scale = self._filtered if filter_active else self._unfiltered
        return scale(total_traffic)

    def color_ratio_for(self, flow_ratio: float) -> float:
        return self._color(flow_ratio)
