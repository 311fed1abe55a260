from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
import math
from typing import Iterable

import numpy as np

from netperf_plot.errors import PlotDataError


DOMAIN_HEADROOM = 1.1
RADAR_HEADROOM = 1.2
RADAR_PACKET_LOSS_FLOOR = 5.0
RADAR_FIXED_MAX = {"qualityScore": 100.0}


@dataclass(frozen=True)
class PlotBox:
    left: float
    top: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.left + self.width

    @property
    def bottom(self) -> float:
        return self.top + self.height

    @property
    def center(self) -> tuple[float, float]:
        return (self.left + self.width / 2.0, self.top + self.height / 2.0)


def linear(value: float, domain_min: float, domain_max: float, range_min: float, range_max: float) -> float:
    if domain_max == domain_min:
        return range_min
    return range_min + (value - domain_min) / (domain_max - domain_min) * (range_max - range_min)


def domain_max(values: Iterable[float]) -> float:
    arr = np.asarray(list(values), dtype=np.float64)
    finite = arr[np.isfinite(arr)]
    if finite.size == 0:
        raise PlotDataError("cannot compute a domain from zero finite values")
    return float(np.max(finite)) * DOMAIN_HEADROOM


def value_to_y(value: float, vmax: float, box: PlotBox) -> float:
    return box.bottom - linear(value, 0.0, vmax, 0.0, box.height)


def time_to_x(t: float, t_min: float, t_max: float, box: PlotBox) -> float:
    return linear(t, t_min, t_max, box.left, box.right)


def time_labels(t_min: datetime, t_max: datetime, count: int = 6) -> list[datetime]:
    if count <= 0:
        raise ValueError("count must be > 0")
    span = (t_max - t_min).total_seconds()
    return [t_min + timedelta(seconds=span * i / count) for i in range(count + 1)]


def grid_values(vmax: float, count: int = 5) -> list[float]:
    # Top gridline first, matching screen order.
    return [vmax - (vmax / count) * i for i in range(count + 1)]


def radar_axis_max(metric_key: str, aggregates: Iterable[float]) -> float:
    fixed = RADAR_FIXED_MAX.get(metric_key)
    if fixed is not None:
        return fixed
    values = [v for v in aggregates if math.isfinite(v)]
    if metric_key == "packetLoss":
        values.append(RADAR_PACKET_LOSS_FLOOR)
    if not values:
        raise PlotDataError(f"no aggregate values for radar axis {metric_key!r}")
    return max(values) * RADAR_HEADROOM


def radar_radius(value: float, metric_max: float, outer_radius: float, *, invert: bool) -> float:
    """Map an aggregate onto a radar spoke so that better is always farther out."""
    if metric_max <= 0:
        # An all-zero inverted axis is at its best value.
        return outer_radius if invert else 0.0
    score = max(0.0, metric_max - value) if invert else value
    return max(0.0, min(outer_radius, score / metric_max * outer_radius))


def spoke_angle(index: int, count: int) -> float:
    return index * (2.0 * math.pi / count) - math.pi / 2.0


def polar_point(cx: float, cy: float, radius: float, angle: float) -> tuple[float, float]:
    return (cx + radius * math.cos(angle), cy + radius * math.sin(angle))
