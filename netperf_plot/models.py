from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from types import MappingProxyType
from typing import Mapping

from netperf_plot.errors import MissingMetricError


@dataclass(frozen=True)
class Device:
    id: str
    name: str
    type: str = "other"


@dataclass(frozen=True)
class ResultSample:
    timestamp: datetime
    values: Mapping[str, float] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "values", MappingProxyType(dict(self.values)))

    def value(self, metric_key: str) -> float:
        try:
            return float(self.values[metric_key])
        except KeyError as exc:
            raise MissingMetricError(metric_key, self.timestamp) from exc

    def epoch_seconds(self) -> float:
        return self.timestamp.timestamp()


@dataclass(frozen=True)
class DeviceSeries:
    device: Device
    samples: tuple[ResultSample, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "samples", tuple(self.samples))

    @property
    def is_empty(self) -> bool:
        return not self.samples

    def time_sorted(self) -> list[ResultSample]:
        return sorted(self.samples, key=ResultSample.epoch_seconds)
