from __future__ import annotations

from dataclasses import dataclass

from netperf_plot.errors import UnknownMetricError


@dataclass(frozen=True)
class MetricDescriptor:
    key: str
    label: str
    unit: str
    invert: bool
    decimals: int
    title: str

    def format(self, value: float) -> str:
        text = f"{value:.{self.decimals}f}"
        if not self.unit:
            return text
        if self.unit == "%":
            return f"{text}%"
        return f"{text} {self.unit}"


_CATALOG: dict[str, MetricDescriptor] = {
    "download": MetricDescriptor(
        key="download",
        label="Download",
        unit="Mbps",
        invert=False,
        decimals=1,
        title="Download speed comparison (Mbps)",
    ),
    "upload": MetricDescriptor(
        key="upload",
        label="Upload",
        unit="Mbps",
        invert=False,
        decimals=1,
        title="Upload speed comparison (Mbps)",
    ),
    "ping": MetricDescriptor(
        key="ping",
        label="Latency",
        unit="ms",
        invert=True,
        decimals=0,
        title="Latency comparison (ms)",
    ),
    "jitter": MetricDescriptor(
        key="jitter",
        label="Jitter",
        unit="ms",
        invert=True,
        decimals=0,
        title="Jitter comparison (ms)",
    ),
    "packetLoss": MetricDescriptor(
        key="packetLoss",
        label="Packet loss",
        unit="%",
        invert=True,
        decimals=2,
        title="Packet loss comparison (%)",
    ),
    "qualityScore": MetricDescriptor(
        key="qualityScore",
        label="Quality score",
        unit="",
        invert=False,
        decimals=0,
        title="Network quality score comparison",
    ),
}

METRIC_KEYS: tuple[str, ...] = tuple(_CATALOG)


def describe(metric_key: str) -> MetricDescriptor:
    try:
        return _CATALOG[metric_key]
    except KeyError:
        raise UnknownMetricError(metric_key, METRIC_KEYS) from None


def format_value(value: float, metric_key: str) -> str:
    return describe(metric_key).format(value)


def metric_title(metric_key: str) -> str:
    return describe(metric_key).title
