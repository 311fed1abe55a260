from __future__ import annotations

from dataclasses import dataclass
import logging
import math
from typing import Sequence

import numpy as np

from netperf_plot.colors import PALETTE, color_for
from netperf_plot.metrics import describe
from netperf_plot.models import Device, DeviceSeries, ResultSample
from netperf_plot.raster.canvas import RGBA

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class DeviceAggregate:
    device: Device
    value: float
    color: RGBA


@dataclass(frozen=True)
class PerformanceSummary:
    avg_download: float
    avg_upload: float
    avg_ping: float
    avg_jitter: float
    avg_packet_loss: float
    avg_quality_score: float
    max_download: float
    min_download: float
    max_upload: float
    min_upload: float
    max_ping: float
    min_ping: float
    download_stability: float
    upload_stability: float
    ping_stability: float
    test_count: int

    def as_dict(self) -> dict[str, float | int]:
        return {
            "avgDownload": self.avg_download,
            "avgUpload": self.avg_upload,
            "avgPing": self.avg_ping,
            "avgJitter": self.avg_jitter,
            "avgPacketLoss": self.avg_packet_loss,
            "avgQualityScore": self.avg_quality_score,
            "maxDownload": self.max_download,
            "minDownload": self.min_download,
            "maxUpload": self.max_upload,
            "minUpload": self.min_upload,
            "maxPing": self.max_ping,
            "minPing": self.min_ping,
            "downloadStability": self.download_stability,
            "uploadStability": self.upload_stability,
            "pingStability": self.ping_stability,
            "testCount": self.test_count,
        }


def metric_values(samples: Sequence[ResultSample], metric_key: str) -> np.ndarray:
    describe(metric_key)
    return np.asarray([sample.value(metric_key) for sample in samples], dtype=np.float64)


def average_of(samples: Sequence[ResultSample], metric_key: str) -> float:
    """Arithmetic mean of ``metric_key`` over ``samples``.

    Returns ``nan`` for an empty sequence. Callers must check for it and drop
    the device instead of plotting it.
    """
    values = metric_values(samples, metric_key)
    if values.size == 0:
        return math.nan
    return float(np.mean(values))


def summarize(samples: Sequence[ResultSample]) -> PerformanceSummary | None:
    if not samples:
        return None
    download = metric_values(samples, "download")
    upload = metric_values(samples, "upload")
    ping = metric_values(samples, "ping")
    return PerformanceSummary(
        avg_download=float(np.mean(download)),
        avg_upload=float(np.mean(upload)),
        avg_ping=float(np.mean(ping)),
        avg_jitter=average_of(samples, "jitter"),
        avg_packet_loss=average_of(samples, "packetLoss"),
        avg_quality_score=average_of(samples, "qualityScore"),
        max_download=float(np.max(download)),
        min_download=float(np.min(download)),
        max_upload=float(np.max(upload)),
        min_upload=float(np.min(upload)),
        max_ping=float(np.max(ping)),
        min_ping=float(np.min(ping)),
        download_stability=float(np.std(download)),
        upload_stability=float(np.std(upload)),
        ping_stability=float(np.std(ping)),
        test_count=len(samples),
    )


def aggregate_devices(
    devices: Sequence[DeviceSeries],
    metric_key: str,
    *,
    palette: Sequence[RGBA] = PALETTE,
) -> list[DeviceAggregate]:
    out: list[DeviceAggregate] = []
    for series in devices:
        value = average_of(series.samples, metric_key)
        if math.isnan(value):
            LOGGER.debug("skipping device %s: no samples for %s", series.device.id, metric_key)
            continue
        out.append(DeviceAggregate(device=series.device, value=value, color=color_for(series.device.id, palette)))
    return out
