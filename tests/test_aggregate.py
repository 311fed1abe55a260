from __future__ import annotations

from datetime import datetime, timedelta, timezone
import math
import unittest

from netperf_plot.aggregate import aggregate_devices, average_of, summarize
from netperf_plot.colors import color_for
from netperf_plot.errors import MissingMetricError, UnknownMetricError
from netperf_plot.models import Device, DeviceSeries, ResultSample


T0 = datetime(2024, 5, 1, 9, 0, tzinfo=timezone.utc)


def _sample(minute: int, **values: float) -> ResultSample:
    return ResultSample(timestamp=T0 + timedelta(minutes=minute), values=values)


def _full_sample(minute: int, download: float, ping: float) -> ResultSample:
    return _sample(
        minute,
        download=download,
        upload=download / 4,
        ping=ping,
        jitter=ping / 10,
        packetLoss=0.5,
        qualityScore=80.0,
    )


class AggregatorTests(unittest.TestCase):
    def test_average_is_arithmetic_mean(self) -> None:
        samples = [_sample(0, download=10.0), _sample(1, download=20.0), _sample(2, download=30.0)]
        self.assertAlmostEqual(average_of(samples, "download"), 20.0)

    def test_empty_series_average_is_nan(self) -> None:
        self.assertTrue(math.isnan(average_of([], "download")))

    def test_missing_metric_is_an_error_not_zero(self) -> None:
        samples = [_sample(0, download=10.0), _sample(1, upload=5.0)]
        with self.assertRaises(MissingMetricError) as ctx:
            average_of(samples, "download")
        self.assertEqual(ctx.exception.metric_key, "download")

    def test_unknown_metric_is_rejected_even_for_empty_series(self) -> None:
        with self.assertRaises(UnknownMetricError):
            average_of([], "latency")

    def test_aggregate_devices_drops_empty_series(self) -> None:
        devices = [
            DeviceSeries(Device("a", "Laptop"), (_sample(0, download=12.0), _sample(1, download=18.0))),
            DeviceSeries(Device("b", "Phone"), ()),
        ]
        with self.assertLogs("netperf_plot.aggregate", level="DEBUG"):
            aggregates = aggregate_devices(devices, "download")
        self.assertEqual([agg.device.id for agg in aggregates], ["a"])
        self.assertAlmostEqual(aggregates[0].value, 15.0)
        self.assertEqual(aggregates[0].color, color_for("a"))

    def test_summary_reports_extremes_and_stability(self) -> None:
        samples = [_full_sample(0, 100.0, 10.0), _full_sample(1, 50.0, 30.0)]
        stats = summarize(samples)
        assert stats is not None
        self.assertEqual(stats.test_count, 2)
        self.assertAlmostEqual(stats.avg_download, 75.0)
        self.assertAlmostEqual(stats.max_download, 100.0)
        self.assertAlmostEqual(stats.min_download, 50.0)
        self.assertAlmostEqual(stats.min_ping, 10.0)
        self.assertAlmostEqual(stats.download_stability, 25.0)
        self.assertAlmostEqual(stats.ping_stability, 10.0)
        self.assertAlmostEqual(stats.avg_quality_score, 80.0)
        self.assertEqual(stats.as_dict()["testCount"], 2)

    def test_summary_of_empty_series_is_none(self) -> None:
        self.assertIsNone(summarize([]))


if __name__ == "__main__":
    unittest.main()
