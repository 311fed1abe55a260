from __future__ import annotations

from collections.abc import Mapping, Sequence
from datetime import datetime, timezone
from decimal import Decimal
import json
import math
from pathlib import Path
from typing import Any

from netperf_plot.errors import PlotDataError
from netperf_plot.metrics import METRIC_KEYS
from netperf_plot.models import Device, DeviceSeries, ResultSample


def series_from_records(records: Any) -> list[DeviceSeries]:
    """Build device series from ``DeviceWithResults``-shaped JSON records.

    Each record carries ``id``, ``name``, optional ``type`` and a ``results``
    list. Known metric fields are copied when present; absent ones stay absent
    so rendering can reject them.
    """
    if not isinstance(records, Sequence) or isinstance(records, (str, bytes, bytearray)):
        raise PlotDataError("device records must be a list")
    return [_coerce_device(raw, index=i) for i, raw in enumerate(records)]


def load_devices(path: str | Path) -> list[DeviceSeries]:
    source = Path(path)
    try:
        raw = json.loads(source.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise PlotDataError(f"{source}: invalid JSON ({exc})") from exc
    if isinstance(raw, Mapping) and "devices" in raw:
        raw = raw["devices"]
    return series_from_records(raw)


def _coerce_device(raw: Any, *, index: int) -> DeviceSeries:
    if not isinstance(raw, Mapping):
        raise PlotDataError(f"device record {index} must be an object")
    try:
        device_id = str(raw["id"])
    except KeyError as exc:
        raise PlotDataError(f"device record {index} is missing `id`") from exc
    device = Device(id=device_id, name=str(raw.get("name", device_id)), type=str(raw.get("type", "other")))
    results = raw.get("results", [])
    if not isinstance(results, Sequence) or isinstance(results, (str, bytes, bytearray)):
        raise PlotDataError(f"device {device_id}: `results` must be a list")
    samples = tuple(_coerce_sample(item, device_id=device_id, index=i) for i, item in enumerate(results))
    return DeviceSeries(device=device, samples=samples)


def _coerce_sample(raw: Any, *, device_id: str, index: int) -> ResultSample:
    if not isinstance(raw, Mapping):
        raise PlotDataError(f"device {device_id}: result {index} must be an object")
    if "timestamp" not in raw:
        raise PlotDataError(f"device {device_id}: result {index} is missing `timestamp`")
    timestamp = _coerce_timestamp(raw["timestamp"], label=f"device {device_id}: result {index}")
    values: dict[str, float] = {}
    for key in METRIC_KEYS:
        if key not in raw or raw[key] is None:
            continue
        values[key] = _coerce_number(raw[key], label=f"device {device_id}: result {index} `{key}`")
    return ResultSample(timestamp=timestamp, values=values)


def _coerce_timestamp(value: Any, *, label: str) -> datetime:
    if isinstance(value, datetime):
        return _as_utc(value)
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        # Epoch milliseconds, as produced by Date.getTime().
        return datetime.fromtimestamp(float(value) / 1000.0, tz=timezone.utc)
    if isinstance(value, str):
        try:
            return _as_utc(datetime.fromisoformat(value.strip()))
        except ValueError as exc:
            raise PlotDataError(f"{label}: invalid timestamp {value!r}") from exc
    raise PlotDataError(f"{label}: unsupported timestamp type {type(value)!r}")


def _as_utc(value: datetime) -> datetime:
    # Naive timestamps are taken as UTC.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _coerce_number(value: Any, *, label: str) -> float:
    if isinstance(value, bool):
        raise PlotDataError(f"{label}: expected a number, got a boolean")
    if isinstance(value, Decimal):
        out = float(value)
    else:
        try:
            out = float(value)
        except (TypeError, ValueError) as exc:
            raise PlotDataError(f"{label}: non-numeric value {value!r}") from exc
    if not math.isfinite(out):
        raise PlotDataError(f"{label}: value must be finite")
    return out
