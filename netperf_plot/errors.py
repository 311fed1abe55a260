from __future__ import annotations


class PlotDataError(ValueError):
    """Raised when chart input data violates the rendering contract."""


class UnknownMetricError(PlotDataError, KeyError):
    def __init__(self, metric_key: str, known: tuple[str, ...]) -> None:
        self.metric_key = metric_key
        self.known = known
        super().__init__(f"unknown metric: {metric_key!r} (expected one of: {', '.join(known)})")

    def __str__(self) -> str:
        return str(self.args[0])


class MissingMetricError(PlotDataError):
    def __init__(self, metric_key: str, timestamp: object | None = None) -> None:
        self.metric_key = metric_key
        self.timestamp = timestamp
        where = f" at {timestamp}" if timestamp is not None else ""
        super().__init__(f"sample{where} has no value for metric {metric_key!r}")
