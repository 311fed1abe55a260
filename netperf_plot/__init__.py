from netperf_plot.aggregate import DeviceAggregate, PerformanceSummary, aggregate_devices, average_of, summarize
from netperf_plot.colors import PALETTE, color_for
from netperf_plot.config import DEFAULT_THEME, ChartTheme, load_theme
from netperf_plot.errors import MissingMetricError, PlotDataError, UnknownMetricError
from netperf_plot.export import export_as_image, surface_to_png_bytes
from netperf_plot.metrics import METRIC_KEYS, MetricDescriptor, describe, format_value
from netperf_plot.models import Device, DeviceSeries, ResultSample
from netperf_plot.pipeline import ChartType, render_chart
from netperf_plot.scales import DOMAIN_HEADROOM, domain_max, linear, radar_radius
from netperf_plot.surface import DrawContext, Surface

__all__ = [
    "ChartTheme",
    "ChartType",
    "DEFAULT_THEME",
    "DOMAIN_HEADROOM",
    "Device",
    "DeviceAggregate",
    "DeviceSeries",
    "DrawContext",
    "METRIC_KEYS",
    "MetricDescriptor",
    "MissingMetricError",
    "PALETTE",
    "PerformanceSummary",
    "PlotDataError",
    "ResultSample",
    "Surface",
    "UnknownMetricError",
    "aggregate_devices",
    "average_of",
    "color_for",
    "describe",
    "domain_max",
    "export_as_image",
    "format_value",
    "linear",
    "load_theme",
    "radar_radius",
    "render_chart",
    "summarize",
    "surface_to_png_bytes",
]
