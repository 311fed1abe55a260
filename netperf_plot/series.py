from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from netperf_plot.aggregate import DeviceAggregate
from netperf_plot.colors import with_alpha
from netperf_plot.config import ChartTheme
from netperf_plot.metrics import MetricDescriptor, format_value
from netperf_plot.models import Device, DeviceSeries
from netperf_plot.raster.canvas import RGBA
from netperf_plot.scales import PlotBox, linear, polar_point, radar_radius, spoke_angle, time_to_x, value_to_y
from netperf_plot.surface import DrawContext


BAR_LABEL_ROTATE_DEG = 30.0
LINE_WIDTH = 2.0
GLOW_WIDTH = 6.0
GLOW_ALPHA = 0.25
MARKER_RADIUS = 3.0
RADAR_FILL_ALPHA = 0x33 / 255.0


@dataclass(frozen=True)
class BarRect:
    device: Device
    value: float
    color: RGBA
    x: float
    y: float
    width: float
    height: float


@dataclass(frozen=True)
class DeviceTrace:
    device: Device
    color: RGBA
    points: tuple[tuple[float, float], ...]


@dataclass(frozen=True)
class RadarShape:
    device: Device
    color: RGBA
    radii: tuple[float, ...]
    vertices: tuple[tuple[float, float], ...]


def bar_geometry(aggregates: Sequence[DeviceAggregate], box: PlotBox, vmax: float) -> list[BarRect]:
    if not aggregates:
        return []
    bar_w = box.width / (len(aggregates) * 2)
    out: list[BarRect] = []
    for i, agg in enumerate(aggregates):
        x = box.left + (i * 2 + 0.5) * bar_w
        bar_h = linear(agg.value, 0.0, vmax, 0.0, box.height)
        out.append(
            BarRect(
                device=agg.device,
                value=agg.value,
                color=agg.color,
                x=x,
                y=box.bottom - bar_h,
                width=bar_w,
                height=bar_h,
            )
        )
    return out


def draw_bars(ctx: DrawContext, bars: Sequence[BarRect], box: PlotBox, metric_key: str, theme: ChartTheme) -> None:
    for bar in bars:
        center_x = bar.x + bar.width / 2
        ctx.fill_rect(bar.x, bar.y, bar.width, bar.height, bar.color)
        ctx.text(
            center_x,
            box.bottom + 10,
            bar.device.name,
            theme.tick_text_color,
            font_px=theme.tick_font_px,
            align="center",
            baseline="top",
            rotate_deg=BAR_LABEL_ROTATE_DEG,
        )
        ctx.text(
            center_x,
            bar.y - 5,
            format_value(bar.value, metric_key),
            theme.text_color,
            font_px=theme.tick_font_px,
            align="center",
            baseline="bottom",
        )


def line_trace(
    series: DeviceSeries,
    metric_key: str,
    *,
    t_min: float,
    t_max: float,
    vmax: float,
    box: PlotBox,
    color: RGBA,
) -> DeviceTrace:
    # Callers may hand over samples in any order.
    points = tuple(
        (time_to_x(sample.epoch_seconds(), t_min, t_max, box), value_to_y(sample.value(metric_key), vmax, box))
        for sample in series.time_sorted()
    )
    return DeviceTrace(device=series.device, color=color, points=points)


def draw_lines(ctx: DrawContext, traces: Sequence[DeviceTrace]) -> None:
    # Markers sit above every stroke.
    for trace in traces:
        if len(trace.points) < 2:
            continue
        ctx.line(trace.points, with_alpha(trace.color, GLOW_ALPHA), width=GLOW_WIDTH)
        ctx.line(trace.points, trace.color, width=LINE_WIDTH)
    for trace in traces:
        for x, y in trace.points:
            ctx.circle(x, y, MARKER_RADIUS, trace.color)


def radar_shape(
    aggregate_values: Sequence[float],
    axis_maxes: Sequence[float],
    metrics: Sequence[MetricDescriptor],
    *,
    device: Device,
    color: RGBA,
    cx: float,
    cy: float,
    radius: float,
) -> RadarShape:
    sides = len(metrics)
    radii = tuple(
        radar_radius(value, metric_max, radius, invert=descriptor.invert)
        for value, metric_max, descriptor in zip(aggregate_values, axis_maxes, metrics, strict=True)
    )
    vertices = tuple(polar_point(cx, cy, r, spoke_angle(i, sides)) for i, r in enumerate(radii))
    return RadarShape(device=device, color=color, radii=radii, vertices=vertices)


def draw_radar_shapes(ctx: DrawContext, shapes: Sequence[RadarShape]) -> None:
    for shape in shapes:
        ctx.polygon(shape.vertices, with_alpha(shape.color, RADAR_FILL_ALPHA))
        ctx.line(shape.vertices, shape.color, width=LINE_WIDTH, closed=True)
        for x, y in shape.vertices:
            ctx.circle(x, y, MARKER_RADIUS, shape.color)
