from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import logging
from typing import Callable, Sequence

from netperf_plot.aggregate import aggregate_devices, average_of
from netperf_plot.axes import draw_cartesian_axes, draw_radar_background, draw_radar_spokes, draw_time_axis
from netperf_plot.colors import color_for
from netperf_plot.config import DEFAULT_THEME, ChartTheme
from netperf_plot.errors import PlotDataError
from netperf_plot.legend import SQUARE_TEXT_OFFSET, draw_legend, layout_legend
from netperf_plot.metrics import METRIC_KEYS, describe, metric_title
from netperf_plot.models import DeviceSeries
from netperf_plot.scales import PlotBox, domain_max, radar_axis_max
from netperf_plot.series import (
    bar_geometry,
    draw_bars,
    draw_lines,
    draw_radar_shapes,
    line_trace,
    radar_shape,
)
from netperf_plot.surface import DrawContext, Surface

LOGGER = logging.getLogger(__name__)

RADAR_TITLE = "Device performance overview"
RADAR_RADIUS_FRACTION = 0.8
LINE_LEGEND_GUTTER = 50.0
RADAR_LEGEND_GUTTER = 40.0


class ChartType(str, Enum):
    BAR = "bar"
    LINE = "line"
    RADAR = "radar"


@dataclass(frozen=True)
class Margins:
    top: float
    right: float
    bottom: float
    left: float


CHART_MARGINS: dict[ChartType, Margins] = {
    ChartType.BAR: Margins(top=40, right=30, bottom=60, left=60),
    # Extra top room keeps the legend row clear of the title.
    ChartType.LINE: Margins(top=60, right=30, bottom=60, left=60),
    ChartType.RADAR: Margins(top=30, right=20, bottom=40, left=20),
}


@dataclass(frozen=True)
class ChartFrame:
    ctx: DrawContext
    box: PlotBox
    width: float
    height: float
    theme: ChartTheme

    def measure(self, text: str) -> float:
        return self.ctx.measure_text(text, font_px=self.theme.tick_font_px)


@dataclass(frozen=True)
class ChartRequest:
    devices: tuple[DeviceSeries, ...]
    metric: str
    radar_metrics: tuple[str, ...]


def plot_box(width: float, height: float, margins: Margins) -> PlotBox:
    return PlotBox(
        left=margins.left,
        top=margins.top,
        width=width - margins.left - margins.right,
        height=height - margins.top - margins.bottom,
    )


def render_chart(
    surface: Surface | None,
    devices: Sequence[DeviceSeries],
    metric: str,
    chart_type: ChartType | str,
    *,
    theme: ChartTheme | None = None,
    radar_metrics: Sequence[str] | None = None,
) -> bool:
    """Repaint ``surface`` with one chart; returns False when nothing was drawn.

    Missing surfaces, zero sizes, empty device lists and all-empty series are
    silent no-ops. Unknown metrics and samples without the requested metric
    raise.
    """
    if surface is None:
        LOGGER.debug("render skipped: no surface")
        return False
    if not devices:
        LOGGER.debug("render skipped: no devices")
        return False
    kind = ChartType(chart_type)
    describe(metric)
    if not surface.is_drawable:
        LOGGER.debug("render skipped: surface size %sx%s", surface.width, surface.height)
        return False
    ctx = surface.get_context()
    if ctx is None:
        LOGGER.debug("render skipped: drawing context unavailable")
        return False

    theme = theme or DEFAULT_THEME
    ctx.font_family = theme.font_family
    box = plot_box(surface.width, surface.height, CHART_MARGINS[kind])
    if box.width <= 0 or box.height <= 0:
        LOGGER.debug("render skipped: %s margins leave no plot area", kind.value)
        return False
    frame = ChartFrame(ctx=ctx, box=box, width=surface.width, height=surface.height, theme=theme)
    request = ChartRequest(
        devices=tuple(devices),
        metric=metric,
        radar_metrics=tuple(radar_metrics) if radar_metrics is not None else METRIC_KEYS,
    )
    return _RENDERERS[kind](frame, request)


def _draw_title(frame: ChartFrame, title: str, x: float, y: float) -> None:
    frame.ctx.text(
        x,
        y,
        title,
        frame.theme.text_color,
        font_px=frame.theme.title_font_px,
        align="center",
        baseline="middle",
    )


def _render_bar(frame: ChartFrame, request: ChartRequest) -> bool:
    metric = request.metric
    aggregates = aggregate_devices(request.devices, metric, palette=frame.theme.palette)
    if not aggregates:
        LOGGER.debug("bar chart skipped: every device series is empty")
        return False
    vmax = domain_max(agg.value for agg in aggregates)
    bars = bar_geometry(aggregates, frame.box, vmax)

    frame.ctx.clear(frame.theme.background)
    draw_cartesian_axes(frame.ctx, frame.box, vmax, metric, frame.theme)
    draw_bars(frame.ctx, bars, frame.box, metric, frame.theme)
    _draw_title(frame, metric_title(metric), frame.box.left + frame.box.width / 2, frame.box.top / 2)
    return True


def _render_line(frame: ChartFrame, request: ChartRequest) -> bool:
    metric = request.metric
    active = [series for series in request.devices if not series.is_empty]
    if not active:
        LOGGER.debug("line chart skipped: every device series is empty")
        return False
    samples = [sample for series in active for sample in series.samples]
    vmax = domain_max(sample.value(metric) for sample in samples)
    # One time axis shared by every device.
    first = min(samples, key=lambda s: s.epoch_seconds())
    last = max(samples, key=lambda s: s.epoch_seconds())
    t_min, t_max = first.epoch_seconds(), last.epoch_seconds()
    palette = frame.theme.palette
    traces = [
        line_trace(
            series,
            metric,
            t_min=t_min,
            t_max=t_max,
            vmax=vmax,
            box=frame.box,
            color=color_for(series.device.id, palette),
        )
        for series in active
    ]
    placement = layout_legend(
        [(trace.device, trace.color) for trace in traces],
        origin=(frame.box.left, frame.box.top - 20),
        gutter=LINE_LEGEND_GUTTER,
        measure=frame.measure,
        max_x=frame.width,
    )

    frame.ctx.clear(frame.theme.background)
    draw_cartesian_axes(frame.ctx, frame.box, vmax, metric, frame.theme)
    draw_time_axis(frame.ctx, frame.box, first.timestamp, last.timestamp, frame.theme)
    draw_lines(frame.ctx, traces)
    draw_legend(frame.ctx, placement, "line", frame.theme)
    _draw_title(frame, metric_title(metric), frame.box.left + frame.box.width / 2, 15)
    return True


def _render_radar(frame: ChartFrame, request: ChartRequest) -> bool:
    # Radar plots every metric axis; request.metric is only validated.
    metrics = [describe(key) for key in request.radar_metrics]
    if len(metrics) < 3:
        raise PlotDataError(f"radar chart needs at least 3 metrics, got {len(metrics)}")
    active = [series for series in request.devices if not series.is_empty]
    if not active:
        LOGGER.debug("radar chart skipped: every device series is empty")
        return False
    table = [[average_of(series.samples, descriptor.key) for descriptor in metrics] for series in active]
    axis_maxes = [radar_axis_max(descriptor.key, [row[j] for row in table]) for j, descriptor in enumerate(metrics)]
    cx, cy = frame.box.center
    radius = min(frame.box.width, frame.box.height) / 2 * RADAR_RADIUS_FRACTION
    palette = frame.theme.palette
    shapes = [
        radar_shape(
            row,
            axis_maxes,
            metrics,
            device=series.device,
            color=color_for(series.device.id, palette),
            cx=cx,
            cy=cy,
            radius=radius,
        )
        for series, row in zip(active, table, strict=True)
    ]
    placement = layout_legend(
        [(shape.device, shape.color) for shape in shapes],
        origin=(frame.box.left, frame.height - 20),
        gutter=RADAR_LEGEND_GUTTER,
        measure=frame.measure,
        max_x=frame.width,
        text_offset=SQUARE_TEXT_OFFSET,
    )

    frame.ctx.clear(frame.theme.background)
    draw_radar_background(frame.ctx, cx, cy, radius, len(metrics), frame.theme)
    draw_radar_spokes(frame.ctx, cx, cy, radius, metrics, frame.theme)
    draw_radar_shapes(frame.ctx, shapes)
    draw_legend(frame.ctx, placement, "square", frame.theme)
    _draw_title(frame, RADAR_TITLE, frame.width / 2, 15)
    return True


_RENDERERS: dict[ChartType, Callable[[ChartFrame, ChartRequest], bool]] = {
    ChartType.BAR: _render_bar,
    ChartType.LINE: _render_line,
    ChartType.RADAR: _render_radar,
}
