from __future__ import annotations

from datetime import datetime
import math
from typing import Sequence

from netperf_plot.config import ChartTheme
from netperf_plot.colors import with_alpha
from netperf_plot.metrics import MetricDescriptor, format_value
from netperf_plot.raster.draw_text import TextAlign, TextBaseline
from netperf_plot.scales import PlotBox, grid_values, polar_point, spoke_angle, time_labels
from netperf_plot.surface import DrawContext


Y_GRID_COUNT = 5
X_LABEL_COUNT = 6
RADAR_LAYERS = 5
RADAR_LABEL_OFFSET = 15.0
TIME_LABEL_FORMAT = "%m/%d %H:%M"

# Indexed by octant: even entries are the four compass directions, odd
# entries the quadrants between them. Angles run clockwise from +x because
# screen y grows downward.
_OCTANT_ANCHORS: tuple[tuple[TextAlign, TextBaseline], ...] = (
    ("left", "middle"),  # right
    ("left", "top"),  # lower right
    ("center", "top"),  # down
    ("right", "top"),  # lower left
    ("right", "middle"),  # left
    ("right", "bottom"),  # upper left
    ("center", "bottom"),  # up
    ("left", "bottom"),  # upper right
)
_CARDINAL_EPS_DEG = 1e-6


def label_octant(angle: float) -> int:
    deg = math.degrees(angle) % 360.0
    nearest = round(deg / 90.0)
    if abs(deg - nearest * 90.0) <= _CARDINAL_EPS_DEG:
        return (nearest % 4) * 2
    return int(deg // 90.0) * 2 + 1


def label_anchor(angle: float) -> tuple[TextAlign, TextBaseline]:
    return _OCTANT_ANCHORS[label_octant(angle)]


def draw_cartesian_axes(ctx: DrawContext, box: PlotBox, vmax: float, metric_key: str, theme: ChartTheme) -> None:
    ctx.line([(box.left, box.top), (box.left, box.bottom), (box.right, box.bottom)], theme.axis_color, width=1.0)
    for i, value in enumerate(grid_values(vmax, Y_GRID_COUNT)):
        y = box.top + (box.height / Y_GRID_COUNT) * i
        ctx.line([(box.left, y), (box.right, y)], theme.grid_color, width=1.0)
        ctx.text(
            box.left - 5,
            y,
            format_value(value, metric_key),
            theme.tick_text_color,
            font_px=theme.tick_font_px,
            align="right",
            baseline="middle",
        )


def draw_time_axis(ctx: DrawContext, box: PlotBox, t_min: datetime, t_max: datetime, theme: ChartTheme) -> None:
    for i, instant in enumerate(time_labels(t_min, t_max, X_LABEL_COUNT)):
        x = box.left + (box.width / X_LABEL_COUNT) * i
        ctx.text(
            x,
            box.bottom + 15,
            instant.strftime(TIME_LABEL_FORMAT),
            theme.tick_text_color,
            font_px=theme.tick_font_px,
            align="center",
            baseline="middle",
        )


def regular_polygon(cx: float, cy: float, radius: float, sides: int) -> list[tuple[float, float]]:
    return [polar_point(cx, cy, radius, spoke_angle(i, sides)) for i in range(sides)]


def draw_radar_background(ctx: DrawContext, cx: float, cy: float, radius: float, sides: int, theme: ChartTheme) -> None:
    for layer in range(1, RADAR_LAYERS + 1):
        ring = regular_polygon(cx, cy, radius * layer / RADAR_LAYERS, sides)
        ctx.polygon(ring, with_alpha(theme.radar_tint, 0.1 + (layer / RADAR_LAYERS) * 0.1))
        ctx.line(ring, theme.axis_color, width=1.0, closed=True)


def draw_radar_spokes(
    ctx: DrawContext,
    cx: float,
    cy: float,
    radius: float,
    metrics: Sequence[MetricDescriptor],
    theme: ChartTheme,
) -> None:
    sides = len(metrics)
    for i, descriptor in enumerate(metrics):
        angle = spoke_angle(i, sides)
        ctx.line([(cx, cy), polar_point(cx, cy, radius, angle)], theme.radar_spoke_color, width=1.0)
        label_x, label_y = polar_point(cx, cy, radius + RADAR_LABEL_OFFSET, angle)
        align, baseline = label_anchor(angle)
        ctx.text(
            label_x,
            label_y,
            descriptor.label,
            theme.tick_text_color,
            font_px=theme.tick_font_px,
            align=align,
            baseline=baseline,
        )
