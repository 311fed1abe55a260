from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Callable, Literal, Sequence

from netperf_plot.config import ChartTheme
from netperf_plot.models import Device
from netperf_plot.raster.canvas import RGBA
from netperf_plot.surface import DrawContext

LOGGER = logging.getLogger(__name__)

SwatchKind = Literal["line", "square"]

LINE_SWATCH_W = 20.0
LINE_TEXT_OFFSET = 25.0
SQUARE_SWATCH = 10.0
SQUARE_TEXT_OFFSET = 15.0


@dataclass(frozen=True)
class LegendItem:
    device: Device
    color: RGBA
    x: float
    y: float
    text_width: float


@dataclass(frozen=True)
class LegendPlacement:
    items: tuple[LegendItem, ...]
    end_x: float
    overflow: bool


def layout_legend(
    entries: Sequence[tuple[Device, RGBA]],
    *,
    origin: tuple[float, float],
    gutter: float,
    measure: Callable[[str], float],
    max_x: float,
    text_offset: float = LINE_TEXT_OFFSET,
) -> LegendPlacement:
    """Place legend entries on one row, left to right.

    The cursor advances by the measured name width plus ``gutter``. There is
    no second row; entries past ``max_x`` set ``overflow``.
    """
    x, y = origin
    items: list[LegendItem] = []
    overflow = False
    for device, color in entries:
        text_w = measure(device.name)
        if x + text_offset + text_w > max_x:
            overflow = True
        items.append(LegendItem(device=device, color=color, x=x, y=y, text_width=text_w))
        x += text_w + gutter
    return LegendPlacement(items=tuple(items), end_x=x, overflow=overflow)


def draw_legend(ctx: DrawContext, placement: LegendPlacement, kind: SwatchKind, theme: ChartTheme) -> None:
    if placement.overflow:
        LOGGER.warning("legend row overflows the surface (%d entries)", len(placement.items))
    for item in placement.items:
        if kind == "line":
            ctx.line([(item.x, item.y), (item.x + LINE_SWATCH_W, item.y)], item.color, width=2.0)
            text_x = item.x + LINE_TEXT_OFFSET
        else:
            half = SQUARE_SWATCH / 2
            ctx.fill_rect(item.x, item.y - half, SQUARE_SWATCH, SQUARE_SWATCH, item.color)
            text_x = item.x + SQUARE_TEXT_OFFSET
        ctx.text(
            text_x,
            item.y,
            item.device.name,
            theme.text_color,
            font_px=theme.tick_font_px,
            align="left",
            baseline="middle",
        )
