from __future__ import annotations

from dataclasses import dataclass, field
import math
from typing import Sequence

import numpy as np

from netperf_plot.raster import (
    RGBA,
    draw_circle,
    draw_polyline,
    draw_text,
    fill_canvas,
    fill_polygon,
    fill_rect,
    text_size,
)
from netperf_plot.raster.draw_text import DEFAULT_FONT_FAMILY, TextAlign, TextBaseline


@dataclass
class Surface:
    """Raster target with logical size and a device pixel ratio.

    ``pixels`` holds the physical RGBA buffer, shaped
    ``(round(height * pixel_ratio), round(width * pixel_ratio), 4)``.
    """

    width: float
    height: float
    pixel_ratio: float = 1.0
    pixels: np.ndarray | None = field(default=None, repr=False)
    _detached: bool = field(default=False, repr=False)

    def physical_size(self) -> tuple[int, int]:
        ratio = self.pixel_ratio if math.isfinite(self.pixel_ratio) and self.pixel_ratio > 0 else 1.0
        return (int(round(self.width * ratio)), int(round(self.height * ratio)))

    @property
    def is_drawable(self) -> bool:
        if not (math.isfinite(self.width) and math.isfinite(self.height)):
            return False
        w, h = self.physical_size()
        return self.width > 0 and self.height > 0 and w > 0 and h > 0

    def detach(self) -> None:
        """Release the backing buffer; later context requests fail."""
        self._detached = True
        self.pixels = None

    def get_context(self) -> "DrawContext | None":
        if self._detached or not self.is_drawable:
            return None
        w, h = self.physical_size()
        if self.pixels is None or self.pixels.shape != (h, w, 4):
            self.pixels = np.zeros((h, w, 4), dtype=np.uint8)
        return DrawContext(self.pixels, scale=w / self.width)


class DrawContext:
    """Draws in logical units onto a physical pixel buffer.

    Every coordinate and length is multiplied by ``scale`` before it reaches a
    raster primitive.
    """

    def __init__(self, pixels: np.ndarray, *, scale: float = 1.0, font_family: str = DEFAULT_FONT_FAMILY) -> None:
        if scale <= 0 or not math.isfinite(scale):
            raise ValueError("scale must be a finite value > 0")
        self.pixels = pixels
        self.scale = float(scale)
        self.font_family = font_family

    def _px(self, v: float) -> int:
        return int(round(v * self.scale))

    def _width(self, line_width: float) -> int:
        return max(1, int(round(line_width * self.scale)))

    def clear(self, color: RGBA) -> None:
        fill_canvas(self.pixels, color)

    def fill_rect(self, x: float, y: float, w: float, h: float, color: RGBA) -> None:
        if not _finite(x, y, w, h):
            return
        fill_rect(self.pixels, self._px(x), self._px(y), self._px(x + w), self._px(y + h), color)

    def line(self, points: Sequence[tuple[float, float]], color: RGBA, *, width: float = 1.0, closed: bool = False) -> None:
        pts = [(self._px(x), self._px(y)) for x, y in points if _finite(x, y)]
        draw_polyline(self.pixels, pts, color, self._width(width), closed=closed)

    def polygon(self, points: Sequence[tuple[float, float]], color: RGBA) -> None:
        pts = [(x * self.scale, y * self.scale) for x, y in points if _finite(x, y)]
        fill_polygon(self.pixels, pts, color)

    def circle(self, x: float, y: float, radius: float, color: RGBA) -> None:
        if not _finite(x, y, radius):
            return
        draw_circle(self.pixels, x * self.scale, y * self.scale, radius * self.scale, color)

    def text(
        self,
        x: float,
        y: float,
        text: str,
        color: RGBA,
        *,
        font_px: float,
        align: TextAlign = "left",
        baseline: TextBaseline = "top",
        rotate_deg: float = 0.0,
    ) -> None:
        if not _finite(x, y):
            return
        draw_text(
            self.pixels,
            x * self.scale,
            y * self.scale,
            text,
            color,
            font_family=self.font_family,
            font_size_px=font_px * self.scale,
            align=align,
            baseline=baseline,
            rotate_deg=rotate_deg,
        )

    def measure_text(self, text: str, *, font_px: float) -> float:
        w, _ = text_size(text, font_family=self.font_family, font_size_px=font_px * self.scale)
        return w / self.scale


def _finite(*values: float) -> bool:
    return all(math.isfinite(v) for v in values)
