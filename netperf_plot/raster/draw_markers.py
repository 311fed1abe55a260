from __future__ import annotations

from typing import Sequence

import numpy as np

from netperf_plot.raster.canvas import RGBA, blend_mask


def draw_circle(dst: np.ndarray, cx: float, cy: float, radius: float, color: RGBA) -> None:
    r = max(0.5, float(radius))
    x0 = int(np.floor(cx - r))
    y0 = int(np.floor(cy - r))
    size = int(np.ceil(2 * r)) + 2
    yy, xx = np.mgrid[0:size, 0:size]
    # Pixel centres inside the disc.
    inside = ((xx + x0 + 0.5 - cx) ** 2 + (yy + y0 + 0.5 - cy) ** 2) <= r * r
    blend_mask(dst, inside, x0, y0, color)


def draw_markers(dst: np.ndarray, points: Sequence[tuple[float, float]], color: RGBA, radius: float = 3.0) -> None:
    for x, y in points:
        draw_circle(dst, x, y, radius, color)
