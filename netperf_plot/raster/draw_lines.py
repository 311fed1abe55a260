from __future__ import annotations

from typing import Sequence

import numpy as np

from netperf_plot.raster.canvas import RGBA, blend_mask


Point = tuple[int, int]


def draw_polyline(dst: np.ndarray, points: Sequence[Point], color: RGBA, width: int = 1, *, closed: bool = False) -> None:
    mask = polyline_mask(dst.shape[1], dst.shape[0], points, width=width, closed=closed)
    if mask is not None:
        blend_mask(dst, mask, 0, 0, color)


def draw_segment(dst: np.ndarray, x0: int, y0: int, x1: int, y1: int, color: RGBA, width: int = 1) -> None:
    draw_polyline(dst, [(x0, y0), (x1, y1)], color, width)


def polyline_mask(
    width_px: int,
    height_px: int,
    points: Sequence[Point],
    *,
    width: int = 1,
    closed: bool = False,
) -> np.ndarray | None:
    """Rasterise a polyline into a boolean mask so overlapping brush stamps blend once."""
    if len(points) < 2:
        return None
    mask = np.zeros((height_px, width_px), dtype=np.bool_)
    pts = list(points)
    if closed:
        pts.append(pts[0])
    for (x0, y0), (x1, y1) in zip(pts[:-1], pts[1:], strict=False):
        _stamp_segment(mask, int(x0), int(y0), int(x1), int(y1), width)
    return mask


def _stamp_segment(mask: np.ndarray, x0: int, y0: int, x1: int, y1: int, width: int) -> None:
    dx = abs(x1 - x0)
    sx = 1 if x0 < x1 else -1
    dy = -abs(y1 - y0)
    sy = 1 if y0 < y1 else -1
    err = dx + dy

    while True:
        _stamp_square_brush(mask, x0, y0, width)
        if x0 == x1 and y0 == y1:
            break
        e2 = 2 * err
        if e2 >= dy:
            err += dy
            x0 += sx
        if e2 <= dx:
            err += dx
            y0 += sy


def _stamp_square_brush(mask: np.ndarray, x: int, y: int, width: int) -> None:
    lo = max(1, width)
    ya = max(0, y - (lo - 1) // 2)
    xa = max(0, x - (lo - 1) // 2)
    yb = min(mask.shape[0], y + lo // 2 + 1)
    xb = min(mask.shape[1], x + lo // 2 + 1)
    if ya < yb and xa < xb:
        mask[ya:yb, xa:xb] = True
