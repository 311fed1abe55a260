from __future__ import annotations

from typing import Sequence

import numpy as np

from netperf_plot.raster.canvas import RGBA, blend_mask


def polygon_mask(width_px: int, height_px: int, points: Sequence[tuple[float, float]]) -> np.ndarray | None:
    """Even-odd fill of a closed polygon, sampled at pixel centres."""
    if len(points) < 3:
        return None
    xs = np.asarray([p[0] for p in points], dtype=np.float64)
    ys = np.asarray([p[1] for p in points], dtype=np.float64)
    x0 = max(0, int(np.floor(xs.min())))
    x1 = min(width_px, int(np.ceil(xs.max())) + 1)
    y0 = max(0, int(np.floor(ys.min())))
    y1 = min(height_px, int(np.ceil(ys.max())) + 1)
    mask = np.zeros((height_px, width_px), dtype=np.bool_)
    if x0 >= x1 or y0 >= y1:
        return mask

    py, px = np.mgrid[y0:y1, x0:x1].astype(np.float64)
    px += 0.5
    py += 0.5
    inside = np.zeros(px.shape, dtype=np.bool_)
    xj = np.roll(xs, 1)
    yj = np.roll(ys, 1)
    for xa, ya, xb, yb in zip(xs, ys, xj, yj, strict=False):
        if ya == yb:
            continue
        crosses = (ya > py) != (yb > py)
        x_at = xa + (py - ya) * (xb - xa) / (yb - ya)
        inside ^= crosses & (px < x_at)
    mask[y0:y1, x0:x1] = inside
    return mask


def fill_polygon(dst: np.ndarray, points: Sequence[tuple[float, float]], color: RGBA) -> None:
    mask = polygon_mask(dst.shape[1], dst.shape[0], points)
    if mask is not None:
        blend_mask(dst, mask, 0, 0, color)
