from __future__ import annotations

import numpy as np


RGBA = tuple[int, int, int, int]


def new_canvas(width: int, height: int, color: RGBA = (0, 0, 0, 255)) -> np.ndarray:
    canvas = np.zeros((height, width, 4), dtype=np.uint8)
    fill_canvas(canvas, color)
    return canvas


def fill_canvas(dst: np.ndarray, color: RGBA) -> None:
    dst[:, :, 0] = color[0]
    dst[:, :, 1] = color[1]
    dst[:, :, 2] = color[2]
    dst[:, :, 3] = color[3]


def blend_mask(dst: np.ndarray, mask: np.ndarray, x0: int, y0: int, color: RGBA) -> None:
    """Source-over composite ``color`` through a coverage mask placed at (x0, y0).

    ``mask`` is either boolean or uint8 coverage (0..255). Parts outside
    ``dst`` are clipped.
    """
    h, w = mask.shape
    x1 = min(dst.shape[1], x0 + w)
    y1 = min(dst.shape[0], y0 + h)
    cx0 = max(0, x0)
    cy0 = max(0, y0)
    if cx0 >= x1 or cy0 >= y1:
        return
    cov = mask[cy0 - y0 : y1 - y0, cx0 - x0 : x1 - x0]
    if cov.dtype == np.bool_:
        cov = cov.astype(np.float32)
    else:
        cov = cov.astype(np.float32) / 255.0
    src_alpha = cov * (color[3] / 255.0)
    if not np.any(src_alpha > 0):
        return

    patch = dst[cy0:y1, cx0:x1]
    dst_rgb = patch[:, :, :3].astype(np.float32)
    dst_alpha = patch[:, :, 3].astype(np.float32) / 255.0
    src_rgb = np.asarray(color[:3], dtype=np.float32).reshape(1, 1, 3)
    out_alpha = src_alpha + dst_alpha * (1.0 - src_alpha)
    out_rgb_num = src_rgb * src_alpha[:, :, None] + dst_rgb * dst_alpha[:, :, None] * (1.0 - src_alpha[:, :, None])
    safe_alpha = np.where(out_alpha > 1e-6, out_alpha, 1.0)
    out_rgb = out_rgb_num / safe_alpha[:, :, None]

    touched = src_alpha > 0
    patch[:, :, :3] = np.where(touched[:, :, None], np.clip(np.rint(out_rgb), 0, 255), dst_rgb).astype(np.uint8)
    patch[:, :, 3] = np.where(touched, np.clip(np.rint(out_alpha * 255.0), 0, 255), patch[:, :, 3]).astype(np.uint8)


def draw_pixel(dst: np.ndarray, x: int, y: int, color: RGBA) -> None:
    if y < 0 or y >= dst.shape[0] or x < 0 or x >= dst.shape[1]:
        return
    blend_mask(dst, np.ones((1, 1), dtype=np.bool_), x, y, color)


def fill_rect(dst: np.ndarray, x0: int, y0: int, x1: int, y1: int, color: RGBA) -> None:
    """Fill the half-open pixel rectangle [x0, x1) x [y0, y1)."""
    left, right = min(x0, x1), max(x0, x1)
    top, bottom = min(y0, y1), max(y0, y1)
    if right <= left or bottom <= top:
        return
    blend_mask(dst, np.ones((bottom - top, right - left), dtype=np.bool_), left, top, color)


def draw_hline(dst: np.ndarray, x0: int, x1: int, y: int, color: RGBA, width: int = 1) -> None:
    half = max(1, width) // 2
    fill_rect(dst, min(x0, x1), y - half, max(x0, x1) + 1, y - half + max(1, width), color)


def draw_vline(dst: np.ndarray, x: int, y0: int, y1: int, color: RGBA, width: int = 1) -> None:
    half = max(1, width) // 2
    fill_rect(dst, x - half, min(y0, y1), x - half + max(1, width), max(y0, y1) + 1, color)
