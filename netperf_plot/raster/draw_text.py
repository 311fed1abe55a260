from __future__ import annotations

from functools import lru_cache
import logging
from pathlib import Path
from typing import Literal

import numpy as np
from PIL import Image, ImageDraw, ImageFont

from netperf_plot.raster.canvas import RGBA, blend_mask

LOGGER = logging.getLogger(__name__)

DEFAULT_FONT_FAMILY = "DejaVu Sans"
DEFAULT_FONT_SIZE_PX = 10.0
SANS_FONT_FALLBACK_PATTERNS = (
    "dejavusans",
    "dejavu sans",
    "liberationsans",
    "helvetica",
    "arial",
    "freesans",
)

TextAlign = Literal["left", "center", "right"]
TextBaseline = Literal["top", "middle", "bottom"]

_ALIGN_FACTOR = {"left": 0.0, "center": 0.5, "right": 1.0}
_BASELINE_FACTOR = {"top": 0.0, "middle": 0.5, "bottom": 1.0}


def draw_text(
    dst: np.ndarray,
    x: float,
    y: float,
    text: str,
    color: RGBA,
    *,
    font_family: str = DEFAULT_FONT_FAMILY,
    font_size_px: float = DEFAULT_FONT_SIZE_PX,
    align: TextAlign = "left",
    baseline: TextBaseline = "top",
    rotate_deg: float = 0.0,
) -> tuple[int, int, int, int] | None:
    """Draw ``text`` anchored at (x, y); returns the drawn pixel rect or None."""
    if not text:
        return None
    font = _load_font(font_family=font_family, font_size_px=font_size_px)
    mask = _render_mask(text=text, font=font)
    if rotate_deg:
        mask = _rotate_mask(mask, rotate_deg=rotate_deg)
    h, w = mask.shape
    x0 = int(round(x - w * _ALIGN_FACTOR[align]))
    y0 = int(round(y - h * _BASELINE_FACTOR[baseline]))
    blend_mask(dst, mask, x0, y0, color)
    return (x0, y0, w, h)


def text_size(
    text: str,
    *,
    font_family: str = DEFAULT_FONT_FAMILY,
    font_size_px: float = DEFAULT_FONT_SIZE_PX,
    rotate_deg: float = 0.0,
) -> tuple[int, int]:
    font = _load_font(font_family=font_family, font_size_px=font_size_px)
    if not text:
        ascent, descent = font.getmetrics()
        return (0, max(1, int(ascent + descent)))
    if rotate_deg:
        h, w = _rotate_mask(_render_mask(text=text, font=font), rotate_deg=rotate_deg).shape
        return (w, h)
    left, top, right, bottom = font.getbbox(text)
    return (max(0, int(right - left)), max(1, int(bottom - top)))


@lru_cache(maxsize=256)
def _render_mask(text: str, font: ImageFont.FreeTypeFont | ImageFont.ImageFont) -> np.ndarray:
    left, top, right, bottom = font.getbbox(text)
    width = max(1, int(right - left))
    height = max(1, int(bottom - top))
    image = Image.new("L", (width, height), 0)
    draw = ImageDraw.Draw(image)
    draw.text((-left, -top), text, fill=255, font=font)
    mask = np.asarray(image, dtype=np.uint8)
    mask.setflags(write=False)
    return mask


def _rotate_mask(mask: np.ndarray, *, rotate_deg: float) -> np.ndarray:
    # Screen rotation is clockwise for positive angles; PIL rotates counter-clockwise.
    image = Image.fromarray(np.ascontiguousarray(mask))
    rotated = image.rotate(-float(rotate_deg), resample=Image.Resampling.BICUBIC, expand=True, fillcolor=0)
    return np.asarray(rotated, dtype=np.uint8)


@lru_cache(maxsize=64)
def _load_font(font_family: str, font_size_px: float) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
    size = max(1, int(round(font_size_px)))
    font_path = _resolve_font_path(font_family)
    if font_path is not None:
        try:
            return ImageFont.truetype(str(font_path), size=size)
        except OSError as exc:
            LOGGER.warning("could not load font %s (%s); using Pillow default", font_path, exc)
    return ImageFont.load_default(size=size)


@lru_cache(maxsize=16)
def _resolve_font_path(font_family: str) -> Path | None:
    wanted = font_family.strip().lower() if font_family.strip() else DEFAULT_FONT_FAMILY.lower()
    patterns = (wanted,) + SANS_FONT_FALLBACK_PATTERNS

    font_dirs = [
        Path.home() / "Library" / "Fonts",
        Path("/Library/Fonts"),
        Path("/System/Library/Fonts"),
        Path("/System/Library/Fonts/Supplemental"),
        Path("/usr/share/fonts"),
        Path("/usr/local/share/fonts"),
        Path("C:/Windows/Fonts"),
    ]

    candidates: list[Path] = []
    for base in font_dirs:
        if not base.exists():
            continue
        for ext in ("*.ttf", "*.otf", "*.ttc"):
            candidates.extend(sorted(base.rglob(ext)))

    for pattern in patterns:
        p = pattern.replace(" ", "")
        for path in candidates:
            stem = path.stem.lower().replace(" ", "").replace("-", "")
            # Skip condensed/mono/bold variants so label widths stay predictable.
            if any(tag in stem for tag in ("mono", "bold", "oblique", "condensed", "italic")):
                continue
            if p in stem:
                return path
    LOGGER.debug("no system font matched %r; falling back to Pillow default", font_family)
    return None
