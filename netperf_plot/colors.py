from __future__ import annotations

from typing import Sequence

from netperf_plot.raster.canvas import RGBA


PALETTE_HEX = (
    "#0ea5e9",
    "#10b981",
    "#f59e0b",
    "#ef4444",
    "#8b5cf6",
    "#ec4899",
    "#06b6d4",
    "#f97316",
)


def parse_hex(value: str) -> RGBA:
    text = value.strip().lstrip("#")
    if len(text) not in {6, 8}:
        raise ValueError(f"expected #rrggbb or #rrggbbaa color, got {value!r}")
    try:
        channels = [int(text[i : i + 2], 16) for i in range(0, len(text), 2)]
    except ValueError as exc:
        raise ValueError(f"invalid hex color: {value!r}") from exc
    if len(channels) == 3:
        channels.append(255)
    r, g, b, a = channels
    return (r, g, b, a)


PALETTE: tuple[RGBA, ...] = tuple(parse_hex(c) for c in PALETTE_HEX)


def color_for(device_id: str, palette: Sequence[RGBA] = PALETTE) -> RGBA:
    """Pick a palette entry from the character-code sum of ``device_id``.

    The result only depends on the identifier, so a device keeps its color
    no matter where it sits in the input. Ids whose sums share a residue
    share a color.
    """
    if not palette:
        raise ValueError("palette must not be empty")
    code_sum = sum(ord(ch) for ch in device_id)
    return palette[code_sum % len(palette)]


def with_alpha(color: RGBA, alpha: float) -> RGBA:
    r, g, b, _ = color
    a = int(round(max(0.0, min(1.0, alpha)) * 255))
    return (r, g, b, a)
