from __future__ import annotations

from dataclasses import dataclass, fields, replace
import logging
from pathlib import Path
import tomllib
from typing import Any

from netperf_plot.colors import PALETTE, parse_hex
from netperf_plot.raster.canvas import RGBA
from netperf_plot.raster.draw_text import DEFAULT_FONT_FAMILY

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChartTheme:
    background: RGBA = (255, 255, 255, 255)
    axis_color: RGBA = (226, 232, 240, 255)
    grid_color: RGBA = (226, 232, 240, 160)
    tick_text_color: RGBA = (100, 116, 139, 255)
    text_color: RGBA = (15, 23, 42, 255)
    radar_tint: RGBA = (241, 245, 249, 255)
    radar_spoke_color: RGBA = (203, 213, 225, 255)
    font_family: str = DEFAULT_FONT_FAMILY
    tick_font_px: float = 10.0
    title_font_px: float = 14.0
    palette: tuple[RGBA, ...] = PALETTE


DEFAULT_THEME = ChartTheme()

_COLOR_FIELDS = {
    "background",
    "axis_color",
    "grid_color",
    "tick_text_color",
    "text_color",
    "radar_tint",
    "radar_spoke_color",
}
_FLOAT_FIELDS = {"tick_font_px", "title_font_px"}


def load_theme(path: str | Path) -> ChartTheme:
    theme_path = Path(path)
    if not theme_path.exists():
        raise FileNotFoundError(f"theme file not found: {theme_path}")
    with theme_path.open("rb") as f:
        raw = tomllib.load(f)
    table = raw.get("theme", raw)
    if not isinstance(table, dict):
        raise ValueError("`theme` must be a table")
    theme = theme_from_mapping(table)
    LOGGER.debug("loaded chart theme from %s", theme_path)
    return theme


def theme_from_mapping(table: dict[str, Any], *, base: ChartTheme = DEFAULT_THEME) -> ChartTheme:
    known = {f.name for f in fields(ChartTheme)}
    unknown = sorted(set(table) - known)
    if unknown:
        raise ValueError(f"unknown theme keys: {', '.join(unknown)}")
    updates: dict[str, Any] = {}
    for key, value in table.items():
        if key in _COLOR_FIELDS:
            updates[key] = _coerce_color(value, key)
        elif key in _FLOAT_FIELDS:
            if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
                raise ValueError(f"`{key}` must be a number > 0")
            updates[key] = float(value)
        elif key == "font_family":
            if not isinstance(value, str):
                raise ValueError("`font_family` must be a string")
            updates[key] = value
        elif key == "palette":
            if not isinstance(value, list) or not value:
                raise ValueError("`palette` must be a non-empty list of hex colors")
            updates[key] = tuple(_coerce_color(item, "palette") for item in value)
    return replace(base, **updates)


def _coerce_color(value: Any, key: str) -> RGBA:
    if not isinstance(value, str):
        raise ValueError(f"`{key}` must be a hex color string")
    return parse_hex(value)
