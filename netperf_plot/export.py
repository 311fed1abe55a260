from __future__ import annotations

import io
import logging
from pathlib import Path

import numpy as np
from PIL import Image

from netperf_plot.surface import Surface

LOGGER = logging.getLogger(__name__)


def _surface_image(surface: Surface | None) -> Image.Image | None:
    if surface is None or surface.pixels is None or surface.pixels.size == 0:
        return None
    return Image.fromarray(np.ascontiguousarray(surface.pixels))


def surface_to_png_bytes(surface: Surface | None) -> bytes:
    image = _surface_image(surface)
    if image is None:
        return b""
    buf = io.BytesIO()
    image.save(buf, format="PNG")
    return buf.getvalue()


def export_as_image(surface: Surface | None, filename: str = "chart", *, directory: str | Path = ".") -> Path | None:
    image = _surface_image(surface)
    if image is None:
        LOGGER.debug("export skipped: surface has no pixels")
        return None
    root = Path(directory)
    root.mkdir(parents=True, exist_ok=True)
    out_path = root / f"{filename}.png"
    image.save(out_path, format="PNG")
    LOGGER.info("exported chart to %s", out_path)
    return out_path
