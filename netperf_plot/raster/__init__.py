from .canvas import RGBA, blend_mask, draw_hline, draw_pixel, draw_vline, fill_canvas, fill_rect, new_canvas
from .draw_lines import draw_polyline, draw_segment, polyline_mask
from .draw_markers import draw_circle, draw_markers
from .draw_polygon import fill_polygon, polygon_mask
from .draw_text import draw_text, text_size

__all__ = [
    "RGBA",
    "blend_mask",
    "draw_circle",
    "draw_hline",
    "draw_markers",
    "draw_pixel",
    "draw_polyline",
    "draw_segment",
    "draw_text",
    "draw_vline",
    "fill_canvas",
    "fill_polygon",
    "fill_rect",
    "new_canvas",
    "polygon_mask",
    "polyline_mask",
    "text_size",
]
