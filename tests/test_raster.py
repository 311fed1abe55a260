from __future__ import annotations

import unittest

import numpy as np

from netperf_plot.raster import (
    draw_circle,
    draw_polyline,
    draw_text,
    fill_polygon,
    fill_rect,
    new_canvas,
    polygon_mask,
    polyline_mask,
    text_size,
)
from netperf_plot.surface import DrawContext, Surface


class RasterPrimitiveTests(unittest.TestCase):
    def test_fill_rect_is_half_open(self) -> None:
        canvas = new_canvas(20, 20, color=(0, 0, 0, 255))
        fill_rect(canvas, 2, 3, 6, 8, (255, 0, 0, 255))
        self.assertEqual(tuple(canvas[3, 2]), (255, 0, 0, 255))
        self.assertEqual(tuple(canvas[7, 5]), (255, 0, 0, 255))
        self.assertEqual(tuple(canvas[8, 5]), (0, 0, 0, 255))
        self.assertEqual(tuple(canvas[3, 6]), (0, 0, 0, 255))

    def test_translucent_fill_blends_with_background(self) -> None:
        canvas = new_canvas(4, 4, color=(0, 0, 0, 255))
        fill_rect(canvas, 0, 0, 4, 4, (255, 0, 0, 128))
        self.assertAlmostEqual(int(canvas[1, 1, 0]), 128, delta=1)
        self.assertEqual(int(canvas[1, 1, 3]), 255)

    def test_fill_rect_clips_to_canvas(self) -> None:
        canvas = new_canvas(5, 5)
        fill_rect(canvas, -10, -10, 100, 100, (9, 9, 9, 255))
        self.assertTrue(np.all(canvas[:, :, 0] == 9))

    def test_polyline_mask_marks_endpoints_once(self) -> None:
        mask = polyline_mask(10, 10, [(1, 1), (8, 1), (8, 8)], width=1)
        assert mask is not None
        self.assertTrue(mask[1, 1] and mask[1, 8] and mask[8, 8])
        self.assertEqual(int(mask.sum()), 15)
        self.assertIsNone(polyline_mask(10, 10, [(1, 1)]))

    def test_overlapping_translucent_stroke_blends_once(self) -> None:
        canvas = new_canvas(10, 10, color=(0, 0, 0, 255))
        draw_polyline(canvas, [(1, 5), (8, 5), (1, 5)], (255, 255, 255, 128), width=3)
        self.assertAlmostEqual(int(canvas[5, 4, 0]), 128, delta=1)

    def test_polygon_mask_fills_square_interior(self) -> None:
        mask = polygon_mask(30, 30, [(10, 10), (20, 10), (20, 20), (10, 20)])
        assert mask is not None
        self.assertEqual(int(mask.sum()), 100)
        self.assertTrue(mask[10:20, 10:20].all())

    def test_fill_polygon_skips_degenerate_input(self) -> None:
        canvas = new_canvas(10, 10)
        before = canvas.copy()
        fill_polygon(canvas, [(1, 1), (5, 5)], (255, 255, 255, 255))
        self.assertTrue(np.array_equal(canvas, before))

    def test_circle_marker_is_round(self) -> None:
        canvas = new_canvas(20, 20)
        draw_circle(canvas, 10.0, 10.0, 3.0, (0, 255, 0, 255))
        self.assertEqual(int(canvas[10, 10, 1]), 255)
        self.assertEqual(int(canvas[10, 14, 1]), 0)
        self.assertEqual(int(canvas[13, 13, 1]), 0)

    def test_text_draws_glyph_coverage(self) -> None:
        canvas = new_canvas(120, 40, color=(255, 255, 255, 255))
        rect = draw_text(canvas, 60, 20, "Laptop", (0, 0, 0, 255), font_size_px=14.0, align="center", baseline="middle")
        assert rect is not None
        self.assertTrue(np.any(canvas[:, :, 0] < 128))
        x0, _, w, _ = rect
        self.assertAlmostEqual(x0 + w / 2, 60, delta=1)

    def test_rotated_text_box_is_taller(self) -> None:
        w0, h0 = text_size("MacBook Pro", font_size_px=12.0)
        w1, h1 = text_size("MacBook Pro", font_size_px=12.0, rotate_deg=30.0)
        self.assertGreater(h1, h0)
        self.assertLessEqual(w1, w0 + h0 + 2)


class DrawContextTests(unittest.TestCase):
    def test_pixel_ratio_scales_backing_store(self) -> None:
        surface = Surface(width=200, height=100, pixel_ratio=2.0)
        ctx = surface.get_context()
        assert ctx is not None and surface.pixels is not None
        self.assertEqual(surface.pixels.shape, (200, 400, 4))
        ctx.clear((0, 0, 0, 255))
        ctx.fill_rect(10, 10, 5, 5, (255, 0, 0, 255))
        self.assertEqual(int(surface.pixels[20, 20, 0]), 255)
        self.assertEqual(int(surface.pixels[29, 29, 0]), 255)
        self.assertEqual(int(surface.pixels[30, 30, 0]), 0)

    def test_non_finite_coordinates_are_dropped(self) -> None:
        pixels = new_canvas(20, 20)
        ctx = DrawContext(pixels)
        before = pixels.copy()
        ctx.fill_rect(float("nan"), 0, 5, 5, (255, 0, 0, 255))
        ctx.circle(5, float("nan"), 3, (255, 0, 0, 255))
        ctx.text(float("nan"), 5, "x", (255, 0, 0, 255), font_px=10)
        self.assertTrue(np.array_equal(pixels, before))

    def test_detached_surface_has_no_context(self) -> None:
        surface = Surface(width=50, height=50)
        surface.detach()
        self.assertIsNone(surface.get_context())

    def test_zero_sized_surface_has_no_context(self) -> None:
        self.assertIsNone(Surface(width=0, height=50).get_context())
        self.assertIsNone(Surface(width=50, height=0.2, pixel_ratio=1.0).get_context())

    def test_measure_text_is_in_logical_units(self) -> None:
        one = DrawContext(new_canvas(10, 10), scale=1.0).measure_text("Router", font_px=10)
        two = DrawContext(new_canvas(10, 10), scale=2.0).measure_text("Router", font_px=10)
        self.assertGreater(one, 0)
        self.assertLess(abs(one - two), one * 0.2)


if __name__ == "__main__":
    unittest.main()
