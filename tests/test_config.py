from __future__ import annotations

from pathlib import Path
import tempfile
import unittest

from netperf_plot.colors import PALETTE
from netperf_plot.config import DEFAULT_THEME, load_theme, theme_from_mapping


class ChartThemeConfigTests(unittest.TestCase):
    def test_defaults(self) -> None:
        self.assertEqual(DEFAULT_THEME.background, (255, 255, 255, 255))
        self.assertEqual(DEFAULT_THEME.palette, PALETTE)
        self.assertEqual(DEFAULT_THEME.tick_font_px, 10.0)

    def test_load_theme_table(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "theme.toml"
            path.write_text(
                '[theme]\nbackground = "#0f172a"\ntitle_font_px = 16\npalette = ["#ff0000", "#00ff0080"]\n',
                encoding="utf-8",
            )
            theme = load_theme(path)
        self.assertEqual(theme.background, (15, 23, 42, 255))
        self.assertEqual(theme.title_font_px, 16.0)
        self.assertEqual(theme.palette, ((255, 0, 0, 255), (0, 255, 0, 128)))
        self.assertEqual(theme.text_color, DEFAULT_THEME.text_color)

    def test_load_theme_top_level_keys(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "theme.toml"
            path.write_text('font_family = "Liberation Sans"\n', encoding="utf-8")
            theme = load_theme(path)
        self.assertEqual(theme.font_family, "Liberation Sans")

    def test_missing_file_raises(self) -> None:
        with self.assertRaises(FileNotFoundError):
            load_theme("/nonexistent/netperf-theme.toml")

    def test_unknown_key_raises(self) -> None:
        with self.assertRaisesRegex(ValueError, "unknown theme keys: accent"):
            theme_from_mapping({"accent": "#ffffff"})

    def test_bad_values_raise(self) -> None:
        for table in (
            {"background": 123},
            {"background": "#12"},
            {"tick_font_px": 0},
            {"tick_font_px": True},
            {"palette": []},
            {"font_family": 3},
        ):
            with self.subTest(table=table):
                with self.assertRaises(ValueError):
                    theme_from_mapping(table)


if __name__ == "__main__":
    unittest.main()
