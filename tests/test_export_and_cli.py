from __future__ import annotations

import contextlib
from datetime import datetime, timezone
import io
import json
from pathlib import Path
import tempfile
import unittest

from PIL import Image

import main
from netperf_plot import Surface, render_chart
from netperf_plot.export import export_as_image, surface_to_png_bytes
from netperf_plot.models import Device, DeviceSeries, ResultSample


def _rendered_surface() -> Surface:
    sample = ResultSample(datetime(2024, 5, 1, tzinfo=timezone.utc), {"download": 42.0})
    surface = Surface(width=320, height=200)
    render_chart(surface, [DeviceSeries(Device("a", "Laptop"), (sample,))], "download", "bar")
    return surface


DEVICES_JSON = [
    {
        "id": "a",
        "name": "Laptop",
        "results": [
            {"timestamp": "2024-05-01T09:00:00+00:00", "download": 80, "upload": 20, "ping": 10, "jitter": 1, "packetLoss": 0, "qualityScore": 90},
            {"timestamp": "2024-05-01T10:00:00+00:00", "download": 120, "upload": 30, "ping": 30, "jitter": 3, "packetLoss": 1, "qualityScore": 80},
        ],
    },
    {"id": "b", "name": "Idle", "results": []},
]


class ExportTests(unittest.TestCase):
    def test_png_bytes(self) -> None:
        data = surface_to_png_bytes(_rendered_surface())
        self.assertTrue(data.startswith(b"\x89PNG"))

    def test_empty_surface_exports_nothing(self) -> None:
        self.assertEqual(surface_to_png_bytes(None), b"")
        self.assertEqual(surface_to_png_bytes(Surface(width=10, height=10)), b"")
        with tempfile.TemporaryDirectory() as tmp:
            self.assertIsNone(export_as_image(None, directory=tmp))

    def test_export_writes_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with self.assertLogs("netperf_plot.export", level="INFO"):
                out = export_as_image(_rendered_surface(), "speed", directory=Path(tmp) / "nested")
            assert out is not None
            self.assertEqual(out.name, "speed.png")
            with Image.open(out) as image:
                self.assertEqual(image.size, (320, 200))
                self.assertEqual(image.mode, "RGBA")


class CliTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name)
        self.input = self.root / "devices.json"
        self.input.write_text(json.dumps(DEVICES_JSON), encoding="utf-8")

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_summary_command(self) -> None:
        out = io.StringIO()
        with contextlib.redirect_stdout(out):
            code = main.main(["summary", str(self.input)])
        self.assertEqual(code, 0)
        payload = json.loads(out.getvalue())
        self.assertEqual(payload["a"]["metrics"]["avgDownload"], 100.0)
        self.assertEqual(payload["a"]["metrics"]["downloadStability"], 20.0)
        self.assertEqual(payload["a"]["metrics"]["testCount"], 2)
        self.assertIsNone(payload["b"]["metrics"])

    def test_render_command(self) -> None:
        target = self.root / "out" / "chart.png"
        out = io.StringIO()
        with contextlib.redirect_stdout(out):
            code = main.main(["render", str(self.input), "--chart", "line", "--metric", "ping", "--out", str(target)])
        self.assertEqual(code, 0)
        self.assertTrue(target.exists())
        self.assertEqual(out.getvalue().strip(), str(target))

    def test_render_with_nothing_to_draw(self) -> None:
        self.input.write_text(json.dumps([DEVICES_JSON[1]]), encoding="utf-8")
        err = io.StringIO()
        with contextlib.redirect_stderr(err):
            code = main.main(["render", str(self.input), "--out", str(self.root / "chart.png")])
        self.assertEqual(code, 1)
        self.assertFalse((self.root / "chart.png").exists())

    def test_missing_input_file(self) -> None:
        err = io.StringIO()
        with contextlib.redirect_stderr(err):
            code = main.main(["summary", str(self.root / "missing.json")])
        self.assertEqual(code, 2)
        self.assertIn("error:", err.getvalue())


if __name__ == "__main__":
    unittest.main()
