from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
import sys

from netperf_plot import ChartType, Surface, render_chart, summarize
from netperf_plot.adapters import load_devices
from netperf_plot.config import DEFAULT_THEME, load_theme
from netperf_plot.errors import PlotDataError
from netperf_plot.export import export_as_image
from netperf_plot.metrics import METRIC_KEYS


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="netperf-plot")
    parser.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    sub = parser.add_subparsers(dest="command", required=True)

    render = sub.add_parser("render", help="Render a device comparison chart to PNG.")
    render.add_argument("input", type=Path, help="JSON list of devices with `results`.")
    render.add_argument("--metric", choices=list(METRIC_KEYS), default="download")
    render.add_argument("--chart", choices=[c.value for c in ChartType], default=ChartType.BAR.value)
    render.add_argument("--width", type=float, default=800.0)
    render.add_argument("--height", type=float, default=400.0)
    render.add_argument("--pixel-ratio", type=float, default=1.0)
    render.add_argument("--theme", type=Path, default=None, help="TOML file with a [theme] table.")
    render.add_argument("--out", type=Path, default=Path("chart.png"))

    summary = sub.add_parser("summary", help="Print per-device performance summaries as JSON.")
    summary.add_argument("input", type=Path)

    args = parser.parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s %(name)s: %(message)s")

    try:
        devices = load_devices(args.input)
    except (OSError, PlotDataError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    if args.command == "summary":
        payload = {}
        for series in devices:
            try:
                stats = summarize(series.samples)
            except PlotDataError as exc:
                print(f"error: {exc}", file=sys.stderr)
                return 2
            payload[series.device.id] = {
                "name": series.device.name,
                "metrics": stats.as_dict() if stats is not None else None,
            }
        print(json.dumps(payload, indent=2, ensure_ascii=False))
        return 0

    surface = Surface(width=args.width, height=args.height, pixel_ratio=args.pixel_ratio)
    try:
        theme = load_theme(args.theme) if args.theme is not None else DEFAULT_THEME
        drawn = render_chart(surface, devices, args.metric, args.chart, theme=theme)
    except (OSError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    if not drawn:
        print("nothing to render", file=sys.stderr)
        return 1
    out_path = export_as_image(surface, args.out.stem, directory=args.out.parent)
    print(str(out_path))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
