from __future__ import annotations

import argparse
from dataclasses import replace
import logging
from pathlib import Path

import numpy as np
from PIL import Image

from trichart.chart import Chart
from trichart.config import ChartConfig, load_config
from trichart.errors import ChartError
from trichart.raster import render_chart_rgba


LOGGER = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="trichart")
    parser.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    sub = parser.add_subparsers(dest="command", required=True)

    render = sub.add_parser("render", help="Render an x,y CSV file to a PNG preview.")
    render.add_argument("points", type=Path, help="CSV with one x,y pair per line (non-decreasing x).")
    render.add_argument("--out", type=Path, required=True)
    render.add_argument("--config", type=Path, default=None, help="chart.toml file or directory holding one.")
    render.add_argument("--capacity", type=int, default=None)
    render.add_argument("--height", type=float, default=None)
    render.add_argument("--scale", type=float, default=None, help="Horizontal scale (pixels per x unit).")
    render.add_argument("--pillar", action="store_true", help="Draw a step/pillar chart.")
    render.add_argument("--labels", action="store_true", help="Draw value labels.")
    args = parser.parse_args(argv)

    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s %(name)s: %(message)s")

    if args.command == "render":
        try:
            return _render(args)
        except (ChartError, ValueError, FileNotFoundError) as exc:
            LOGGER.error("%s", exc)
            return 2
    return 1


def _render(args: argparse.Namespace) -> int:
    config = load_config(args.config) if args.config is not None else ChartConfig()
    samples = load_points_csv(args.points)
    capacity = args.capacity if args.capacity is not None else max(config.capacity, samples.shape[0], 1)

    chart = Chart.from_config(replace(config, capacity=capacity))
    if args.height is not None:
        chart.set_view_height(args.height)
    if args.scale is not None:
        chart.set_horizontal_scale(args.scale)
    if args.pillar:
        chart.set_pillar_mode(True)
    if args.labels:
        chart.set_show_value_labels(True)
    chart.add_points(samples.tolist())

    frame = render_chart_rgba(chart)
    if frame.shape[0] == 0 or frame.shape[1] == 0:
        raise ValueError("nothing to render: chart has no samples or zero height")
    args.out.parent.mkdir(parents=True, exist_ok=True)
    Image.fromarray(frame).save(args.out)
    LOGGER.info("wrote %s (%dx%d, %d samples)", args.out, frame.shape[1], frame.shape[0], chart.count)
    return 0


def load_points_csv(path: str | Path) -> np.ndarray:
    csv_path = Path(path)
    if not csv_path.exists():
        raise FileNotFoundError(f"points file not found: {csv_path}")
    data = np.loadtxt(csv_path, delimiter=",", dtype=np.float64, ndmin=2, comments="#")
    if data.size == 0:
        return np.zeros((0, 2), dtype=np.float64)
    if data.shape[1] != 2:
        raise ValueError(f"points file must have exactly two columns, got {data.shape[1]}")
    return data


if __name__ == "__main__":
    raise SystemExit(main())
