from __future__ import annotations

import argparse
import logging
from pathlib import Path

import numpy as np
from PIL import Image

from trichart import ArrayMeshSink, Chart
from trichart.raster import render_chart_rgba


LOGGER = logging.getLogger(__name__)


class RandomWalkChartApp:
    """Feeds random samples into a chart the way a host "add point" button would."""

    def __init__(self, *, capacity: int = 100, view_height: float = 400.0, seed: int | None = None) -> None:
        self.chart = Chart(capacity, view_height=view_height, horizontal_scale=500.0)
        self.sink = ArrayMeshSink()
        self._rng = np.random.default_rng(seed)
        self._last_x = 0.0

    def step(self) -> None:
        self._last_x += float(self._rng.uniform(1.0, 50.0))
        self.chart.add_point(self._last_x, float(self._rng.uniform(-100.0, 100.0)))

    def frame(self) -> bool:
        return self.chart.render(self.sink)


def main() -> None:
    parser = argparse.ArgumentParser(prog="random_walk")
    parser.add_argument("--samples", type=int, default=40)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--scale", type=float, default=2.0)
    parser.add_argument("--pillar", action="store_true")
    parser.add_argument("--labels", action="store_true")
    parser.add_argument("--out", type=Path, default=Path("random_walk.png"))
    args = parser.parse_args()
    logging.basicConfig(level=logging.INFO)

    app = RandomWalkChartApp(seed=args.seed)
    app.chart.set_horizontal_scale(args.scale)
    app.chart.set_pillar_mode(args.pillar)
    app.chart.set_show_value_labels(args.labels)
    for _ in range(args.samples):
        app.step()
        app.frame()
    mesh = app.sink.mesh
    LOGGER.info("last mesh: %d triangles", 0 if mesh is None else mesh.triangle_count)
    Image.fromarray(render_chart_rgba(app.chart)).save(args.out)
    LOGGER.info("wrote %s", args.out)


if __name__ == "__main__":
    main()
