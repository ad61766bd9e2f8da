from __future__ import annotations

import math

import numpy as np

from trichart.chart import Chart
from trichart.geometry import emit_mesh
from trichart.mesh import RGBA, ArrayMeshSink
from trichart.raster.canvas import new_canvas
from trichart.raster.draw_text import DEFAULT_FONT_SIZE_PX, draw_text
from trichart.raster.fill import fill_mesh


DEFAULT_BACKGROUND: RGBA = (0, 0, 0, 0)
DEFAULT_LABEL_COLOR: RGBA = (230, 230, 230, 255)


def render_chart_rgba(
    chart: Chart,
    *,
    background: RGBA = DEFAULT_BACKGROUND,
    label_color: RGBA = DEFAULT_LABEL_COLOR,
    font_size_px: float = DEFAULT_FONT_SIZE_PX,
) -> np.ndarray:
    """Rasterise the chart into an (H, W, 4) uint8 frame sized to its container.

    Uses a fresh sink each call, so the chart's own dirty flag is left alone.
    """
    width = int(math.ceil(chart.container_width))
    height = int(math.ceil(chart.view_height))
    canvas = new_canvas(width, height, background)
    if width == 0 or height == 0:
        return canvas

    sink = ArrayMeshSink()
    triangles = chart.build_triangles()
    if triangles:
        emit_mesh(sink, len(triangles), triangles)
        mesh = sink.mesh
        assert mesh is not None
        fill_mesh(canvas, mesh)

    for anchor in chart.labels:
        draw_text(
            canvas,
            int(round(anchor.x)),
            int(round(anchor.y)),
            anchor.text,
            label_color,
            font_size_px=font_size_px,
        )
    return canvas
