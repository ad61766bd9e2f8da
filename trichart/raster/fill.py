from __future__ import annotations

import math

import numpy as np

from trichart.mesh import MeshData
from trichart.raster.canvas import blend_region


def fill_mesh(dst: np.ndarray, mesh: MeshData) -> None:
    """Fill every triangle of ``mesh`` into ``dst``; the first vertex's tint colours the triangle."""
    tris = mesh.triangle_positions().astype(np.float64)
    tints = mesh.tints[mesh.indices].reshape(-1, 3, 4)
    for corners, tint in zip(tris, tints, strict=True):
        color = tuple(int(c) for c in tint[0])
        fill_triangle(dst, corners, color)  # type: ignore[arg-type]


def fill_triangle(dst: np.ndarray, corners: np.ndarray, color: tuple[int, int, int, int]) -> None:
    """Hard-edged fill sampling pixel centres. Degenerate triangles cover nothing."""
    (ax, ay), (bx, by), (cx, cy) = corners.tolist()
    area = (bx - ax) * (cy - ay) - (by - ay) * (cx - ax)
    if area == 0:
        return

    height, width = dst.shape[:2]
    x0 = max(0, int(math.floor(min(ax, bx, cx))))
    x1 = min(width, int(math.ceil(max(ax, bx, cx))))
    y0 = max(0, int(math.floor(min(ay, by, cy))))
    y1 = min(height, int(math.ceil(max(ay, by, cy))))
    if x0 >= x1 or y0 >= y1:
        return

    px, py = np.meshgrid(np.arange(x0, x1) + 0.5, np.arange(y0, y1) + 0.5)
    w0 = ((bx - px) * (cy - py) - (by - py) * (cx - px)) / area
    w1 = ((cx - px) * (ay - py) - (cy - py) * (ax - px)) / area
    w2 = 1.0 - w0 - w1
    inside = (w0 >= 0) & (w1 >= 0) & (w2 >= 0)
    blend_region(dst, y0, x0, inside.astype(np.float32), color)
