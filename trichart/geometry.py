from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
import logging

import numpy as np

from trichart.errors import MeshWriteError
from trichart.mesh import RGBA, MeshSink, Vertex
from trichart.scales import ViewTransform


LOGGER = logging.getLogger(__name__)

DEFAULT_TRAILING_PILLAR_WIDTH = 10.0

Position = tuple[float, float]


@dataclass(frozen=True)
class Triangle:
    p1: Position
    p2: Position
    p3: Position
    tint: RGBA

    def winding_z(self) -> float:
        """z of cross(p3 - p1, p2 - p1) in view space (y down); emitted triangles are always >= 0."""
        return _cross_z(self.p1, self.p2, self.p3)


def triangle_count(point_count: int, pillar_mode: bool) -> int:
    if point_count < 2:
        return 0
    if pillar_mode:
        return point_count * 2
    return (point_count - 1) * 2


def crossing_x(x1: float, y1: float, x2: float, y2: float) -> float:
    """x where the segment (x1, y1) -> (x2, y2) meets y = 0."""
    return x1 - y1 * (x2 - x1) / (y2 - y1)


def iter_triangles(
    points: np.ndarray,
    transform: ViewTransform,
    *,
    pillar_mode: bool,
    positive_color: RGBA,
    negative_color: RGBA,
    trailing_pillar_width: float = DEFAULT_TRAILING_PILLAR_WIDTH,
) -> Iterator[Triangle]:
    n = points.shape[0]
    if n < 2:
        return
    # Work in coordinates relative to the first sample with y already scaled;
    # _make_triangle applies the rest of the view transform.
    xs = (points[:, 0] - transform.first_x).tolist()
    ys = (points[:, 1] * transform.vertical_ratio).tolist()

    def color_for(y: float) -> RGBA:
        return positive_color if y > 0 else negative_color

    if pillar_mode:
        for i in range(n - 1):
            yield from _pillar(transform, xs[i], xs[i + 1] - xs[i], ys[i], color_for(ys[i]))
        yield from _pillar(transform, xs[-1], trailing_pillar_width, ys[-1], color_for(ys[-1]))
        return

    for i in range(n - 1):
        x1, y1 = xs[i], ys[i]
        x2, y2 = xs[i + 1], ys[i + 1]
        if y1 * y2 >= 0:
            color = color_for(y1)
            yield _make_triangle(transform, color, (x1, y1), (x2, y2), (x1, 0.0))
            yield _make_triangle(transform, color, (x2, y2), (x1, 0.0), (x2, 0.0))
        else:
            x5 = crossing_x(x1, y1, x2, y2)
            yield _make_triangle(transform, color_for(y1), (x1, y1), (x1, 0.0), (x5, 0.0))
            yield _make_triangle(transform, color_for(y2), (x2, y2), (x2, 0.0), (x5, 0.0))


def build_triangles(
    points: np.ndarray,
    transform: ViewTransform,
    *,
    pillar_mode: bool,
    positive_color: RGBA,
    negative_color: RGBA,
    trailing_pillar_width: float = DEFAULT_TRAILING_PILLAR_WIDTH,
) -> list[Triangle]:
    return list(
        iter_triangles(
            points,
            transform,
            pillar_mode=pillar_mode,
            positive_color=positive_color,
            negative_color=negative_color,
            trailing_pillar_width=trailing_pillar_width,
        )
    )


def emit_mesh(sink: MeshSink, expected_triangles: int, triangles: Iterable[Triangle]) -> int:
    """Write ``triangles`` into one exact-size allocation; returns the number written.

    Indices enumerate vertices one-to-one; no vertex is shared between triangles.
    """
    if expected_triangles <= 0:
        return 0
    vertex_count = expected_triangles * 3
    vertex_writer, index_writer = sink.allocate(vertex_count, vertex_count)
    written = 0
    index = 0
    for tri in triangles:
        if written >= expected_triangles:
            raise MeshWriteError(f"triangle stream exceeds allocation of {expected_triangles}")
        for x, y in (tri.p1, tri.p2, tri.p3):
            vertex_writer.set_next_vertex(Vertex(x=x, y=y, tint=tri.tint))
            index_writer.set_next_index(index)
            index += 1
        written += 1
    if written != expected_triangles:
        raise MeshWriteError(f"triangle stream wrote {written} of {expected_triangles} triangles")
    LOGGER.debug("emitted %d triangles (%d vertices)", written, vertex_count)
    return written


def _pillar(transform: ViewTransform, x: float, width: float, height: float, color: RGBA) -> Iterator[Triangle]:
    yield _make_triangle(transform, color, (x, height), (x + width, height), (x, 0.0))
    yield _make_triangle(transform, color, (x + width, height), (x, 0.0), (x + width, 0.0))


def _make_triangle(transform: ViewTransform, color: RGBA, a: Position, b: Position, c: Position) -> Triangle:
    p1 = transform.to_view(*a)
    p2 = transform.to_view(*b)
    p3 = transform.to_view(*c)
    # Emitted triangles must have a non-negative z for cross(p3 - p1, p2 - p1).
    if _cross_z(p1, p2, p3) < 0:
        p2, p3 = p3, p2
    return Triangle(p1=p1, p2=p2, p3=p3, tint=color)


def _cross_z(p1: Position, p2: Position, p3: Position) -> float:
    ax, ay = p3[0] - p1[0], p3[1] - p1[1]
    bx, by = p2[0] - p1[0], p2[1] - p1[1]
    return ax * by - ay * bx
