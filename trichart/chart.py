from __future__ import annotations

from collections.abc import Iterable
import logging
import math
import numbers
from typing import Any

import numpy as np

from trichart.config import ChartConfig
from trichart.errors import MeshAllocationError
from trichart.geometry import DEFAULT_TRAILING_PILLAR_WIDTH, Triangle, build_triangles, emit_mesh, iter_triangles, triangle_count
from trichart.labels import DEFAULT_LABEL_FORMAT, LabelAnchor, place_labels, validate_label_format
from trichart.mesh import MeshSink
from trichart.points import PointBuffer
from trichart.scales import (
    DEFAULT_LABEL_MARGIN,
    DEFAULT_VERTICAL_RATIO,
    ViewTransform,
    build_view_transform,
    compute_vertical_ratio,
    container_width,
)
from trichart.style import DEFAULT_STYLE, StyleProvider


LOGGER = logging.getLogger(__name__)


class Chart:
    """Single-series triangulated chart.

    Mutators update samples and settings, then recompute the vertical ratio,
    container width and value labels before returning. Triangulation is
    deferred: mutators only mark the geometry dirty and ``render`` rebuilds it.
    """

    def __init__(
        self,
        capacity: int,
        *,
        view_height: float = 0.0,
        horizontal_scale: float = 1.0,
        pillar_mode: bool = False,
        show_value_labels: bool = False,
        label_format: str = DEFAULT_LABEL_FORMAT,
        style: StyleProvider = DEFAULT_STYLE,
        label_margin: float = DEFAULT_LABEL_MARGIN,
        trailing_pillar_width: float = DEFAULT_TRAILING_PILLAR_WIDTH,
    ) -> None:
        self._points = PointBuffer(capacity)
        _require_positive(horizontal_scale, "horizontal_scale")
        _require_non_negative(view_height, "view_height")
        _require_non_negative(label_margin, "label_margin")
        _require_non_negative(trailing_pillar_width, "trailing_pillar_width")
        self._view_height = float(view_height)
        self._horizontal_scale = float(horizontal_scale)
        self._pillar_mode = bool(pillar_mode)
        self._show_value_labels = bool(show_value_labels)
        self._label_format = validate_label_format(label_format)
        self._style = style
        self._label_margin = float(label_margin)
        self._trailing_pillar_width = float(trailing_pillar_width)
        self._vertical_ratio = DEFAULT_VERTICAL_RATIO
        self._container_width = 0.0
        self._labels: tuple[LabelAnchor, ...] = ()
        self._geometry_dirty = True

    @classmethod
    def from_config(cls, config: ChartConfig) -> "Chart":
        return cls(
            config.capacity,
            view_height=config.view_height,
            horizontal_scale=config.horizontal_scale,
            pillar_mode=config.pillar_mode,
            show_value_labels=config.show_value_labels,
            label_format=config.label_format,
            style=config.style,
            label_margin=config.label_margin,
            trailing_pillar_width=config.trailing_pillar_width,
        )

    def add_point(self, x: float, y: float) -> None:
        self._points.add(x, y)
        self._recompute_ratio()
        self._refresh_layout()

    def add_points(self, samples: Iterable[tuple[float, float]]) -> int:
        """Add samples in order; stops at the first rejected sample and re-raises its error."""
        added = 0
        try:
            for x, y in samples:
                self._points.add(x, y)
                added += 1
        finally:
            if added:
                self._recompute_ratio()
                self._refresh_layout()
        return added

    def clear(self) -> None:
        self._points.clear()
        self._refresh_layout()

    def set_horizontal_scale(self, factor: float) -> None:
        _require_positive(factor, "horizontal_scale")
        self._horizontal_scale = float(factor)
        self._refresh_layout()

    def set_pillar_mode(self, enabled: bool) -> None:
        self._pillar_mode = bool(enabled)
        self._refresh_layout()

    def switch_mode(self) -> None:
        self.set_pillar_mode(not self._pillar_mode)

    def set_show_value_labels(self, enabled: bool) -> None:
        self._show_value_labels = bool(enabled)
        self._refresh_layout()

    def set_view_height(self, height: float) -> None:
        _require_non_negative(height, "view_height")
        self._view_height = float(height)
        self._recompute_ratio()
        self._refresh_layout()

    @property
    def label_format(self) -> str:
        return self._label_format

    @label_format.setter
    def label_format(self, template: str) -> None:
        self._label_format = validate_label_format(template)
        self._refresh_layout()

    @property
    def style(self) -> StyleProvider:
        return self._style

    @style.setter
    def style(self, provider: StyleProvider) -> None:
        self._style = provider
        self._geometry_dirty = True

    def is_pillar_mode(self) -> bool:
        return self._pillar_mode

    def horizontal_scale(self) -> float:
        return self._horizontal_scale

    def show_value_labels(self) -> bool:
        return self._show_value_labels

    @property
    def count(self) -> int:
        return self._points.count

    @property
    def capacity(self) -> int:
        return self._points.capacity

    def points(self) -> np.ndarray:
        return self._points.as_array()

    @property
    def view_height(self) -> float:
        return self._view_height

    @property
    def half_height(self) -> float:
        return self._view_height / 2.0

    @property
    def vertical_ratio(self) -> float:
        return self._vertical_ratio

    @property
    def container_width(self) -> float:
        return self._container_width

    @property
    def labels(self) -> tuple[LabelAnchor, ...]:
        return self._labels

    @property
    def geometry_dirty(self) -> bool:
        return self._geometry_dirty

    @property
    def triangle_count(self) -> int:
        return triangle_count(self._points.count, self._pillar_mode)

    def view_transform(self) -> ViewTransform:
        return build_view_transform(
            self._points.as_array(),
            horizontal_scale=self._horizontal_scale,
            vertical_ratio=self._vertical_ratio,
            half_height=self.half_height,
        )

    def build_triangles(self) -> list[Triangle]:
        points = self._points.as_array()
        return build_triangles(
            points,
            self.view_transform(),
            pillar_mode=self._pillar_mode,
            positive_color=self._style.positive_fill_color(),
            negative_color=self._style.negative_fill_color(),
            trailing_pillar_width=self._trailing_pillar_width,
        )

    def render(self, sink: MeshSink) -> bool:
        """Rebuild the mesh into ``sink`` if the geometry is dirty.

        Returns True when a rebuild completed; with fewer than two samples the
        rebuild is an empty frame and the sink is not asked for buffers. A sink
        that raises MeshAllocationError leaves the chart dirty so the next render retries.
        """
        if not self._geometry_dirty:
            return False
        points = self._points.as_array()
        expected = triangle_count(points.shape[0], self._pillar_mode)
        if expected == 0:
            self._geometry_dirty = False
            return True
        triangles = iter_triangles(
            points,
            self.view_transform(),
            pillar_mode=self._pillar_mode,
            positive_color=self._style.positive_fill_color(),
            negative_color=self._style.negative_fill_color(),
            trailing_pillar_width=self._trailing_pillar_width,
        )
        try:
            emit_mesh(sink, expected, triangles)
        except MeshAllocationError as exc:
            LOGGER.warning("mesh allocation failed; skipping frame: %s", exc)
            return False
        self._geometry_dirty = False
        return True

    def _recompute_ratio(self) -> None:
        self._vertical_ratio = compute_vertical_ratio(self._points.as_array(), self.half_height, self._vertical_ratio)

    def _refresh_layout(self) -> None:
        points = self._points.as_array()
        self._container_width = container_width(points, self._horizontal_scale, self._label_margin)
        if self._show_value_labels:
            self._labels = place_labels(points, self.view_transform(), self._label_format)
        else:
            self._labels = ()
        self._geometry_dirty = True


def create(capacity: int, **options: Any) -> Chart:
    return Chart(capacity, **options)


def _require_positive(value: float, name: str) -> None:
    if isinstance(value, bool) or not isinstance(value, numbers.Real) or not (math.isfinite(value) and value > 0):
        raise ValueError(f"{name} must be > 0")


def _require_non_negative(value: float, name: str) -> None:
    if isinstance(value, bool) or not isinstance(value, numbers.Real) or not (math.isfinite(value) and value >= 0):
        raise ValueError(f"{name} must be >= 0")
