from __future__ import annotations

from dataclasses import dataclass

import numpy as np


DEFAULT_VERTICAL_RATIO = 1.0
DEFAULT_LABEL_MARGIN = 50.0


@dataclass(frozen=True)
class ViewTransform:
    """Maps samples to chart-local pixels.

    x is measured from the first buffered sample and stretched by the horizontal
    scale; the y baseline sits at half height and positive values rise.
    """

    first_x: float
    horizontal_scale: float
    vertical_ratio: float
    half_height: float

    def to_view(self, x_rel: float, y_scaled: float) -> tuple[float, float]:
        return (x_rel * self.horizontal_scale, self.half_height - y_scaled)

    def map_point(self, x: float, y: float) -> tuple[float, float]:
        return self.to_view(x - self.first_x, y * self.vertical_ratio)


def compute_vertical_ratio(points: np.ndarray, half_height: float, previous: float) -> float:
    """Ratio that fits the largest |y| into half of the view height.

    Returns ``previous`` unchanged for fewer than two samples, an all-zero series
    or a collapsed view.
    """
    if points.shape[0] < 2 or half_height <= 0:
        return previous
    max_abs_y = float(np.max(np.abs(points[:, 1])))
    if max_abs_y == 0.0:
        return previous
    return float(half_height) / max_abs_y


def container_width(points: np.ndarray, horizontal_scale: float, margin: float = DEFAULT_LABEL_MARGIN) -> float:
    if points.shape[0] < 1:
        return 0.0
    span = float(points[-1, 0] - points[0, 0])
    return span * horizontal_scale + margin


def build_view_transform(
    points: np.ndarray,
    *,
    horizontal_scale: float,
    vertical_ratio: float,
    half_height: float,
) -> ViewTransform:
    first_x = float(points[0, 0]) if points.shape[0] > 0 else 0.0
    return ViewTransform(
        first_x=first_x,
        horizontal_scale=float(horizontal_scale),
        vertical_ratio=float(vertical_ratio),
        half_height=float(half_height),
    )
