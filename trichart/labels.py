from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from trichart.scales import ViewTransform


DEFAULT_LABEL_FORMAT = "x: {0:.1f}\ny: {1:.1f}"


@dataclass(frozen=True)
class LabelAnchor:
    """Absolutely positioned value label, relative to the chart origin."""

    index: int
    x: float
    y: float
    text: str


def format_label(template: str, x: float, y: float) -> str:
    return template.format(x, y)


def validate_label_format(template: str) -> str:
    if not isinstance(template, str):
        raise ValueError("label format must be a string")
    try:
        format_label(template, 0.0, 0.0)
    except (AttributeError, IndexError, KeyError, TypeError, ValueError) as exc:
        raise ValueError(f"label format must take two positional numbers (x, y): {template!r}") from exc
    return template


def place_labels(points: np.ndarray, transform: ViewTransform, template: str) -> tuple[LabelAnchor, ...]:
    anchors: list[LabelAnchor] = []
    for i, (x, y) in enumerate(points.tolist()):
        vx, vy = transform.map_point(x, y)
        anchors.append(LabelAnchor(index=i, x=vx, y=vy, text=format_label(template, x, y)))
    return tuple(anchors)
