from __future__ import annotations

from dataclasses import asdict, dataclass
import re
from typing import Any, Mapping, Protocol

from trichart.mesh import RGBA

_HEX_COLOR = re.compile(r"^#[0-9a-fA-F]{6}([0-9a-fA-F]{2})?$")


class StyleProvider(Protocol):
    def positive_fill_color(self) -> RGBA:
        ...

    def negative_fill_color(self) -> RGBA:
        ...


@dataclass(frozen=True)
class ChartStyle:
    """Colour tokens for the chart fills. Borders are exposed for hosts but not drawn."""

    positive_fill: str = "#3E95FFCC"
    negative_fill: str = "#F05252CC"
    positive_border: str = "#1D4ED8"
    negative_border: str = "#B91C1C"
    border_width_px: float = 0.0

    def positive_fill_color(self) -> RGBA:
        return parse_hex_color(self.positive_fill)

    def negative_fill_color(self) -> RGBA:
        return parse_hex_color(self.negative_fill)

    def positive_border_color(self) -> RGBA:
        return parse_hex_color(self.positive_border)

    def negative_border_color(self) -> RGBA:
        return parse_hex_color(self.negative_border)


DEFAULT_STYLE = ChartStyle()

_COLOR_TOKENS = ("positive_fill", "negative_fill", "positive_border", "negative_border")


def parse_hex_color(value: str) -> RGBA:
    if not isinstance(value, str) or not _HEX_COLOR.match(value):
        raise ValueError(f"color must be a hex color (#RRGGBB or #RRGGBBAA): {value!r}")
    digits = value[1:]
    if len(digits) == 6:
        digits += "FF"
    return (
        int(digits[0:2], 16),
        int(digits[2:4], 16),
        int(digits[4:6], 16),
        int(digits[6:8], 16),
    )


def validate_style_tokens(overrides: Mapping[str, Any] | None = None) -> ChartStyle:
    """Validate and merge token overrides against the default chart style."""

    raw: dict[str, Any] = asdict(DEFAULT_STYLE)
    if overrides:
        for key, value in overrides.items():
            if key not in raw:
                raise ValueError(f"Unknown style token: {key}")
            raw[key] = value

    for key in _COLOR_TOKENS:
        if not isinstance(raw[key], str) or not _HEX_COLOR.match(raw[key]):
            raise ValueError(f"Token `{key}` must be a hex color (#RRGGBB or #RRGGBBAA)")

    width = raw["border_width_px"]
    if isinstance(width, bool) or not isinstance(width, (int, float)) or float(width) < 0:
        raise ValueError("Token `border_width_px` must be a non-negative number")

    return ChartStyle(
        positive_fill=str(raw["positive_fill"]),
        negative_fill=str(raw["negative_fill"]),
        positive_border=str(raw["positive_border"]),
        negative_border=str(raw["negative_border"]),
        border_width_px=float(width),
    )
