from __future__ import annotations

from dataclasses import dataclass, field, fields
from pathlib import Path
import tomllib
from typing import Any, Mapping

from trichart.errors import ChartConfigError
from trichart.geometry import DEFAULT_TRAILING_PILLAR_WIDTH
from trichart.labels import DEFAULT_LABEL_FORMAT, validate_label_format
from trichart.scales import DEFAULT_LABEL_MARGIN
from trichart.style import DEFAULT_STYLE, ChartStyle, validate_style_tokens


CONFIG_FILENAME = "chart.toml"


@dataclass(frozen=True)
class ChartConfig:
    capacity: int = 100
    view_height: float = 400.0
    horizontal_scale: float = 1.0
    pillar_mode: bool = False
    show_value_labels: bool = False
    label_format: str = DEFAULT_LABEL_FORMAT
    label_margin: float = DEFAULT_LABEL_MARGIN
    trailing_pillar_width: float = DEFAULT_TRAILING_PILLAR_WIDTH
    style: ChartStyle = field(default_factory=lambda: DEFAULT_STYLE)


def load_config(path: str | Path) -> ChartConfig:
    """Load a chart config from a TOML file or from a directory holding ``chart.toml``."""
    config_path = Path(path)
    if config_path.is_dir():
        config_path = config_path / CONFIG_FILENAME
    if not config_path.exists():
        raise FileNotFoundError(f"chart config not found: {config_path}")
    with config_path.open("rb") as f:
        try:
            raw = tomllib.load(f)
        except tomllib.TOMLDecodeError as exc:
            raise ChartConfigError(f"invalid TOML in {config_path}: {exc}") from exc
    return config_from_mapping(raw)


def config_from_mapping(raw: Mapping[str, Any]) -> ChartConfig:
    known = {f.name for f in fields(ChartConfig)}
    unknown = sorted(set(raw) - known)
    if unknown:
        raise ChartConfigError(f"unknown config keys: {', '.join(unknown)}")

    values: dict[str, Any] = {}
    if "capacity" in raw:
        values["capacity"] = _coerce_int(raw["capacity"], "capacity")
        if values["capacity"] <= 0:
            raise ChartConfigError("capacity must be > 0")
    if "view_height" in raw:
        values["view_height"] = _coerce_float(raw["view_height"], "view_height")
        if values["view_height"] < 0:
            raise ChartConfigError("view_height must be >= 0")
    if "horizontal_scale" in raw:
        values["horizontal_scale"] = _coerce_float(raw["horizontal_scale"], "horizontal_scale")
        if values["horizontal_scale"] <= 0:
            raise ChartConfigError("horizontal_scale must be > 0")
    for key in ("pillar_mode", "show_value_labels"):
        if key in raw:
            values[key] = _coerce_bool(raw[key], key)
    if "label_format" in raw:
        try:
            values["label_format"] = validate_label_format(raw["label_format"])
        except ValueError as exc:
            raise ChartConfigError(str(exc)) from exc
    for key in ("label_margin", "trailing_pillar_width"):
        if key in raw:
            values[key] = _coerce_float(raw[key], key)
            if values[key] < 0:
                raise ChartConfigError(f"{key} must be >= 0")
    if "style" in raw:
        style = raw["style"]
        if not isinstance(style, Mapping):
            raise ChartConfigError("style must be a table")
        try:
            values["style"] = validate_style_tokens(style)
        except ValueError as exc:
            raise ChartConfigError(str(exc)) from exc
    return ChartConfig(**values)


def _coerce_int(value: object, field_name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ChartConfigError(f"{field_name} must be an integer")
    return value


def _coerce_float(value: object, field_name: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ChartConfigError(f"{field_name} must be a number")
    return float(value)


def _coerce_bool(value: object, field_name: str) -> bool:
    if not isinstance(value, bool):
        raise ChartConfigError(f"{field_name} must be a boolean")
    return value
