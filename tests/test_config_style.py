from __future__ import annotations

from pathlib import Path
import tempfile
import unittest

from trichart import Chart
from trichart.config import ChartConfig, config_from_mapping, load_config
from trichart.errors import ChartConfigError
from trichart.style import DEFAULT_STYLE, parse_hex_color, validate_style_tokens


class ChartStyleTests(unittest.TestCase):
    def test_parse_hex_color(self) -> None:
        self.assertEqual(parse_hex_color("#FF8000"), (255, 128, 0, 255))
        self.assertEqual(parse_hex_color("#ff800040"), (255, 128, 0, 64))
        with self.assertRaisesRegex(ValueError, "hex color"):
            parse_hex_color("orange")

    def test_validate_style_defaults(self) -> None:
        self.assertEqual(validate_style_tokens(), DEFAULT_STYLE)

    def test_validate_style_accepts_partial_override(self) -> None:
        style = validate_style_tokens({"negative_fill": "#112233", "border_width_px": 2})
        self.assertEqual(style.negative_fill_color(), (17, 34, 51, 255))
        self.assertEqual(style.border_width_px, 2.0)
        self.assertEqual(style.positive_fill, DEFAULT_STYLE.positive_fill)

    def test_validate_style_rejects_unknown_token(self) -> None:
        with self.assertRaisesRegex(ValueError, "Unknown style token"):
            validate_style_tokens({"fill": "#112233"})

    def test_validate_style_rejects_bad_values(self) -> None:
        with self.assertRaisesRegex(ValueError, "hex color"):
            validate_style_tokens({"positive_fill": "blue"})
        with self.assertRaisesRegex(ValueError, "non-negative"):
            validate_style_tokens({"border_width_px": -1})


class ChartConfigTests(unittest.TestCase):
    def _write(self, root: Path, text: str) -> Path:
        path = root / "chart.toml"
        path.write_text(text, encoding="utf-8")
        return path

    def test_load_config_from_directory(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            self._write(
                root,
                'capacity = 3\nview_height = 200\nhorizontal_scale = 500\npillar_mode = true\n'
                'label_format = "{0:.2f};{1:.2f}"\n\n[style]\npositive_fill = "#00FF00"\n',
            )
            config = load_config(root)
        self.assertEqual(config.capacity, 3)
        self.assertEqual(config.view_height, 200.0)
        self.assertEqual(config.horizontal_scale, 500.0)
        self.assertTrue(config.pillar_mode)
        self.assertFalse(config.show_value_labels)
        self.assertEqual(config.style.positive_fill_color(), (0, 255, 0, 255))

        chart = Chart.from_config(config)
        self.assertEqual(chart.capacity, 3)
        self.assertTrue(chart.is_pillar_mode())
        self.assertEqual(chart.label_format, "{0:.2f};{1:.2f}")

    def test_missing_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with self.assertRaises(FileNotFoundError):
                load_config(Path(tmp) / "nope.toml")

    def test_invalid_toml(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = self._write(Path(tmp), "capacity = = 3\n")
            with self.assertRaises(ChartConfigError):
                load_config(path)

    def test_rejects_unknown_and_mistyped_keys(self) -> None:
        with self.assertRaisesRegex(ChartConfigError, "unknown config keys: zoom"):
            config_from_mapping({"zoom": 2})
        with self.assertRaisesRegex(ChartConfigError, "capacity must be an integer"):
            config_from_mapping({"capacity": 2.5})
        with self.assertRaisesRegex(ChartConfigError, "capacity must be > 0"):
            config_from_mapping({"capacity": 0})
        with self.assertRaisesRegex(ChartConfigError, "horizontal_scale must be > 0"):
            config_from_mapping({"horizontal_scale": 0})
        with self.assertRaisesRegex(ChartConfigError, "pillar_mode must be a boolean"):
            config_from_mapping({"pillar_mode": 1})
        with self.assertRaises(ChartConfigError):
            config_from_mapping({"label_format": "{5}"})
        for template in ("{0.foo} {1}", "{0[0]} {1}"):
            with self.assertRaises(ChartConfigError):
                config_from_mapping({"label_format": template})
        with self.assertRaises(ChartConfigError):
            config_from_mapping({"style": {"positive_fill": "green"}})

    def test_defaults(self) -> None:
        self.assertEqual(config_from_mapping({}), ChartConfig())


if __name__ == "__main__":
    unittest.main()
