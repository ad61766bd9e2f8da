from __future__ import annotations

import importlib.util
from pathlib import Path
import tempfile
import unittest

import numpy as np
from PIL import Image

from trichart.cli import load_points_csv, main


class CliTests(unittest.TestCase):
    def test_render_writes_png_sized_to_container(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            points = root / "points.csv"
            points.write_text("# x,y\n0,10\n1,-5\n3,20\n", encoding="utf-8")
            (root / "chart.toml").write_text("view_height = 60\nhorizontal_scale = 20\n", encoding="utf-8")
            out = root / "out" / "chart.png"

            code = main(["render", str(points), "--out", str(out), "--config", str(root), "--pillar", "--labels"])

            self.assertEqual(code, 0)
            with Image.open(out) as img:
                self.assertEqual(img.size, (3 * 20 + 50, 60))
                self.assertEqual(img.mode, "RGBA")

    def test_render_reports_out_of_order_points(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            points = root / "points.csv"
            points.write_text("2,1\n1,1\n", encoding="utf-8")
            with self.assertLogs("trichart.cli", level="ERROR"):
                code = main(["render", str(points), "--out", str(root / "x.png"), "--height", "50"])
            self.assertEqual(code, 2)
            self.assertFalse((root / "x.png").exists())

    def test_load_points_csv_shapes(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "one.csv"
            path.write_text("1.5,2.5\n", encoding="utf-8")
            np.testing.assert_array_equal(load_points_csv(path), [[1.5, 2.5]])
            path.write_text("1,2,3\n", encoding="utf-8")
            with self.assertRaisesRegex(ValueError, "two columns"):
                load_points_csv(path)


class RandomWalkExampleTests(unittest.TestCase):
    def test_random_walk_app_streams_and_renders(self) -> None:
        app_path = Path(__file__).resolve().parents[1] / "examples" / "random_walk" / "app_main.py"
        spec = importlib.util.spec_from_file_location("random_walk_app_main", app_path)
        assert spec is not None and spec.loader is not None
        module = importlib.util.module_from_spec(spec)
        spec.loader.exec_module(module)

        app = module.RandomWalkChartApp(capacity=8, view_height=100.0, seed=1)
        for _ in range(12):
            app.step()
            self.assertTrue(app.frame())
        self.assertEqual(app.chart.count, 8)
        mesh = app.sink.mesh
        self.assertIsNotNone(mesh)
        self.assertEqual(mesh.triangle_count, 14)
        self.assertLessEqual(float(np.max(np.abs(app.chart.points()[:, 1]))) * app.chart.vertical_ratio, 50.0 + 1e-9)


if __name__ == "__main__":
    unittest.main()
