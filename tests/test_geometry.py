from __future__ import annotations

import unittest

import numpy as np

from trichart.errors import MeshWriteError
from trichart.geometry import Triangle, build_triangles, crossing_x, emit_mesh, triangle_count
from trichart.mesh import ArrayMeshSink
from trichart.scales import ViewTransform


POS = (0, 0, 255, 255)
NEG = (255, 0, 0, 255)


def _pts(*pairs: tuple[float, float]) -> np.ndarray:
    return np.asarray(pairs, dtype=np.float64).reshape(-1, 2)


def _transform(points: np.ndarray, *, scale: float = 1.0, ratio: float = 1.0, half: float = 100.0) -> ViewTransform:
    return ViewTransform(first_x=float(points[0, 0]), horizontal_scale=scale, vertical_ratio=ratio, half_height=half)


def _build(points: np.ndarray, *, pillar: bool = False, **kwargs: float) -> list[Triangle]:
    return build_triangles(
        points,
        _transform(points, **kwargs),
        pillar_mode=pillar,
        positive_color=POS,
        negative_color=NEG,
    )


def _bounds(tris: list[Triangle]) -> tuple[float, float, float, float]:
    xs = [p[0] for t in tris for p in (t.p1, t.p2, t.p3)]
    ys = [p[1] for t in tris for p in (t.p1, t.p2, t.p3)]
    return (min(xs), max(xs), min(ys), max(ys))


class TriangleCountTests(unittest.TestCase):
    def test_counts_per_mode(self) -> None:
        for n in (0, 1):
            self.assertEqual(triangle_count(n, False), 0)
            self.assertEqual(triangle_count(n, True), 0)
        for n in (2, 3, 10):
            self.assertEqual(triangle_count(n, False), (n - 1) * 2)
            self.assertEqual(triangle_count(n, True), n * 2)

    def test_builder_emits_declared_count(self) -> None:
        rng = np.random.default_rng(7)
        for n in range(0, 12):
            xs = np.cumsum(rng.uniform(0.0, 5.0, size=n))
            ys = rng.uniform(-50.0, 50.0, size=n)
            points = np.stack([xs, ys], axis=1) if n else _pts()
            for pillar in (False, True):
                tris = _build(points, pillar=pillar) if n else []
                self.assertEqual(len(tris), triangle_count(n, pillar))


class LineModeTests(unittest.TestCase):
    def test_same_sign_segment_is_one_colour_quad(self) -> None:
        tris = _build(_pts((0, 10), (1, 20)))
        self.assertEqual(len(tris), 2)
        self.assertTrue(all(t.tint == POS for t in tris))
        self.assertEqual(_bounds(tris), (0.0, 1.0, 80.0, 100.0))

    def test_negative_segment_uses_negative_fill(self) -> None:
        tris = _build(_pts((0, -10), (1, -20)))
        self.assertTrue(all(t.tint == NEG for t in tris))
        self.assertEqual(_bounds(tris), (0.0, 1.0, 100.0, 120.0))

    def test_zero_leading_sample_takes_negative_fill(self) -> None:
        tris = _build(_pts((0, 0), (1, 5)))
        self.assertTrue(all(t.tint == NEG for t in tris))

    def test_sign_change_splits_at_baseline_crossing(self) -> None:
        tris = _build(_pts((0, 10), (2, -10)))
        self.assertEqual(len(tris), 2)
        first, second = tris
        self.assertEqual(first.tint, POS)
        self.assertEqual(second.tint, NEG)
        self.assertEqual(set((first.p1, first.p2, first.p3)), {(0.0, 90.0), (0.0, 100.0), (1.0, 100.0)})
        self.assertEqual(set((second.p1, second.p2, second.p3)), {(2.0, 110.0), (2.0, 100.0), (1.0, 100.0)})

    def test_crossing_lies_strictly_inside_segment(self) -> None:
        rng = np.random.default_rng(11)
        for _ in range(200):
            x1 = float(rng.uniform(-100.0, 100.0))
            x2 = x1 + float(rng.uniform(0.01, 50.0))
            y1 = float(rng.uniform(0.01, 100.0))
            y2 = -float(rng.uniform(0.01, 100.0))
            if rng.random() < 0.5:
                y1, y2 = -y1, -y2
            x5 = crossing_x(x1, y1, x2, y2)
            self.assertGreater(x5, x1)
            self.assertLess(x5, x2)

    def test_vertices_are_relative_to_first_sample(self) -> None:
        base = _pts((0, 10), (3, -4), (5, 8))
        shifted = base + np.asarray([1000.0, 0.0])
        self.assertEqual(_build(base, scale=3.0), _build(shifted, scale=3.0))
        self.assertEqual(_bounds(_build(shifted, scale=3.0))[0], 0.0)


class PillarModeTests(unittest.TestCase):
    def test_step_pillar_and_trailing_pillar(self) -> None:
        ratio = 2.0
        tris = _build(_pts((0, 10), (5, -20)), pillar=True, ratio=ratio)
        self.assertEqual(len(tris), 4)

        first = tris[:2]
        self.assertTrue(all(t.tint == POS for t in first))
        self.assertEqual(_bounds(first), (0.0, 5.0, 100.0 - 10 * ratio, 100.0))

        trailing = tris[2:]
        self.assertTrue(all(t.tint == NEG for t in trailing))
        self.assertEqual(_bounds(trailing), (5.0, 15.0, 100.0, 100.0 + 20 * ratio))

    def test_pillar_holds_value_until_next_sample(self) -> None:
        tris = _build(_pts((0, 10), (4, 30), (6, 5)), pillar=True)
        self.assertEqual(_bounds(tris[0:2]), (0.0, 4.0, 90.0, 100.0))
        self.assertEqual(_bounds(tris[2:4]), (4.0, 6.0, 70.0, 100.0))

    def test_trailing_pillar_width_follows_horizontal_scale(self) -> None:
        tris = _build(_pts((0, 10), (5, 10)), pillar=True, scale=3.0)
        self.assertEqual(_bounds(tris[2:]), (15.0, 45.0, 90.0, 100.0))


class WindingTests(unittest.TestCase):
    def test_every_triangle_faces_forward(self) -> None:
        rng = np.random.default_rng(3)
        for _ in range(20):
            n = int(rng.integers(2, 30))
            xs = np.cumsum(rng.uniform(0.0, 10.0, size=n))
            ys = rng.uniform(-100.0, 100.0, size=n)
            ys[rng.random(n) < 0.1] = 0.0
            points = np.stack([xs, ys], axis=1)
            for pillar in (False, True):
                for tri in _build(points, pillar=pillar, scale=float(rng.uniform(0.1, 5.0))):
                    self.assertGreaterEqual(tri.winding_z(), 0.0)


class EmitMeshTests(unittest.TestCase):
    def test_allocates_exact_size_once(self) -> None:
        points = _pts((0, 10), (1, -10), (2, 5))
        tris = _build(points)
        sink = ArrayMeshSink()
        written = emit_mesh(sink, len(tris), tris)

        self.assertEqual(written, 4)
        self.assertEqual(sink.allocations, [(12, 12)])
        self.assertTrue(sink.complete)
        mesh = sink.mesh
        assert mesh is not None
        np.testing.assert_array_equal(mesh.indices, np.arange(12))
        self.assertEqual(mesh.triangle_count, 4)
        np.testing.assert_allclose(mesh.triangle_positions()[1], np.asarray([tris[1].p1, tris[1].p2, tris[1].p3]), rtol=1e-6)
        self.assertEqual(tuple(int(c) for c in mesh.tints[0]), tris[0].tint)

    def test_zero_triangles_does_not_allocate(self) -> None:
        sink = ArrayMeshSink()
        self.assertEqual(emit_mesh(sink, 0, []), 0)
        self.assertEqual(sink.allocations, [])

    def test_short_stream_is_reported(self) -> None:
        tris = _build(_pts((0, 1), (1, 2)))
        with self.assertRaises(MeshWriteError):
            emit_mesh(ArrayMeshSink(), 3, tris)

    def test_long_stream_is_reported(self) -> None:
        tris = _build(_pts((0, 1), (1, 2), (2, 3)))
        with self.assertRaises(MeshWriteError):
            emit_mesh(ArrayMeshSink(), 1, tris)


if __name__ == "__main__":
    unittest.main()
