from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol

import numpy as np

from trichart.errors import MeshAllocationError, MeshWriteError


RGBA = tuple[int, int, int, int]


@dataclass(frozen=True)
class Vertex:
    x: float
    y: float
    tint: RGBA


class VertexWriter(Protocol):
    def set_next_vertex(self, vertex: Vertex) -> None:
        ...


class IndexWriter(Protocol):
    def set_next_index(self, index: int) -> None:
        ...


class MeshSink(Protocol):
    """Host capability that hands out exact-size vertex/index buffers for one rebuild."""

    def allocate(self, vertex_count: int, index_count: int) -> tuple[VertexWriter, IndexWriter]:
        ...


@dataclass(frozen=True)
class MeshData:
    positions: np.ndarray
    tints: np.ndarray
    indices: np.ndarray

    @property
    def vertex_count(self) -> int:
        return int(self.positions.shape[0])

    @property
    def triangle_count(self) -> int:
        return int(self.indices.shape[0]) // 3

    def triangle_positions(self) -> np.ndarray:
        """(T, 3, 2) positions resolved through the index buffer."""
        return self.positions[self.indices].reshape(-1, 3, 2)


@dataclass
class _ArrayVertexWriter:
    positions: np.ndarray
    tints: np.ndarray
    cursor: int = 0

    def set_next_vertex(self, vertex: Vertex) -> None:
        if self.cursor >= self.positions.shape[0]:
            raise MeshWriteError(f"vertex buffer full ({self.positions.shape[0]} vertices)")
        self.positions[self.cursor] = (vertex.x, vertex.y)
        self.tints[self.cursor] = vertex.tint
        self.cursor += 1


@dataclass
class _ArrayIndexWriter:
    indices: np.ndarray
    cursor: int = 0

    def set_next_index(self, index: int) -> None:
        if self.cursor >= self.indices.shape[0]:
            raise MeshWriteError(f"index buffer full ({self.indices.shape[0]} indices)")
        self.indices[self.cursor] = index
        self.cursor += 1


@dataclass
class ArrayMeshSink:
    """numpy-backed sink for headless hosts and previews.

    Each ``allocate`` replaces the previous buffers; ``mesh`` exposes the last one.
    """

    max_vertices: int | None = None
    allocations: list[tuple[int, int]] = field(default_factory=list)
    _vertices: _ArrayVertexWriter | None = field(default=None, init=False, repr=False)
    _indices: _ArrayIndexWriter | None = field(default=None, init=False, repr=False)

    def allocate(self, vertex_count: int, index_count: int) -> tuple[_ArrayVertexWriter, _ArrayIndexWriter]:
        if vertex_count < 0 or index_count < 0:
            raise MeshAllocationError("vertex/index counts must be >= 0")
        if self.max_vertices is not None and vertex_count > self.max_vertices:
            raise MeshAllocationError(f"requested {vertex_count} vertices, limit is {self.max_vertices}")
        self.allocations.append((vertex_count, index_count))
        self._vertices = _ArrayVertexWriter(
            positions=np.zeros((vertex_count, 2), dtype=np.float32),
            tints=np.zeros((vertex_count, 4), dtype=np.uint8),
        )
        self._indices = _ArrayIndexWriter(indices=np.zeros(index_count, dtype=np.uint32))
        return self._vertices, self._indices

    @property
    def mesh(self) -> MeshData | None:
        if self._vertices is None or self._indices is None:
            return None
        return MeshData(
            positions=self._vertices.positions,
            tints=self._vertices.tints,
            indices=self._indices.indices,
        )

    @property
    def complete(self) -> bool:
        if self._vertices is None or self._indices is None:
            return False
        return (
            self._vertices.cursor == self._vertices.positions.shape[0]
            and self._indices.cursor == self._indices.indices.shape[0]
        )
