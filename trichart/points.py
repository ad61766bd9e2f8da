from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
import math
import operator

import numpy as np

from trichart.errors import InvalidCapacityError, InvalidPointError, OutOfOrderInputError


@dataclass(frozen=True)
class Point:
    x: float
    y: float


@dataclass(eq=False)
class PointBuffer:
    """Fixed-capacity sample store ordered by insertion; the oldest sample is dropped on overflow.

    Backed by a ring of (capacity, 2) float64 slots so eviction is O(1).
    """

    capacity: int
    _slots: np.ndarray = field(init=False, repr=False)
    _head: int = field(default=0, init=False, repr=False)
    _count: int = field(default=0, init=False, repr=False)

    def __post_init__(self) -> None:
        try:
            capacity = operator.index(self.capacity)
        except TypeError as exc:
            raise InvalidCapacityError(f"capacity must be an integer: {self.capacity!r}") from exc
        if capacity <= 0:
            raise InvalidCapacityError(f"capacity must be > 0: {capacity}")
        self.capacity = capacity
        self._slots = np.zeros((capacity, 2), dtype=np.float64)

    def __len__(self) -> int:
        return self._count

    def __iter__(self) -> Iterator[Point]:
        for x, y in self.as_array().tolist():
            yield Point(x, y)

    @property
    def count(self) -> int:
        return self._count

    @property
    def is_full(self) -> bool:
        return self._count == self.capacity

    def add(self, x: float, y: float) -> None:
        x = float(x)
        y = float(y)
        if not (math.isfinite(x) and math.isfinite(y)):
            raise InvalidPointError(f"point must be finite: ({x!r}, {y!r})")
        if self._count > 0:
            last_x = float(self._slots[self._slot(self._count - 1), 0])
            if x < last_x:
                raise OutOfOrderInputError(x, last_x)

        if self._count == self.capacity:
            self._head = (self._head + 1) % self.capacity
        else:
            self._count += 1
        self._slots[self._slot(self._count - 1)] = (x, y)

    def clear(self) -> None:
        self._head = 0
        self._count = 0
        self._slots[:] = 0.0

    def first(self) -> Point | None:
        if self._count == 0:
            return None
        x, y = self._slots[self._head].tolist()
        return Point(x, y)

    def last(self) -> Point | None:
        if self._count == 0:
            return None
        x, y = self._slots[self._slot(self._count - 1)].tolist()
        return Point(x, y)

    def as_array(self) -> np.ndarray:
        """Ordered (count, 2) copy of the stored samples, oldest first. The copy is read-only."""
        order = (self._head + np.arange(self._count)) % self.capacity
        out = self._slots[order]
        out.setflags(write=False)
        return out

    def _slot(self, index: int) -> int:
        return (self._head + index) % self.capacity
