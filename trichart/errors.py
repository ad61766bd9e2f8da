from __future__ import annotations


class ChartError(Exception):
    """Base class for chart engine errors."""


class InvalidCapacityError(ChartError, ValueError):
    pass


class OutOfOrderInputError(ChartError, ValueError):
    """Raised when a sample's x precedes the last stored x. The buffer is left unchanged."""

    def __init__(self, x: float, last_x: float) -> None:
        super().__init__(f"x must be >= previous x: got {x!r} after {last_x!r}")
        self.x = x
        self.last_x = last_x


class InvalidPointError(ChartError, ValueError):
    pass


class ChartConfigError(ChartError, ValueError):
    pass


class MeshAllocationError(ChartError, RuntimeError):
    """Raised by a mesh sink that cannot provide buffers for a rebuild."""


class MeshWriteError(ChartError, RuntimeError):
    pass
