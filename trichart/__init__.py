from trichart.chart import Chart, create
from trichart.config import ChartConfig, load_config
from trichart.errors import (
    ChartConfigError,
    ChartError,
    InvalidCapacityError,
    InvalidPointError,
    MeshAllocationError,
    MeshWriteError,
    OutOfOrderInputError,
)
from trichart.geometry import Triangle, build_triangles, triangle_count
from trichart.labels import DEFAULT_LABEL_FORMAT, LabelAnchor
from trichart.mesh import ArrayMeshSink, MeshData, MeshSink, Vertex
from trichart.points import Point, PointBuffer
from trichart.style import ChartStyle, StyleProvider

__all__ = [
    "ArrayMeshSink",
    "Chart",
    "ChartConfig",
    "ChartConfigError",
    "ChartError",
    "ChartStyle",
    "DEFAULT_LABEL_FORMAT",
    "InvalidCapacityError",
    "InvalidPointError",
    "LabelAnchor",
    "MeshAllocationError",
    "MeshData",
    "MeshSink",
    "MeshWriteError",
    "OutOfOrderInputError",
    "Point",
    "PointBuffer",
    "StyleProvider",
    "Triangle",
    "Vertex",
    "build_triangles",
    "create",
    "load_config",
    "triangle_count",
]
