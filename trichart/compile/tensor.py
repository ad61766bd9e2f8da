from __future__ import annotations

from dataclasses import dataclass

import numpy as np
import torch

from trichart.mesh import MeshData


@dataclass(frozen=True)
class MeshTensors:
    positions: torch.Tensor
    tints: torch.Tensor
    indices: torch.Tensor


def compile_mesh_tensors(mesh: MeshData) -> MeshTensors:
    """Copy a mesh into torch tensors: float32 (V, 2) positions, uint8 (V, 4) tints, int64 (I,) indices."""
    if mesh.positions.ndim != 2 or mesh.positions.shape[1] != 2:
        raise ValueError("mesh positions must have shape (V, 2)")
    if mesh.tints.shape != (mesh.positions.shape[0], 4):
        raise ValueError("mesh tints must have shape (V, 4)")
    if mesh.indices.ndim != 1 or mesh.indices.shape[0] % 3 != 0:
        raise ValueError("mesh indices must be a flat multiple of 3")
    if mesh.indices.size and int(mesh.indices.max()) >= mesh.positions.shape[0]:
        raise ValueError("mesh index out of range")

    positions = torch.from_numpy(np.ascontiguousarray(mesh.positions, dtype=np.float32))
    tints = torch.from_numpy(np.ascontiguousarray(mesh.tints, dtype=np.uint8))
    indices = torch.from_numpy(mesh.indices.astype(np.int64))
    return MeshTensors(positions=positions, tints=tints, indices=indices)


def compile_frame_tensor(frame_rgba: np.ndarray) -> torch.Tensor:
    if frame_rgba.dtype != np.uint8:
        raise ValueError("frame_rgba must be uint8")
    if frame_rgba.ndim != 3 or frame_rgba.shape[2] != 4:
        raise ValueError("frame_rgba must have shape (H, W, 4)")
    return torch.from_numpy(np.ascontiguousarray(frame_rgba))
