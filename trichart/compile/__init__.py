from .tensor import MeshTensors, compile_frame_tensor, compile_mesh_tensors

__all__ = ["MeshTensors", "compile_frame_tensor", "compile_mesh_tensors"]
