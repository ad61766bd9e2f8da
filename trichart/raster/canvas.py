from __future__ import annotations

import numpy as np

from trichart.mesh import RGBA


def new_canvas(width: int, height: int, color: RGBA = (0, 0, 0, 0)) -> np.ndarray:
    if width < 0 or height < 0:
        raise ValueError("canvas width/height must be >= 0")
    canvas = np.zeros((height, width, 4), dtype=np.uint8)
    canvas[:, :] = color
    return canvas


def blend_region(dst: np.ndarray, y0: int, x0: int, coverage: np.ndarray, color: RGBA) -> None:
    """Source-over blend ``color`` into ``dst`` at (x0, y0) weighted by a 0..1 coverage mask."""
    h, w = coverage.shape
    if h == 0 or w == 0:
        return
    patch = dst[y0 : y0 + h, x0 : x0 + w]
    src_alpha = (color[3] / 255.0) * coverage.astype(np.float32)
    if not np.any(src_alpha > 0):
        return
    dst_rgb = patch[:, :, :3].astype(np.float32)
    dst_alpha = patch[:, :, 3].astype(np.float32) / 255.0

    src_rgb = np.asarray(color[:3], dtype=np.float32).reshape(1, 1, 3)
    out_alpha = src_alpha + dst_alpha * (1.0 - src_alpha)
    out_rgb_num = src_rgb * src_alpha[:, :, None] + dst_rgb * dst_alpha[:, :, None] * (1.0 - src_alpha[:, :, None])
    safe_alpha = np.where(out_alpha > 1e-6, out_alpha, 1.0)
    out_rgb = out_rgb_num / safe_alpha[:, :, None]

    patch[:, :, :3] = np.clip(out_rgb, 0, 255).astype(np.uint8)
    patch[:, :, 3] = np.clip(out_alpha * 255.0, 0, 255).astype(np.uint8)
