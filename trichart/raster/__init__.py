from .canvas import blend_region, new_canvas
from .draw_text import draw_text, text_size
from .fill import fill_mesh, fill_triangle
from .preview import render_chart_rgba

__all__ = [
    "blend_region",
    "draw_text",
    "fill_mesh",
    "fill_triangle",
    "new_canvas",
    "render_chart_rgba",
    "text_size",
]
