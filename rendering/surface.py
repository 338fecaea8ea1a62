"""
Cairo-backed drawing surface used by the growth engine and composer.

The engine only ever writes to the surface: strokes, arcs and fills.
Reading pixels back (to_numpy) is for capturing frames.
"""

import cairo
import numpy as np
from typing import Tuple

from config.color import Color, ColorLike


class CairoSurface:
    def __init__(self, width: int, height: int,
                 background: ColorLike = (0.0, 0.0, 0.0, 1.0),
                 antialiasing: bool = True):
        self.background = Color.parse(background)
        self.antialiasing = antialiasing
        self.width = 0
        self.height = 0
        self.surface, self.ctx = self._create_surface(width, height)

    def _create_surface(self, width: int, height: int) -> Tuple[cairo.ImageSurface, cairo.Context]:
        if width <= 0 or height <= 0:
            raise ValueError(f"surface size must be positive, got {width}x{height}")
        self.width = int(width)
        self.height = int(height)

        surface = cairo.ImageSurface(cairo.FORMAT_ARGB32, self.width, self.height)
        ctx = cairo.Context(surface)

        if self.antialiasing:
            ctx.set_antialias(cairo.ANTIALIAS_BEST)

        ctx.set_source_rgba(*self.background.to_rgba())
        ctx.paint()

        return surface, ctx

    @property
    def size(self) -> Tuple[int, int]:
        return self.width, self.height

    def resize(self, width: int, height: int):
        """Replace the backing surface; existing pixels are discarded."""
        self.surface, self.ctx = self._create_surface(width, height)

    def draw_line(self, x1: float, y1: float, x2: float, y2: float,
                  width: float, color: Color):
        ctx = self.ctx
        ctx.set_line_width(max(width, 0.0))
        ctx.set_source_rgba(*color.to_rgba())
        ctx.move_to(x1, y1)
        ctx.line_to(x2, y2)
        ctx.stroke()

    def draw_circle(self, x: float, y: float, radius: float, color: Color,
                    line_width: float = 1.0):
        ctx = self.ctx
        ctx.set_line_width(line_width)
        ctx.set_source_rgba(*color.to_rgba())
        ctx.new_path()
        ctx.arc(x, y, max(radius, 0.0), 0, 2 * np.pi)
        ctx.close_path()
        ctx.stroke()

    def fill_rect(self, x: float, y: float, width: float, height: float, color: Color):
        ctx = self.ctx
        ctx.set_source_rgba(*color.to_rgba())
        ctx.rectangle(x, y, width, height)
        ctx.fill()

    def clear(self, color: ColorLike = None):
        """Repaint every pixel with color, or the surface background."""
        fill = self.background if color is None else Color.parse(color)
        ctx = self.ctx
        ctx.save()
        ctx.set_operator(cairo.OPERATOR_SOURCE)
        ctx.set_source_rgba(*fill.to_rgba())
        ctx.paint()
        ctx.restore()

    def to_numpy(self) -> np.ndarray:
        """Current pixels as an (H, W, 4) uint8 RGBA array."""
        self.surface.flush()
        buf = self.surface.get_data()
        stride = self.surface.get_stride()
        arr = np.ndarray(
            shape=(self.height, stride // 4, 4),
            dtype=np.uint8,
            buffer=buf
        )[:, :self.width]
        arr_copy = arr.copy()
        arr_rgba = np.zeros_like(arr_copy)
        arr_rgba[:, :, 0] = arr_copy[:, :, 2]  # R
        arr_rgba[:, :, 1] = arr_copy[:, :, 1]  # G
        arr_rgba[:, :, 2] = arr_copy[:, :, 0]  # B
        arr_rgba[:, :, 3] = arr_copy[:, :, 3]  # A
        return arr_rgba

    def write_png(self, path: str):
        self.surface.flush()
        self.surface.write_to_png(str(path))

    def __repr__(self) -> str:
        return f"CairoSurface({self.width}x{self.height})"
