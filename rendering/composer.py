"""
Composer - the periodic fade pass and the branch-point markers.
"""

from config.color import Color


class Composer:
    def __init__(self, surface, config):
        self.surface = surface
        self.config = config
        self.fades = 0

    @property
    def fade_color(self) -> Color:
        return self.config.background_color.with_alpha(self.config.fade_amount)

    def fade(self):
        """Dim everything drawn so far by one translucent background fill."""
        self.surface.fill_rect(0, 0, self.surface.width, self.surface.height, self.fade_color)
        self.fades += 1

    def draw_spawn_marker(self, x: float, y: float, radius: float, color: Color = None):
        self.surface.draw_circle(x, y, radius, color or self.config.marker_color, line_width=1.0)

    def clear(self):
        self.surface.clear(self.config.background_color)
