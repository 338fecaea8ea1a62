import pytest

from config import TreeConfig
from growth import GrowthEngine, Scheduler, SequenceRandom


class RecordingSurface:
    """Stands in for CairoSurface and remembers every drawing call."""

    def __init__(self, width=800, height=600):
        self.width = width
        self.height = height
        self.lines = []
        self.circles = []
        self.fills = []
        self.clears = []

    def draw_line(self, x1, y1, x2, y2, width, color):
        self.lines.append(((x1, y1), (x2, y2), width, color))

    def draw_circle(self, x, y, radius, color, line_width=1.0):
        self.circles.append(((x, y), radius, color, line_width))

    def fill_rect(self, x, y, width, height, color):
        self.fills.append(((x, y, width, height), color))

    def clear(self, color=None):
        self.clears.append(color)

    def resize(self, width, height):
        self.width = width
        self.height = height


@pytest.fixture
def surface():
    return RecordingSurface()


@pytest.fixture
def scheduler():
    return Scheduler()


@pytest.fixture
def make_engine(surface, scheduler):
    """Engine factory: random draws are replayed from `draws`."""
    def factory(draws=(0.5,), composer=None, **options):
        config = TreeConfig.from_options(options)
        return GrowthEngine(config, surface, scheduler, SequenceRandom(list(draws)), composer)
    return factory
