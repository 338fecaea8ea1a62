"""
BranchState - immutable snapshot of one growing branch between steps.
"""

from dataclasses import dataclass, replace

from config.color import Color


@dataclass(frozen=True)
class BranchState:
    __slots__ = ('x', 'y', 'dx', 'dy', 'width', 'growth_rate', 'lifetime', 'color')

    x: float
    y: float
    dx: float
    dy: float
    width: float
    growth_rate: float
    lifetime: int
    color: Color

    def effective_width(self, loss: float) -> float:
        return self.width - self.lifetime * loss

    @property
    def position(self) -> tuple:
        return (self.x, self.y)

    @property
    def next_position(self) -> tuple:
        return (self.x + self.dx, self.y + self.dy)

    def evolve(self, **changes) -> 'BranchState':
        return replace(self, **changes)

    def __repr__(self) -> str:
        return (f"BranchState(({self.x:.2f}, {self.y:.2f}) "
                f"v=({self.dx:.2f}, {self.dy:.2f}) w={self.width:.2f} "
                f"rate={self.growth_rate:.1f} life={self.lifetime})")
