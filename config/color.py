"""
Structured RGBA colour used throughout the growth engine.

Colours stay as float channels internally and are only turned into
strings or Cairo source values at the surface boundary.
"""

from dataclasses import dataclass, replace
from typing import Sequence, Tuple, Union

import matplotlib.colors as mcolors


ColorLike = Union['Color', str, Sequence[float]]


@dataclass(frozen=True)
class Color:
    r: float
    g: float
    b: float
    a: float = 1.0

    def __post_init__(self):
        for name in ('r', 'g', 'b', 'a'):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"channel {name}={value} outside [0, 1]")

    @classmethod
    def parse(cls, value: ColorLike) -> 'Color':
        """
        Build a colour from a matplotlib colour spec ('white', '#fff',
        '#ff000066') or a 3/4-tuple of floats in [0, 1].
        """
        if isinstance(value, Color):
            return value
        if isinstance(value, str):
            return cls(*mcolors.to_rgba(value))
        channels = tuple(float(c) for c in value)
        if len(channels) not in (3, 4):
            raise ValueError(f"expected 3 or 4 channels, got {len(channels)}")
        return cls(*channels)

    @classmethod
    def from_int(cls, value: int) -> 'Color':
        """Opaque colour from a packed 0xRRGGBB integer."""
        if not 0 <= value <= 0xffffff:
            raise ValueError(f"packed colour {value:#x} out of range")
        return cls(
            ((value >> 16) & 0xff) / 255.0,
            ((value >> 8) & 0xff) / 255.0,
            (value & 0xff) / 255.0,
        )

    def with_alpha(self, alpha: float) -> 'Color':
        return replace(self, a=alpha)

    def to_rgba(self) -> Tuple[float, float, float, float]:
        return (self.r, self.g, self.b, self.a)

    def to_hex(self, keep_alpha: bool = False) -> str:
        return mcolors.to_hex(self.to_rgba(), keep_alpha=keep_alpha)

    def __str__(self) -> str:
        return self.to_hex(keep_alpha=self.a < 1.0)


def random_color(rng) -> Color:
    """Random opaque colour drawn from the packed 24-bit range."""
    return Color.from_int(round(0xffffff * rng.random()))
