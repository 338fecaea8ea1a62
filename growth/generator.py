"""
TreeGenerator - owns the surface, scheduler, engine and composer, and runs
the two periodic schedules: new root trees and the fade pass.
"""

import math
from typing import Callable, Dict, Optional

from config.color import Color, random_color
from config.tree_config import TreeConfig
from rendering.composer import Composer
from rendering.surface import CairoSurface
from .engine import GrowthEngine
from .profiling import profiler
from .random_source import NumpyRandom
from .scheduler import Scheduler, ScheduledTask


SPAWN_TAG = 'spawn'
FADE_TAG = 'fade'

INITIAL_ROOT_SPEED = 3.0


def frame_count(duration_ms: float, frame_interval_ms: float) -> int:
    """Frames needed to cover duration_ms, the last one possibly shorter."""
    ratio = duration_ms / frame_interval_ms
    nearest = round(ratio)
    if math.isclose(ratio, nearest, rel_tol=1e-9, abs_tol=1e-9):
        return int(nearest)
    return math.ceil(ratio)


class TreeGenerator:
    def __init__(self, surface, config: TreeConfig,
                 scheduler: Optional[Scheduler] = None, rng=None):
        self.config = config
        self.surface = surface
        self.scheduler = scheduler or Scheduler()
        self.rng = rng or NumpyRandom(config.random_seed)
        self.composer = Composer(surface, config)
        self.engine = GrowthEngine(config, surface, self.scheduler, self.rng, self.composer)

        self._started = False

        # Periodic schedules
        self.intervals: Dict[str, Optional[ScheduledTask]] = {
            'generation': None,
            'fading': None,
        }

        if config.profile:
            profiler.enable()

    @property
    def width(self) -> int:
        return self.surface.width

    @property
    def height(self) -> int:
        return self.surface.height

    @property
    def running(self) -> bool:
        return self._started

    @property
    def live_branches(self) -> int:
        return self.engine.live_branches

    def new_color(self) -> Color:
        if not self.config.colorful:
            return self.config.tree_color
        return random_color(self.rng)

    def spawn_random_root(self):
        """A new tree somewhere along the bottom edge."""
        rand = self.rng.random
        self.engine.spawn_root(
            rand() * self.width,
            self.height,
            0,
            -rand() * INITIAL_ROOT_SPEED,
            self.config.initial_branch_width * rand(),
            self.config.root_growth_rate,
            self.new_color(),
        )

    def start(self):
        """Plant one tree in the middle, then start spawning and fading."""
        if self.running:
            return
        self._started = True
        self.engine.spawn_root(
            self.width / 2, self.height, 0, -INITIAL_ROOT_SPEED,
            self.config.initial_branch_width, 0, self.config.tree_color
        )
        if self.config.auto_spawn:
            self.intervals['generation'] = self.scheduler.call_every(
                self.config.spawn_interval_ms, self.spawn_random_root, tag=SPAWN_TAG)
        if self.config.fade_out:
            self.intervals['fading'] = self.scheduler.call_every(
                self.config.fade_interval_ms, self.composer.fade, tag=FADE_TAG)

    def stop(self, cancel_branches: bool = False):
        """
        Stop spawning and fading. Branches already growing finish on their
        own unless cancel_branches is set.
        """
        self._started = False
        for key, task in self.intervals.items():
            self.scheduler.cancel(task)
            self.intervals[key] = None
        if cancel_branches:
            self.engine.cancel_all()

    def resize(self, width: int, height: int):
        """Resize the drawing surface. Growing branches keep their coordinates."""
        self.surface.resize(width, height)

    def clear(self):
        self.composer.clear()

    def run(self, duration_ms: float,
            callback: Optional[Callable[['TreeGenerator', float], None]] = None,
            frame_interval_ms: Optional[float] = None) -> float:
        """
        Advance the clock by duration_ms.
        Optional callback is called with (generator, now) after every frame interval.
        Returns the clock time at the end.
        """
        end = self.scheduler.now + duration_ms
        if callback is None or frame_interval_ms is None:
            self.scheduler.run_until(end)
            if callback is not None:
                callback(self, self.scheduler.now)
            return self.scheduler.now

        if frame_interval_ms <= 0:
            raise ValueError(f"frame_interval_ms must be > 0, got {frame_interval_ms}")

        start = self.scheduler.now
        frames = frame_count(duration_ms, frame_interval_ms)
        for i in range(1, frames + 1):
            target = end if i == frames else min(start + i * frame_interval_ms, end)
            self.scheduler.run_until(target)
            callback(self, self.scheduler.now)

        return self.scheduler.now

    def snapshot(self) -> dict:
        """Counters describing the current state of the animation."""
        return {
            'time_ms': self.scheduler.now,
            'live_branches': self.live_branches,
            'pending_tasks': self.scheduler.pending,
            'fades': self.composer.fades,
            **self.engine.stats.as_dict(),
        }


def initialize(surface=None, config: Optional[TreeConfig] = None, **options) -> TreeGenerator:
    """
    Build a generator for `surface` with options merged over `config`
    (or the defaults). Options may use camelCase names such as fadeAmount.
    """
    if config is None:
        config = TreeConfig.from_options(options)
    elif options:
        config = config.merged(**options)

    if surface is None:
        surface = CairoSurface(config.screen_width, config.screen_height,
                               background=config.background_color)
    elif config.fit_screen:
        surface.resize(config.screen_width, config.screen_height)

    return TreeGenerator(surface, config)
