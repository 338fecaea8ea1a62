"""
Growth engine - the recursive, time-stepped branch algorithm.

Each branch is a BranchState snapshot carried by one pending scheduler
task. A step draws one segment, bends the heading a little, maybe forks
a child branch, and re-enqueues itself until its width has decayed below
one pixel. No registry of branches exists; the scheduler's pending count
for BRANCH_TAG is the number of live branches.
"""

import math
from dataclasses import dataclass, asdict
from typing import Optional

from config.color import Color, ColorLike
from .branch import BranchState
from .profiling import profile


BRANCH_TAG = 'branch'

# Spawn trial: lifetime must exceed LIFETIME_PER_WIDTH * width + jitter
LIFETIME_PER_WIDTH = 5.0
LIFETIME_JITTER = 100.0
CHILD_SPEED = 2.0
CHILD_RATE_JITTER = 100.0
MIN_VISIBLE_WIDTH = 1.0


@dataclass
class EngineStats:
    roots: int = 0
    children: int = 0
    steps: int = 0
    segments: int = 0
    terminated: int = 0
    rejected: int = 0

    def as_dict(self) -> dict:
        return asdict(self)


class GrowthEngine:
    """
    Advances branches on a shared scheduler and draws them on a surface.

    Args:
        config: TreeConfig (read on every step, never modified)
        surface: anything with draw_line(x1, y1, x2, y2, width, color) and a height
        scheduler: Scheduler the branch steps are queued on
        rng: random source with random() -> float in [0, 1)
        composer: optional Composer, used for branch-point markers
    """

    def __init__(self, config, surface, scheduler, rng, composer=None):
        self.config = config
        self.surface = surface
        self.scheduler = scheduler
        self.rng = rng
        self.composer = composer
        self.stats = EngineStats()
        self._warned_cap = False

    @property
    def live_branches(self) -> int:
        return self.scheduler.pending_for(BRANCH_TAG)

    def _delay(self, growth_rate: float) -> float:
        return growth_rate * self.config.step_delay_factor

    def _has_capacity(self) -> bool:
        if self.live_branches < self.config.max_live_branches:
            return True
        self.stats.rejected += 1
        if not self._warned_cap:
            self._warned_cap = True
            print(f"Warning: {self.live_branches} live branches reached the "
                  f"max_live_branches cap; new branches are skipped")
        return False

    def spawn_root(self, x: float, y: float, dx: float, dy: float,
                   width: float, growth_rate: float, color: ColorLike):
        """Start a new tree; its first step runs on the next scheduler pass."""
        if not self._has_capacity():
            return
        state = BranchState(float(x), float(y), float(dx), float(dy),
                            float(width), float(growth_rate), 0, Color.parse(color))
        self.stats.roots += 1
        self.scheduler.call_later(0, self.step, state, tag=BRANCH_TAG)

    @profile
    def step(self, state: BranchState) -> Optional[BranchState]:
        """
        Evolve one branch by a single step.

        Returns the snapshot queued for the next step, or None when the
        branch has become too thin and stops.
        """
        cfg = self.config
        rand = self.rng.random
        lifetime = state.lifetime
        width = state.width
        effective = state.effective_width(cfg.width_loss_per_cycle)

        x, y = state.next_position
        self.surface.draw_line(state.x, state.y, x, y, effective, state.color)
        self.stats.steps += 1
        self.stats.segments += 1

        dx = state.dx + math.sin(rand() + lifetime) * cfg.speed
        dy = state.dy + math.cos(rand() + lifetime) * cfg.speed

        # Thin branches creeping along the bottom edge get thinner
        height = self.surface.height
        if effective < cfg.clutter_width and y > height - rand() * cfg.clutter_band * height:
            width *= cfg.clutter_shrink

        if (lifetime > LIFETIME_PER_WIDTH * width + rand() * LIFETIME_JITTER
                and rand() > cfg.new_branch_chance):
            if self._spawn_child(state, x, y, width):
                width *= cfg.main_width_retention

        if width - lifetime * cfg.width_loss_per_cycle < MIN_VISIBLE_WIDTH:
            self.stats.terminated += 1
            return None

        following = BranchState(x, y, dx, dy, width, state.growth_rate, lifetime + 1, state.color)
        self.scheduler.call_later(self._delay(state.growth_rate), self.step, following,
                                  tag=BRANCH_TAG)
        return following

    def _spawn_child(self, parent: BranchState, x: float, y: float, width: float) -> bool:
        """Queue the birth of a child branch at (x, y). False if over capacity."""
        if not self._has_capacity():
            return False

        cfg = self.config
        rand = self.rng.random
        lifetime = parent.lifetime

        delay = self._delay(2 * parent.growth_rate * rand()) + cfg.min_sleep_ms
        child = BranchState(
            x=x,
            y=y,
            dx=CHILD_SPEED * math.sin(rand() + lifetime),
            dy=CHILD_SPEED * math.cos(rand() + lifetime),
            width=(width - lifetime * cfg.width_loss_per_cycle) * cfg.branch_width_retention,
            growth_rate=parent.growth_rate + rand() * CHILD_RATE_JITTER,
            lifetime=0,
            color=parent.color,
        )
        self.stats.children += 1
        self.scheduler.call_later(delay, self._birth, child, width, tag=BRANCH_TAG)
        return True

    def _birth(self, child: BranchState, marker_radius: float):
        if self.config.indicate_new_branch and self.composer is not None:
            self.composer.draw_spawn_marker(child.x, child.y, marker_radius)
        self.step(child)

    def cancel_all(self) -> int:
        """Drop every pending branch step and birth."""
        return self.scheduler.cancel_tag(BRANCH_TAG)
