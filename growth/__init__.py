"""
Animated branching trees.

Branches grow one segment per step on a virtual-clock task queue, fork at
random into thinner children, and die once their width decays below a
pixel, while a periodic fade pass dims older strokes.
"""

from .branch import BranchState
from .scheduler import Scheduler, ScheduledTask
from .random_source import RandomSource, NumpyRandom, SequenceRandom
from .engine import GrowthEngine, EngineStats, BRANCH_TAG
from .generator import TreeGenerator, initialize, SPAWN_TAG, FADE_TAG

__all__ = [
    'BranchState',
    'Scheduler',
    'ScheduledTask',
    'RandomSource',
    'NumpyRandom',
    'SequenceRandom',
    'GrowthEngine',
    'EngineStats',
    'BRANCH_TAG',
    'TreeGenerator',
    'initialize',
    'SPAWN_TAG',
    'FADE_TAG',
]
