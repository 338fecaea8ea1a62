"""
Configuration for the branching tree generator.

Options can be given with their camelCase names (widthLossPerCycle, ...)
or as the snake_case field names; both are merged over the defaults.
"""

from dataclasses import dataclass, fields, asdict
from typing import Any, Dict, Optional

from .color import Color


class ConfigError(ValueError):
    pass


def _require(cond: bool, msg: str) -> None:
    if not cond:
        raise ConfigError(msg)


# camelCase option name -> TreeConfig field
OPTION_NAMES = {
    'widthLossPerCycle': 'width_loss_per_cycle',
    'minSleepMs': 'min_sleep_ms',
    'branchWidthRetention': 'branch_width_retention',
    'mainWidthRetention': 'main_width_retention',
    'speed': 'speed',
    'newBranchChance': 'new_branch_chance',
    'colorful': 'colorful',
    'fastMode': 'fast_mode',
    'fadeOut': 'fade_out',
    'fadeAmount': 'fade_amount',
    'autoSpawn': 'auto_spawn',
    'spawnIntervalMs': 'spawn_interval_ms',
    'fadeIntervalMs': 'fade_interval_ms',
    'initialBranchWidth': 'initial_branch_width',
    'indicateNewBranch': 'indicate_new_branch',
    'fitScreen': 'fit_screen',
    'treeColor': 'tree_color',
    'backgroundColor': 'background_color',
    'markerColor': 'marker_color',
    'rootGrowthRate': 'root_growth_rate',
    'maxLiveBranches': 'max_live_branches',
    'clutterWidth': 'clutter_width',
    'clutterBand': 'clutter_band',
    'clutterShrink': 'clutter_shrink',
    'screenWidth': 'screen_width',
    'screenHeight': 'screen_height',
    'randomSeed': 'random_seed',
    'profile': 'profile',
}

_COLOR_FIELDS = ('tree_color', 'background_color', 'marker_color')


@dataclass(frozen=True)
class TreeConfig:
    # Growth
    width_loss_per_cycle: float = 0.03   # width lost every step
    min_sleep_ms: float = 10.0           # floor on child spawn delay
    branch_width_retention: float = 0.8  # child width = parent effective width * this
    main_width_retention: float = 0.8    # parent width kept after branching
    speed: float = 0.3                   # direction perturbation per step
    new_branch_chance: float = 0.8       # higher = fewer branches
    fast_mode: bool = False

    # Roots
    colorful: bool = False
    auto_spawn: bool = True
    spawn_interval_ms: float = 250.0
    initial_branch_width: float = 10.0
    root_growth_rate: float = 30.0
    max_live_branches: int = 5000

    # Anti-clutter near the bottom edge
    clutter_width: float = 6.0
    clutter_band: float = 0.3
    clutter_shrink: float = 0.8

    # Fading
    fade_out: bool = True
    fade_amount: float = 0.05
    fade_interval_ms: float = 250.0

    # Appearance
    indicate_new_branch: bool = False
    tree_color: Color = Color(1.0, 1.0, 1.0, 1.0)
    background_color: Color = Color(0.0, 0.0, 0.0, 1.0)
    marker_color: Color = Color(1.0, 0.0, 0.0, 0.4)

    # Surface
    fit_screen: bool = False
    screen_width: int = 800
    screen_height: int = 600

    random_seed: Optional[int] = None
    profile: bool = False

    def __post_init__(self):
        for name in _COLOR_FIELDS:
            value = getattr(self, name)
            try:
                object.__setattr__(self, name, Color.parse(value))
            except (ValueError, TypeError) as e:
                raise ConfigError(f"{name}: invalid colour {value!r} ({e})") from e
        self.validate()

    def validate(self):
        for f in fields(self):
            value = getattr(self, f.name)
            if f.type is bool:
                _require(isinstance(value, bool), f"{f.name} must be a boolean")
            elif f.type in (float, int):
                _require(isinstance(value, (int, float)) and not isinstance(value, bool),
                         f"{f.name} must be a number")

        _require(self.width_loss_per_cycle > 0, "width_loss_per_cycle must be > 0")
        _require(self.min_sleep_ms >= 0, "min_sleep_ms must be >= 0")
        _require(0 < self.branch_width_retention <= 1, "branch_width_retention must be in (0, 1]")
        _require(0 < self.main_width_retention <= 1, "main_width_retention must be in (0, 1]")
        _require(self.speed >= 0, "speed must be >= 0")
        _require(0 <= self.new_branch_chance <= 1, "new_branch_chance must be in [0, 1]")
        _require(self.spawn_interval_ms > 0, "spawn_interval_ms must be > 0")
        _require(self.fade_interval_ms > 0, "fade_interval_ms must be > 0")
        _require(0 <= self.fade_amount <= 1, "fade_amount must be in [0, 1]")
        _require(self.initial_branch_width > 0, "initial_branch_width must be > 0")
        _require(self.root_growth_rate >= 0, "root_growth_rate must be >= 0")
        _require(isinstance(self.max_live_branches, int) and self.max_live_branches >= 1,
                 "max_live_branches must be an integer >= 1")
        _require(self.clutter_width >= 0, "clutter_width must be >= 0")
        _require(0 <= self.clutter_band <= 1, "clutter_band must be in [0, 1]")
        _require(0 < self.clutter_shrink <= 1, "clutter_shrink must be in (0, 1]")
        _require(isinstance(self.screen_width, int) and self.screen_width > 0,
                 "screen_width must be a positive integer")
        _require(isinstance(self.screen_height, int) and self.screen_height > 0,
                 "screen_height must be a positive integer")
        _require(self.random_seed is None or
                 (isinstance(self.random_seed, int) and not isinstance(self.random_seed, bool)),
                 "random_seed must be an integer or null")

    @property
    def step_delay_factor(self) -> float:
        return 0.5 if self.fast_mode else 1.0

    @classmethod
    def from_options(cls, opts: Optional[Dict[str, Any]] = None, **overrides) -> 'TreeConfig':
        """Merge camelCase or snake_case options over the defaults."""
        merged: Dict[str, Any] = {}
        known = {f.name for f in fields(cls)}
        for key, value in {**(opts or {}), **overrides}.items():
            name = OPTION_NAMES.get(key, key)
            _require(name in known, f"unknown option '{key}'")
            merged[name] = value
        return cls(**merged)

    def merged(self, **overrides) -> 'TreeConfig':
        """Copy of this config with some options replaced."""
        return TreeConfig.from_options(self.to_dict(), **overrides)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        for name in _COLOR_FIELDS:
            data[name] = getattr(self, name).to_hex(keep_alpha=True)
        return data

    def to_options(self) -> Dict[str, Any]:
        """Serialise with the camelCase option names."""
        data = self.to_dict()
        return {camel: data[snake] for camel, snake in OPTION_NAMES.items()}
