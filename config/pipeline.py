"""
Run configuration for rendering a tree animation to disk.

The tree options live in a nested `tree` object using the camelCase option
names; everything else describes how long to run and where outputs go.
All output paths are derived from `name`.
"""

from dataclasses import dataclass, field
from pathlib import Path
import json

from .tree_config import TreeConfig, ConfigError, _require


@dataclass
class AnimationConfig:
    """
    Settings for one offline render of the generator.
    """

    # ==================== MAIN SETTING ====================
    name: str = 'trees'

    # ==================== OUTPUT SETTINGS ====================
    output_base: str = 'outputs'

    # ==================== TIMING ====================
    duration_ms: float = 10000.0
    render_fps: int = 20

    # ==================== TREE ====================
    tree: TreeConfig = field(default_factory=TreeConfig)

    def __post_init__(self):
        if isinstance(self.tree, dict):
            self.tree = TreeConfig.from_options(self.tree)
        _require(isinstance(self.name, str) and self.name != '', "name must be a non-empty string")
        _require(isinstance(self.duration_ms, (int, float)) and self.duration_ms > 0,
                 "duration_ms must be > 0")
        _require(isinstance(self.render_fps, int) and self.render_fps > 0,
                 "render_fps must be a positive integer")

    @property
    def frame_interval_ms(self) -> float:
        return 1000.0 / self.render_fps

    @property
    def num_frames(self) -> int:
        return int(self.duration_ms // self.frame_interval_ms)

    # ==================== DERIVED PATHS ====================
    @property
    def output_dir(self) -> Path:
        return Path(self.output_base) / self.name

    @property
    def animation_path(self) -> Path:
        return self.output_dir / f'{self.name}_animation.gif'

    @property
    def final_frame_path(self) -> Path:
        return self.output_dir / f'{self.name}_final.png'

    @property
    def stats_plot_path(self) -> Path:
        return self.output_dir / f'{self.name}_stats.png'

    @property
    def stats_data_path(self) -> Path:
        return self.output_dir / f'{self.name}_stats.json'

    @property
    def metadata_path(self) -> Path:
        return self.output_dir / f'{self.name}_metadata.json'

    def create_output_dirs(self):
        self.output_dir.mkdir(parents=True, exist_ok=True)


def load_config(path: str = 'config/trees.json') -> AnimationConfig:
    """Load config from JSON file, with defaults for missing fields."""
    config_path = Path(path)
    if not config_path.exists():
        return AnimationConfig()

    with open(config_path, 'r') as f:
        data = json.load(f)

    if not isinstance(data, dict):
        raise ConfigError(f"{config_path} must contain a JSON object")

    known = {'name', 'output_base', 'duration_ms', 'render_fps', 'tree'}
    unknown = set(data) - known
    if unknown:
        raise ConfigError(f"unknown settings in {config_path}: {sorted(unknown)}")

    return AnimationConfig(**data)


def save_config(config: AnimationConfig, path: str = 'config/trees.json'):
    """Save config to JSON file."""
    config_path = Path(path)
    config_path.parent.mkdir(parents=True, exist_ok=True)

    data = {
        'name': config.name,
        'output_base': config.output_base,
        'duration_ms': config.duration_ms,
        'render_fps': config.render_fps,
        'tree': config.tree.to_options(),
    }

    with open(config_path, 'w') as f:
        json.dump(data, f, indent=2)

    print(f"Saved config to {config_path}")
