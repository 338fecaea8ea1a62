"""
Configuration module.
"""

from .color import Color, random_color
from .tree_config import TreeConfig, ConfigError, OPTION_NAMES
from .pipeline import AnimationConfig, load_config, save_config

__all__ = [
    'Color',
    'random_color',
    'TreeConfig',
    'ConfigError',
    'OPTION_NAMES',
    'AnimationConfig',
    'load_config',
    'save_config',
]
