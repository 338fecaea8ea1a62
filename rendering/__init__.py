"""
Rendering module: the Cairo drawing surface, the fade/marker composer,
frame capture and exporters.
"""

from .surface import CairoSurface
from .composer import Composer
from .animation import frame_to_rgb, record_frames
from .exporters import (
    save_frame,
    save_animation,
    export_stats,
    load_stats
)
from .visualization import plot_growth_statistics
