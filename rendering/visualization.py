"""
Plots of how the growth evolved over a recorded run.
"""

import numpy as np
import matplotlib.pyplot as plt
from typing import Dict, List, Optional
from pathlib import Path


def plot_growth_statistics(history: List[Dict], save_path: Optional[str] = None,
                           show: bool = False):
    """Plot live branches and drawing rate over time."""
    fig, axes = plt.subplots(1, 2, figsize=(12, 5))

    times = np.array([h['time_ms'] for h in history], dtype=float) / 1000.0
    live = np.array([h['live_branches'] for h in history])
    segments = np.array([h['segments'] for h in history])

    axes[0].plot(times, live, color='forestgreen')
    axes[0].set_xlabel('Time (s)')
    axes[0].set_ylabel('Live Branches')
    axes[0].set_title('Live Branches')

    drawn = np.diff(segments, prepend=0)
    axes[1].bar(times, drawn, width=(times[1] - times[0]) if len(times) > 1 else 0.05,
                color='saddlebrown', edgecolor='black')
    axes[1].set_xlabel('Time (s)')
    axes[1].set_ylabel('Segments Drawn')
    axes[1].set_title('Segments per Frame')

    plt.tight_layout()

    if save_path:
        Path(save_path).parent.mkdir(parents=True, exist_ok=True)
        plt.savefig(save_path, dpi=150, bbox_inches='tight')
        print(f"Saved statistics to {save_path}")

    if show:
        plt.show()
    else:
        plt.close(fig)
    return fig, axes
