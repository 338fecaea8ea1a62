"""
Writers for captured frames and growth statistics.
Keeps the rendering outputs decoupled from the generator.
"""

import json
import numpy as np
import imageio
from pathlib import Path
from typing import List, Dict, Any


def save_frame(frame: np.ndarray, output_path: str):
    Path(output_path).parent.mkdir(parents=True, exist_ok=True)
    imageio.imwrite(output_path, frame)


def save_animation(frames: List[np.ndarray], output_path: str, fps: int = 20):
    """Write frames as a GIF (or any format imageio picks from the suffix)."""
    if not frames:
        raise ValueError("no frames to save")
    Path(output_path).parent.mkdir(parents=True, exist_ok=True)
    imageio.mimsave(output_path, frames, duration=1000.0 / fps)
    print(f"  Saved animation: {output_path}")


def export_stats(history: List[Dict[str, Any]], output_path: str) -> Dict[str, Any]:
    """
    Export per-frame growth statistics to JSON.

    Format:
    {
        "num_frames": int,
        "peak_live_branches": int,
        "frames": [
            {"time_ms": float, "live_branches": int, "segments": int, ...}
        ]
    }
    """
    data = {
        "num_frames": len(history),
        "peak_live_branches": max((h['live_branches'] for h in history), default=0),
        "frames": history,
    }

    Path(output_path).parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, 'w') as f:
        json.dump(data, f, indent=2)

    return data


def load_stats(path: str) -> Dict[str, Any]:
    with open(path, 'r') as f:
        return json.load(f)
