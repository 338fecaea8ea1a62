"""
Frame capture - drive a generator's clock and grab the surface as it grows.
"""

import numpy as np
from tqdm import tqdm
from typing import Dict, List, Tuple


def frame_to_rgb(frame: np.ndarray) -> np.ndarray:
    """Drop the alpha channel of an RGBA uint8 frame."""
    return np.ascontiguousarray(frame[:, :, :3])


def record_frames(generator, duration_ms: float, fps: int = 20,
                  progress: bool = True) -> Tuple[List[np.ndarray], List[Dict]]:
    """
    Run the generator for duration_ms of virtual time, capturing one RGB
    frame and one statistics snapshot every 1000 / fps ms.

    The generator is started if it isn't running yet.

    Returns:
        (frames, history) where frames are (H, W, 3) uint8 arrays and
        history holds one generator.snapshot() dict per frame.
    """
    if fps <= 0:
        raise ValueError(f"fps must be > 0, got {fps}")

    frame_interval = 1000.0 / fps
    num_frames = max(1, int(duration_ms // frame_interval))

    if not generator.running:
        generator.start()

    frames: List[np.ndarray] = []
    history: List[Dict] = []

    with tqdm(total=num_frames, desc="Growing trees", disable=not progress) as bar:
        def capture(gen, now):
            frames.append(frame_to_rgb(gen.surface.to_numpy()))
            history.append(gen.snapshot())
            bar.update(1)
            bar.set_postfix(branches=gen.live_branches)

        generator.run(num_frames * frame_interval, callback=capture,
                      frame_interval_ms=frame_interval)

    return frames, history
