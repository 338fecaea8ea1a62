"""
Tree Animation Script

Grows branching trees on a Cairo surface for a fixed stretch of virtual
time and writes the results to disk.

Configuration is loaded from config/trees.json (defaults if missing);
command-line flags override it. All output paths are derived from the
run name.

Outputs:
- Growth animation (.gif)
- Final frame (.png)
- Growth statistics (.png and .json)
- Run metadata (.json)
"""

import argparse
import json
import sys
from dataclasses import replace

from config import load_config, ConfigError
from growth import initialize
from growth.profiling import profiler
from rendering import record_frames, save_animation, save_frame, export_stats, plot_growth_statistics


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Render animated branching trees.")
    parser.add_argument('--config', default='config/trees.json', help="run configuration JSON")
    parser.add_argument('--name', help="run name (output file prefix)")
    parser.add_argument('--output', help="output base directory")
    parser.add_argument('--duration', type=float, help="virtual run time in seconds")
    parser.add_argument('--fps', type=int, help="captured frames per second")
    parser.add_argument('--width', type=int, help="surface width in pixels")
    parser.add_argument('--height', type=int, help="surface height in pixels")
    parser.add_argument('--seed', type=int, help="random seed")
    parser.add_argument('--colorful', action='store_true', help="random colour per tree")
    parser.add_argument('--fast', action='store_true', help="halve every step delay")
    parser.add_argument('--indicate', action='store_true', help="circle every branch point")
    parser.add_argument('--no-fade', action='store_true', help="disable the fade pass")
    parser.add_argument('--profile', action='store_true', help="time engine steps and scheduled tasks")
    return parser.parse_args(argv)


def build_config(args):
    run = load_config(args.config)

    tree_overrides = {}
    if args.width is not None:
        tree_overrides['screen_width'] = args.width
    if args.height is not None:
        tree_overrides['screen_height'] = args.height
    if args.seed is not None:
        tree_overrides['random_seed'] = args.seed
    if args.colorful:
        tree_overrides['colorful'] = True
    if args.fast:
        tree_overrides['fast_mode'] = True
    if args.indicate:
        tree_overrides['indicate_new_branch'] = True
    if args.no_fade:
        tree_overrides['fade_out'] = False
    if args.profile:
        tree_overrides['profile'] = True

    run_overrides = {}
    if args.name is not None:
        run_overrides['name'] = args.name
    if args.output is not None:
        run_overrides['output_base'] = args.output
    if args.duration is not None:
        run_overrides['duration_ms'] = args.duration * 1000.0
    if args.fps is not None:
        run_overrides['render_fps'] = args.fps
    if tree_overrides:
        run_overrides['tree'] = run.tree.merged(**tree_overrides)

    return replace(run, **run_overrides) if run_overrides else run


def main(argv=None):
    args = parse_args(argv)
    try:
        run = build_config(args)
    except ConfigError as e:
        print(f"Invalid configuration: {e}")
        return 1

    run.create_output_dirs()
    tree = run.tree

    print(f"Growing trees on a {tree.screen_width}x{tree.screen_height} surface")
    print(f"  Duration: {run.duration_ms / 1000.0:.1f}s at {run.render_fps} fps")
    print(f"  Seed: {tree.random_seed}")
    print()

    generator = initialize(config=tree)
    frames, history = record_frames(generator, run.duration_ms, fps=run.render_fps)
    generator.stop(cancel_branches=True)

    save_animation(frames, str(run.animation_path), fps=run.render_fps)
    save_frame(frames[-1], str(run.final_frame_path))
    export_stats(history, str(run.stats_data_path))
    plot_growth_statistics(history, save_path=str(run.stats_plot_path))

    final = history[-1]
    metadata = {
        'name': run.name,
        'duration_ms': run.duration_ms,
        'render_fps': run.render_fps,
        'num_frames': len(frames),
        'roots': final['roots'],
        'children': final['children'],
        'segments': final['segments'],
        'rejected': final['rejected'],
        'peak_live_branches': max(h['live_branches'] for h in history),
        'tree': tree.to_options(),
    }
    if tree.profile:
        metadata['timings'] = profiler.summary()
    with open(run.metadata_path, 'w') as f:
        json.dump(metadata, f, indent=2)
    print(f"Saved metadata to {run.metadata_path}")

    print("\nDone!")
    print(f"  Animation: {run.animation_path}")
    print(f"  Final frame: {run.final_frame_path}")
    print(f"  Stats: {run.stats_plot_path}")

    return 0


if __name__ == '__main__':
    sys.exit(main())
