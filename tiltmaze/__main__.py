#!/usr/bin/env python3
"""
Tilt Maze headless demo

Runs a scripted scene against the in-memory world and prints what the maze
behavior did: respawns, wins, sounds and the balls left alive.

Usage:
    python -m tiltmaze                          # Bundled demo scene
    python -m tiltmaze my_scene.yaml            # Custom scene
    python -m tiltmaze --settings tuned.yaml    # Override thresholds/offsets
    python -m tiltmaze --log-level DEBUG        # Verbose behavior log
    python -m tiltmaze --record-dir ./logs      # Write win/respawn records as JSONL
"""

import argparse
import sys

from .errors import TiltMazeError
from .logging import FileSink, close_all_sinks, configure_logging, register_sink
from .scene import BUNDLED_SCENE, load_scene, run_scene
from .settings import load_settings


def main(argv=None) -> int:
    """Run the demo. Returns the process exit status."""
    parser = argparse.ArgumentParser(description='Tilt Maze - headless behavior demo')
    parser.add_argument(
        'scene',
        nargs='?',
        default=str(BUNDLED_SCENE),
        help='Scene YAML to run (default: bundled tilt_maze.yaml)'
    )
    parser.add_argument(
        '--settings',
        default=None,
        help='Settings YAML (default: $TILTMAZE_SETTINGS or built-in values)'
    )
    parser.add_argument(
        '--log-level',
        default='INFO',
        choices=['TRACE', 'DEBUG', 'INFO', 'WARNING', 'ERROR', 'OFF'],
        help='Log level for all modules (default: INFO)'
    )
    parser.add_argument(
        '--record-dir',
        default=None,
        help='Directory for structured maze records (JSONL)'
    )
    args = parser.parse_args(argv)

    configure_logging(level=args.log_level)
    if args.record_dir:
        register_sink('maze', FileSink(log_dir=args.record_dir))

    try:
        settings = load_settings(args.settings)
        scene = load_scene(args.scene)
        result = run_scene(scene, settings)
    except TiltMazeError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    finally:
        close_all_sinks()

    print()
    print(f"Scene:       {args.scene}")
    print(f"Steps run:   {result.steps_run}")
    print(f"Maze locked: {result.locked}")
    print(f"Live balls:  {', '.join(result.live_balls) or '(none)'}")
    print(f"Sounds:      {len(result.sounds)}")
    for sound in result.sounds:
        print(f"  {sound.sound.url} at {sound.position} (volume {sound.volume})")
    return 0


if __name__ == '__main__':
    sys.exit(main())
