"""
Tilt maze behavior.

Keeps a ball in play on a tilting maze: respawns it when it drifts away from
the spawner, and runs a win sequence (sound, lockout, respawn) when it reaches
the detector.
"""

from .config import load_config, parse_config
from .controller import MazeController
from .lifecycle import BallLifecycle
from .machine import Effect, Transition, transition
from .spatial import Action, ThresholdEvaluator

__all__ = [
    'MazeController',
    'BallLifecycle',
    'ThresholdEvaluator',
    'Action',
    'Effect',
    'Transition',
    'transition',
    'load_config',
    'parse_config',
]
