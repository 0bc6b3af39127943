"""
Tilt Maze

Behavior controller for a tilting ball maze in a physics world: keeps one
ball in play per maze, respawns it when it drifts away, and runs a win
sequence when it reaches the goal.

Logging goes through tiltmaze.logging; see that module for the
TILTMAZE_LOG_* environment variables.
"""

__version__ = '0.1.0'

__all__ = ['__version__']
