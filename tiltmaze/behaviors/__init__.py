"""
Tilt Maze Behavior System

Behaviors attach logic to world objects. The world backend handles physics,
rendering and input; the behavior host routes interaction events and timer
callbacks to the maze controller attached to each object.
"""

from .engine import BehaviorHost

__all__ = ['BehaviorHost']
