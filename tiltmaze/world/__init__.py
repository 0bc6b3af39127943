"""
World backends for the maze behavior.

WorldBackend is the capability surface the behavior consumes; InMemoryWorld
is a physics-free implementation for tests and headless runs.
"""

from .backend import WorldBackend
from .entity import PlayedSound, ScheduledCallback, SoundHandle, WorldObject
from .memory import InMemoryWorld

__all__ = [
    'WorldBackend',
    'InMemoryWorld',
    'WorldObject',
    'SoundHandle',
    'PlayedSound',
    'ScheduledCallback',
]
