"""
Models library for the tilt maze behavior.

This package provides the Pydantic data models used across the system:
- Primitives: Basic geometric and color types (Vec3, Quat, Color)
- Maze: Persisted maze configuration, controller state and settings

Usage:
    >>> from models import Vec3, MazeConfig
    >>> from models.maze import MazeSettings
"""

# ============================================================================
# Primitives (basic types used everywhere)
# ============================================================================
from .primitives import (
    Vec3,
    Quat,
    Color,
    VEC3_RIGHT,
    VEC3_UP,
    VEC3_FRONT,
)

# ============================================================================
# Maze models
# ============================================================================
from .maze import (
    MazeConfig,
    MazePhase,
    ControllerState,
    Thresholds,
    SpawnOffsets,
    BallSpec,
    MazeSettings,
)

__all__ = [
    # Primitives
    "Vec3",
    "Quat",
    "Color",
    "VEC3_RIGHT",
    "VEC3_UP",
    "VEC3_FRONT",
    # Maze
    "MazeConfig",
    "MazePhase",
    "ControllerState",
    "Thresholds",
    "SpawnOffsets",
    "BallSpec",
    "MazeSettings",
]
