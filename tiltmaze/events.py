"""
Tilt Maze Event Types

Defines the events that flow into the maze behavior:
- InteractionEvent: grab/release signals delivered by the interaction system
- MazeEvent: internal state-machine inputs derived from distance tests and timers
- ScheduledTask: a deferred state-machine input bound to one maze

These types are the contract between the interaction subsystem, the behavior
host and the per-maze controllers.
"""

import time
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class InteractionKind(str, Enum):
    """How the player is manipulating the maze."""
    NEAR = "near"
    FAR = "far"


class InteractionPhase(str, Enum):
    """Stage of a grab interaction."""
    START = "start"
    CONTINUE = "continue"
    RELEASE = "release"


class InteractionEvent(BaseModel):
    """
    A grab/release signal for one maze.

    Produced by the external interaction subsystem; the behavior host routes
    it to the controller attached to `maze_id`.
    """
    maze_id: str = Field(..., min_length=1, description="Maze object the event targets")
    phase: InteractionPhase = Field(..., description="Start, continue or release")
    kind: InteractionKind = Field(default=InteractionKind.NEAR, description="Near or far grab")
    timestamp: float = Field(default_factory=time.time, description="Event time (seconds since epoch)")

    model_config = ConfigDict(frozen=True)  # Events are immutable once created


class MazeEvent(str, Enum):
    """Inputs to the win/cooldown state machine."""
    DRIFT_DETECTED = "drift_detected"
    WIN_DETECTED = "win_detected"
    RESPAWN_TIMER_FIRED = "respawn_timer_fired"


class ScheduledTask(BaseModel):
    """
    A state-machine input to deliver to a maze after a delay.

    Carries the maze id rather than a closure over controller state, so the
    transition applied on fire always sees the state current at fire time.
    """
    maze_id: str
    event: MazeEvent
    delay_ms: int = Field(..., ge=0)

    model_config = ConfigDict(frozen=True)
