"""
Win/cooldown state machine.

A pure transition function: given the current controller state and an
event, return the next state and the ordered side effects the controller
must perform. Nothing here touches the world.

    IDLE   + DRIFT_DETECTED      -> IDLE    destroy ball, create ball
    IDLE   + WIN_DETECTED        -> LOCKED  destroy ball, victory sound, schedule respawn
    LOCKED + RESPAWN_TIMER_FIRED -> IDLE    create ball

Any other combination leaves the state unchanged with no effects.
"""

from enum import Enum
from typing import NamedTuple

from models import ControllerState, MazePhase

from ..events import MazeEvent


class Effect(str, Enum):
    """Side effects requested by a transition."""
    DESTROY_BALL = "destroy_ball"
    CREATE_BALL = "create_ball"
    PLAY_VICTORY_SOUND = "play_victory_sound"
    SCHEDULE_RESPAWN = "schedule_respawn"


class Transition(NamedTuple):
    state: ControllerState
    effects: tuple[Effect, ...]

    @property
    def accepted(self) -> bool:
        return bool(self.effects)


_TABLE: dict[tuple[MazePhase, MazeEvent], tuple[bool, tuple[Effect, ...]]] = {
    (MazePhase.IDLE, MazeEvent.DRIFT_DETECTED): (
        False, (Effect.DESTROY_BALL, Effect.CREATE_BALL),
    ),
    (MazePhase.IDLE, MazeEvent.WIN_DETECTED): (
        True, (Effect.DESTROY_BALL, Effect.PLAY_VICTORY_SOUND, Effect.SCHEDULE_RESPAWN),
    ),
    (MazePhase.LOCKED, MazeEvent.RESPAWN_TIMER_FIRED): (
        False, (Effect.CREATE_BALL,),
    ),
}


def transition(state: ControllerState, event: MazeEvent) -> Transition:
    """Apply one event to the controller state."""
    entry = _TABLE.get((state.phase, event))
    if entry is None:
        return Transition(state, ())
    locked, effects = entry
    return Transition(state.with_locked(locked), effects)
