"""
Spatial threshold tests.

Compares the ball's live position against the spawner (drift) and the
detector (win). Positions are fetched on every call; physics may have moved
the ball since the previous check. Both comparisons are strict, so a ball
sitting exactly on a threshold triggers nothing.
"""

from enum import Enum

from models import ControllerState, MazeConfig, Thresholds

from ..logging import get_logger
from ..world.backend import WorldBackend
from .lifecycle import BallLifecycle, fetch_position

log = get_logger('maze.spatial')


class Action(str, Enum):
    """Outcome of a threshold test."""
    NONE = "none"
    RESPAWN = "respawn"
    WIN = "win"


class ThresholdEvaluator:
    """Drift and win tests for one maze."""

    def __init__(self, world: WorldBackend, thresholds: Thresholds, lifecycle: BallLifecycle):
        self._world = world
        self._thresholds = thresholds
        self._lifecycle = lifecycle

    def test_drift(self, state: ControllerState, config: MazeConfig) -> tuple[ControllerState, Action]:
        """RESPAWN when the ball is further than the drift threshold from the spawner."""
        if state.locked:
            return state, Action.NONE

        state, ball_position = self._lifecycle.resolve_ball(state, config)
        spawner_position = fetch_position(self._world, config.spawner_id)
        separation = ball_position.distance_to(spawner_position)
        log.trace("Ball %s is %.4f from spawner", state.ball_ref, separation)

        if separation > self._thresholds.drift:
            log.debug("Ball %s drifted %.4f from spawner", state.ball_ref, separation)
            return state, Action.RESPAWN
        return state, Action.NONE

    def test_win(self, state: ControllerState, config: MazeConfig) -> tuple[ControllerState, Action]:
        """WIN when the ball is closer than the detector threshold to the detector."""
        if state.locked:
            return state, Action.NONE

        state, ball_position = self._lifecycle.resolve_ball(state, config)
        detector_position = fetch_position(self._world, config.detector_id)
        separation = ball_position.distance_to(detector_position)
        log.trace("Ball %s is %.4f from detector", state.ball_ref, separation)

        if separation < self._thresholds.detector:
            log.debug("Ball %s reached detector (%.4f)", state.ball_ref, separation)
            return state, Action.WIN
        return state, Action.NONE
