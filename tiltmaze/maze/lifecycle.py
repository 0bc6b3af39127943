"""
Ball lifecycle management.

Creates, finds and destroys the maze's ball. The world backend owns the ball;
the controller state only tracks its id (ball_ref). At most one ball per maze
is alive at a time: every create is preceded by a destroy of the tracked
ball, except the respawn after a win, where the destroy already happened
when the win was detected.
"""

from typing import Any

from models import ControllerState, MazeConfig, MazeSettings, Quat, VEC3_UP, Vec3

from ..errors import MissingReference
from ..logging import get_logger
from ..world.backend import WorldBackend

log = get_logger('maze.lifecycle')


def fetch_property(world: WorldBackend, object_id: str, field: str) -> Any:
    """Read a property, raising MissingReference if it does not resolve."""
    value = world.get_object_property(object_id, field)
    if value is None:
        raise MissingReference(object_id, field)
    return value


def fetch_position(world: WorldBackend, object_id: str) -> Vec3:
    return fetch_property(world, object_id, 'position')


class BallLifecycle:
    """Creates and destroys the ball for one maze."""

    def __init__(self, world: WorldBackend, settings: MazeSettings):
        self._world = world
        self._settings = settings

    def spawn_pose(self, maze_id: str) -> Vec3:
        """Ball start location from the maze's current transform.

        The forward and right offsets follow the maze's rotation; the
        vertical offset is along world up.
        """
        offsets = self._settings.spawn_offsets
        position = fetch_position(self._world, maze_id)
        rotation = self._world.get_object_property(maze_id, 'rotation') or Quat.identity()

        offset = (
            VEC3_UP * offsets.vertical
            + rotation.right() * offsets.right
            + rotation.front() * offsets.forward
        )
        location = position + offset
        log.debug("Ball start location for %s: %s", maze_id, location)
        return location

    def create_ball(self, state: ControllerState) -> ControllerState:
        """Spawn a new ball and track it. No-op while locked."""
        if state.locked:
            log.debug("Create suppressed for %s: locked", state.maze_id)
            return state

        position = self.spawn_pose(state.maze_id)
        ball_id = self._world.create_object(self._settings.ball.to_properties(position))
        log.info("Created ball %s for maze %s", ball_id, state.maze_id)
        return state.with_ball(ball_id)

    def destroy_ball(self, state: ControllerState) -> ControllerState:
        """Delete the tracked ball if it can be found near the observer.

        The search is anchored on the observer, not the maze, with a fixed
        radius: a tracked ball further than search_radius from the observer
        is left alive. Idempotent when nothing matches.
        """
        if state.ball_ref is None:
            return state

        origin = self._world.observer_position()
        tag = self._settings.ball_name_tag
        for object_id in self._world.find_objects_near(origin, self._settings.search_radius):
            name = self._world.get_object_property(object_id, 'name') or ''
            if tag in name and object_id == state.ball_ref:
                self._world.delete_object(object_id)
                log.info("Destroyed ball %s for maze %s", object_id, state.maze_id)
                break
        else:
            log.debug("No ball %s near observer to destroy", state.ball_ref)
        return state

    def resolve_ball(self, state: ControllerState, config: MazeConfig) -> tuple[ControllerState, Vec3]:
        """Lazily adopt the configured first ball, then read the ball's position."""
        if state.ball_ref is None:
            state = state.with_ball(config.first_ball_id)
            log.debug("Maze %s adopted first ball %s", state.maze_id, config.first_ball_id)
        return state, fetch_position(self._world, state.ball_ref)
