"""
Behavior Host - attaches maze behaviors to world objects and routes events.

The host:
1. Creates one MazeController per attached maze (no shared instance)
2. Calls lifecycle hooks (on_attach, on_detach)
3. Dispatches interaction events to the controller for the event's maze
4. Isolates controller failures so one maze cannot break dispatch
"""

from typing import Optional

from models import MazeSettings

from ..events import InteractionEvent, InteractionKind, InteractionPhase
from ..logging import get_logger
from ..maze.controller import MazeController
from ..world.backend import WorldBackend

log = get_logger('behaviors')


class BehaviorHost:
    """
    Manages maze behaviors attached to world objects.

    Usage:
        host = BehaviorHost(world, settings)
        host.attach(maze_id)

        # From the interaction system:
        host.dispatch(InteractionEvent(maze_id=maze_id,
                                       phase=InteractionPhase.CONTINUE,
                                       kind=InteractionKind.FAR))
    """

    def __init__(self, world: WorldBackend, settings: Optional[MazeSettings] = None):
        self.world = world
        self.settings = settings or MazeSettings()
        self._controllers: dict[str, MazeController] = {}

    def attach(self, maze_id: str) -> MazeController:
        """Attach the maze behavior to an object. Re-attaching is a no-op."""
        controller = self._controllers.get(maze_id)
        if controller is not None:
            return controller

        controller = MazeController(maze_id, self.world, self.settings)
        self._controllers[maze_id] = controller
        self._call('on_attach', controller)
        return controller

    def detach(self, maze_id: str) -> bool:
        """Detach the behavior. Returns False if it was not attached.

        Pending respawn timers still fire on the detached controller.
        """
        controller = self._controllers.pop(maze_id, None)
        if controller is None:
            return False
        self._call('on_detach', controller)
        return True

    def controller(self, maze_id: str) -> Optional[MazeController]:
        return self._controllers.get(maze_id)

    def maze_ids(self) -> list[str]:
        return list(self._controllers)

    def dispatch(self, event: InteractionEvent) -> bool:
        """
        Route an interaction event to its maze's controller.

        Returns:
            True if a controller received the event
        """
        controller = self._controllers.get(event.maze_id)
        if controller is None:
            log.warning("Event for unattached maze %s ignored", event.maze_id)
            return False

        if event.phase == InteractionPhase.START:
            self._call('on_interaction_start', controller, event.kind)
        elif event.phase == InteractionPhase.CONTINUE:
            self._call('on_interaction_continue', controller, event.kind)
        else:
            self._call('on_interaction_release', controller)
        return True

    def grab(self, maze_id: str, kind: InteractionKind = InteractionKind.NEAR) -> bool:
        """Shorthand for a continuing grab."""
        return self.dispatch(InteractionEvent(maze_id=maze_id, phase=InteractionPhase.CONTINUE, kind=kind))

    def release(self, maze_id: str) -> bool:
        return self.dispatch(InteractionEvent(maze_id=maze_id, phase=InteractionPhase.RELEASE))

    def clear(self) -> None:
        """Detach every maze."""
        for maze_id in list(self._controllers):
            self.detach(maze_id)

    def _call(self, method_name: str, controller: MazeController, *args) -> None:
        """Call a controller hook, logging instead of propagating errors."""
        try:
            getattr(controller, method_name)(*args)
        except Exception:
            log.exception("Error in %s.%s", controller.maze_id, method_name)
