"""
Maze controller - the behavior attached to one maze object.

Handles interaction events for its maze:
1. Reads the maze config from the maze's user data (fresh every event)
2. Runs the drift test, and for far grabs the win test
3. Feeds detected events through the pure state machine
4. Performs the requested effects against the world backend

The `locked` flag is checked first in every entry point; while locked, all
interaction events are absorbed. The respawn timer is never cancelled and
always creates a ball when it fires, even after the controller detaches.
"""

from functools import partial
from typing import Optional

from models import ControllerState, MazeSettings

from ..errors import ConfigParseError, MissingReference, TiltMazeError
from ..events import InteractionKind, MazeEvent, ScheduledTask
from ..logging import emit_record, get_logger
from ..world.backend import WorldBackend
from ..world.entity import SoundHandle
from .config import load_config
from .lifecycle import BallLifecycle, fetch_position
from .machine import Effect, Transition, transition
from .spatial import Action, ThresholdEvaluator

log = get_logger('maze')


class MazeController:
    """
    Per-attachment maze behavior.

    Usage:
        controller = MazeController(maze_id, world, settings)
        controller.on_attach()

        # From the interaction system:
        controller.on_interaction_continue(InteractionKind.FAR)
        controller.on_interaction_release()
    """

    def __init__(self, maze_id: str, world: WorldBackend, settings: Optional[MazeSettings] = None):
        self.maze_id = maze_id
        self.settings = settings or MazeSettings()
        self.state = ControllerState(maze_id=maze_id)
        self.attached = False

        self._world = world
        self._lifecycle = BallLifecycle(world, self.settings)
        self._evaluator = ThresholdEvaluator(world, self.settings.thresholds, self._lifecycle)
        self._victory_sound: Optional[SoundHandle] = None

    @property
    def locked(self) -> bool:
        return self.state.locked

    @property
    def lifecycle(self) -> BallLifecycle:
        return self._lifecycle

    @property
    def evaluator(self) -> ThresholdEvaluator:
        return self._evaluator

    # =========================================================================
    # Lifecycle hooks
    # =========================================================================

    def on_attach(self) -> None:
        """Called when the behavior is attached to its maze."""
        self._victory_sound = self._world.load_sound(self.settings.victory_sound_url)
        self.attached = True
        log.info("Attached to maze %s", self.maze_id)

    def on_detach(self) -> None:
        self.attached = False
        log.info("Detached from maze %s (locked=%s)", self.maze_id, self.locked)

    # =========================================================================
    # Interaction events
    # =========================================================================

    def on_interaction_start(self, kind: InteractionKind) -> None:
        """Grab started. Nothing to check until the grab moves the maze."""
        log.trace("%s grab started on %s", kind.value, self.maze_id)

    def on_interaction_continue(self, kind: InteractionKind) -> None:
        """Grab continuing: drift test, plus the win test for far grabs."""
        if self.state.locked:
            return
        log.trace("%s grab continuing on %s", kind.value, self.maze_id)
        self._run_checks(check_win=kind == InteractionKind.FAR)

    def on_interaction_release(self) -> None:
        """Grab released: drift test only."""
        if self.state.locked:
            return
        self._run_checks(check_win=False)

    def on_timer(self, task: ScheduledTask) -> None:
        """Deliver a scheduled state-machine event."""
        if task.maze_id != self.maze_id:
            log.warning("Task for %s delivered to %s; ignored", task.maze_id, self.maze_id)
            return
        if not self.attached:
            log.debug("%s fired after %s detached", task.event.value, self.maze_id)

        result = self._apply(task.event)
        if not result.accepted:
            log.debug("%s ignored in phase %s", task.event.value, self.state.phase.value)
            return
        if task.event == MazeEvent.RESPAWN_TIMER_FIRED:
            emit_record('maze', {
                'type': 'respawn',
                'maze_id': self.maze_id,
                'ball_ref': self.state.ball_ref,
            })

    # =========================================================================
    # Internals
    # =========================================================================

    def _run_checks(self, check_win: bool) -> None:
        try:
            config = load_config(self._world, self.maze_id, self.settings.userdata_namespace)

            state, action = self._evaluator.test_drift(self.state, config)
            self.state = state
            if action == Action.RESPAWN:
                log.info("Ball too far from spawner on %s, making a new one", self.maze_id)
                self._apply(MazeEvent.DRIFT_DETECTED)

            if check_win:
                state, action = self._evaluator.test_win(self.state, config)
                self.state = state
                if action == Action.WIN:
                    log.info("Ball reached detector on %s", self.maze_id)
                    emit_record('maze', {
                        'type': 'win',
                        'maze_id': self.maze_id,
                        'ball_ref': self.state.ball_ref,
                    })
                    self._apply(MazeEvent.WIN_DETECTED)
        except ConfigParseError as e:
            log.warning("%s", e)
        except MissingReference as e:
            log.warning("Maze %s: %s", self.maze_id, e)

    def _apply(self, event: MazeEvent) -> Transition:
        result = transition(self.state, event)
        self.state = result.state
        for effect in result.effects:
            try:
                self._perform(effect)
            except TiltMazeError as e:
                log.warning("Maze %s: %s failed: %s", self.maze_id, effect.value, e)
        return result

    def _perform(self, effect: Effect) -> None:
        if effect == Effect.DESTROY_BALL:
            self.state = self._lifecycle.destroy_ball(self.state)
        elif effect == Effect.CREATE_BALL:
            self.state = self._lifecycle.create_ball(self.state)
        elif effect == Effect.PLAY_VICTORY_SOUND:
            self._play_victory_sound()
        elif effect == Effect.SCHEDULE_RESPAWN:
            task = ScheduledTask(
                maze_id=self.maze_id,
                event=MazeEvent.RESPAWN_TIMER_FIRED,
                delay_ms=self.settings.respawn_delay_ms,
            )
            self._world.schedule_after(task.delay_ms, partial(self.on_timer, task))
            log.debug("Respawn for %s in %d ms", self.maze_id, task.delay_ms)

    def _play_victory_sound(self) -> None:
        if self._victory_sound is None:
            self._victory_sound = self._world.load_sound(self.settings.victory_sound_url)
        position = fetch_position(self._world, self.maze_id)
        self._world.play_sound(self._victory_sound, position, self.settings.victory_volume)
