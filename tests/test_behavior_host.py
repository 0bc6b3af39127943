"""Tests for BehaviorHost attach/detach and event routing."""

from unittest.mock import MagicMock, patch

import pytest
from pydantic import ValidationError

from conftest import live_balls, maze_user_data
from models import Vec3
from tiltmaze.behaviors import BehaviorHost
from tiltmaze.events import InteractionEvent, InteractionKind, InteractionPhase


@pytest.fixture
def host(world, settings):
    return BehaviorHost(world, settings)


class TestAttach:
    """Controller lifecycle."""

    def test_attach_creates_controller(self, world, host):
        controller = host.attach("maze")

        assert controller.attached
        assert host.controller("maze") is controller
        assert host.maze_ids() == ["maze"]
        assert len(world.loaded_sounds) == 1

    def test_reattach_is_noop(self, world, host):
        first = host.attach("maze")
        assert host.attach("maze") is first
        assert len(world.loaded_sounds) == 1

    def test_separate_controller_per_maze(self, world, host):
        world.add_object("Tilt Maze", object_id="maze2", user_data=maze_user_data())

        a = host.attach("maze")
        b = host.attach("maze2")

        assert a is not b
        assert a.state is not b.state

    def test_detach(self, host):
        controller = host.attach("maze")

        assert host.detach("maze") is True
        assert host.detach("maze") is False
        assert not controller.attached
        assert host.controller("maze") is None

    def test_clear(self, world, host):
        world.add_object("Tilt Maze", object_id="maze2", user_data=maze_user_data())
        host.attach("maze")
        host.attach("maze2")

        host.clear()

        assert host.maze_ids() == []


class TestDispatch:
    """Routing interaction events to controllers."""

    @pytest.mark.parametrize("phase, kind, method, args", [
        (InteractionPhase.START, InteractionKind.FAR, "on_interaction_start", (InteractionKind.FAR,)),
        (InteractionPhase.CONTINUE, InteractionKind.NEAR, "on_interaction_continue", (InteractionKind.NEAR,)),
        (InteractionPhase.RELEASE, InteractionKind.NEAR, "on_interaction_release", ()),
    ])
    def test_routes_by_phase(self, host, phase, kind, method, args):
        controller = host.attach("maze")

        with patch.object(controller, method) as hook:
            assert host.dispatch(InteractionEvent(maze_id="maze", phase=phase, kind=kind))

        hook.assert_called_once_with(*args)

    def test_unknown_maze(self, host, capsys):
        event = InteractionEvent(maze_id="nowhere", phase=InteractionPhase.RELEASE)

        assert host.dispatch(event) is False
        assert "unattached maze nowhere" in capsys.readouterr().out

    def test_controller_error_is_contained(self, host, capsys):
        controller = host.attach("maze")
        controller.on_interaction_continue = MagicMock(side_effect=RuntimeError("kaboom"))

        assert host.grab("maze") is True
        assert "kaboom" in capsys.readouterr().out

    def test_grab_and_release_drive_controller(self, world, host):
        controller = host.attach("maze")
        world.move_object("first_ball", Vec3(x=0.6, y=0.0, z=0.0))

        host.grab("maze", InteractionKind.FAR)
        assert controller.locked

        world.update(1.5)
        world.move_object(controller.state.ball_ref, Vec3(x=5.0, y=0.0, z=0.0))
        host.release("maze")

        assert not controller.locked
        assert len(live_balls(world)) == 1

    def test_events_are_immutable(self):
        event = InteractionEvent(maze_id="maze", phase=InteractionPhase.START)
        with pytest.raises(ValidationError):
            event.maze_id = "other"
