"""Tests for ball creation, destruction and resolution."""

import pytest

from conftest import live_balls
from models import ControllerState, MazeConfig, MazeSettings, Quat, Vec3
from tiltmaze.errors import MissingReference
from tiltmaze.maze.lifecycle import BallLifecycle, fetch_position


@pytest.fixture
def lifecycle(world, settings):
    return BallLifecycle(world, settings)


@pytest.fixture
def config():
    return MazeConfig(spawner_id="spawner", detector_id="detector", first_ball_id="first_ball")


def idle(ball_ref=None):
    return ControllerState(maze_id="maze", ball_ref=ball_ref)


class TestSpawnPose:
    """Ball start location relative to the maze transform."""

    def test_identity_rotation(self, lifecycle):
        assert lifecycle.spawn_pose("maze").as_tuple == pytest.approx((-0.4, 0.02, 0.2))

    def test_translated_maze(self, world, lifecycle):
        world.move_object("maze", Vec3(x=1.0, y=2.0, z=3.0))
        assert lifecycle.spawn_pose("maze").as_tuple == pytest.approx((0.6, 2.02, 3.2))

    def test_rotated_maze(self, world, lifecycle):
        world.get_object("maze").rotation = Quat.from_axis_angle(Vec3(x=0.0, y=1.0, z=0.0), 90)
        assert lifecycle.spawn_pose("maze").as_tuple == pytest.approx((0.2, 0.02, 0.4))

    def test_vertical_offset_ignores_tilt(self, world, lifecycle):
        """Tilting the maze about its right axis leaves the vertical offset on world up."""
        world.get_object("maze").rotation = Quat.from_axis_angle(Vec3(x=1.0, y=0.0, z=0.0), 90)
        # Front (0, 0, -1) tilts to (0, 1, 0); right stays (1, 0, 0).
        assert lifecycle.spawn_pose("maze").as_tuple == pytest.approx((-0.4, -0.18, 0.0))

    def test_custom_offsets(self, world):
        settings = MazeSettings.model_validate(
            {"spawn_offsets": {"forward": 0.0, "right": 0.0, "vertical": 1.0}})
        lifecycle = BallLifecycle(world, settings)
        assert lifecycle.spawn_pose("maze").as_tuple == pytest.approx((0.0, 1.0, 0.0))

    def test_missing_maze(self, world, lifecycle):
        world.delete_object("maze")
        with pytest.raises(MissingReference):
            lifecycle.spawn_pose("maze")


class TestCreateBall:
    """create_ball spawns and tracks a new ball."""

    def test_creates_with_ball_properties(self, world, lifecycle):
        state = lifecycle.create_ball(idle())

        ball = world.get_object(state.ball_ref)
        assert ball is not None
        assert ball.name == "Tilt Maze Ball"
        assert ball.object_type == "Sphere"
        assert ball.position.as_tuple == pytest.approx((-0.4, 0.02, 0.2))
        assert ball.properties["friction"] == 0.7
        assert ball.properties["gravity"] == Vec3(x=0.0, y=-9.8, z=0.0)

    def test_locked_is_noop(self, world, lifecycle):
        state = idle("first_ball").with_locked(True)
        before = set(world.objects)

        assert lifecycle.create_ball(state) is state
        assert set(world.objects) == before

    def test_does_not_destroy_previous(self, world, lifecycle):
        lifecycle.create_ball(idle("first_ball"))
        assert "first_ball" in live_balls(world)


class TestDestroyBall:
    """destroy_ball removes only the tracked ball near the observer."""

    def test_destroys_tracked_ball(self, world, lifecycle):
        state = idle("first_ball")

        assert lifecycle.destroy_ball(state) == state
        assert world.get_object("first_ball") is None

    def test_leaves_other_balls(self, world, lifecycle):
        world.add_object("Tilt Maze Ball", object_id="other_ball")

        lifecycle.destroy_ball(idle("first_ball"))

        assert live_balls(world) == ["other_ball"]

    def test_untagged_tracked_object_survives(self, world, lifecycle):
        lifecycle.destroy_ball(idle("spawner"))
        assert world.get_object("spawner") is not None

    def test_ball_out_of_observer_range_survives(self, world, lifecycle):
        world.move_object("first_ball", Vec3(x=0.0, y=12.0, z=0.0))

        lifecycle.destroy_ball(idle("first_ball"))

        assert world.get_object("first_ball") is not None

    def test_idempotent(self, world, lifecycle):
        state = idle("first_ball")
        lifecycle.destroy_ball(state)
        lifecycle.destroy_ball(state)
        assert live_balls(world) == []

    def test_no_tracked_ball(self, world, lifecycle):
        lifecycle.destroy_ball(idle())
        assert live_balls(world) == ["first_ball"]


class TestResolveBall:
    """Lazy adoption of the configured first ball."""

    def test_adopts_first_ball(self, world, lifecycle, config):
        world.move_object("first_ball", Vec3(x=0.3, y=0.0, z=0.0))

        state, position = lifecycle.resolve_ball(idle(), config)

        assert state.ball_ref == "first_ball"
        assert position == Vec3(x=0.3, y=0.0, z=0.0)

    def test_keeps_tracked_ball(self, world, lifecycle, config):
        world.add_object("Tilt Maze Ball", object_id="b2", position=Vec3(x=0.1, y=0.0, z=0.0))

        state, position = lifecycle.resolve_ball(idle("b2"), config)

        assert state.ball_ref == "b2"
        assert position.x == 0.1

    def test_deleted_ball(self, world, lifecycle, config):
        world.delete_object("first_ball")
        with pytest.raises(MissingReference) as excinfo:
            lifecycle.resolve_ball(idle(), config)
        assert excinfo.value.object_id == "first_ball"

    def test_fetch_position_missing(self, world):
        with pytest.raises(MissingReference, match="position"):
            fetch_position(world, "ghost")
