"""Tests for the headless scene runner."""

import pytest

from models import MazeSettings
from tiltmaze.maze.config import load_config
from tiltmaze.scene import (
    BUNDLED_SCENE,
    SceneError,
    build_world,
    load_scene,
    parse_scene,
    run_scene,
)


def scene_dict(script=None):
    return {
        "observer": [0, 1, 0],
        "objects": {
            "maze": {"name": "Tilt Maze", "type": "Model"},
            "spawner": {"name": "Ball Spawner"},
            "detector": {"name": "Ball Detector", "position": [0.5, 0, 0]},
            "ball": {"name": "Tilt Maze Ball", "type": "Sphere"},
        },
        "maze": {
            "object": "maze",
            "config": {"ballSpawner": "spawner", "detector": "detector", "firstBall": "ball"},
        },
        "script": script or [],
    }


class TestBundledScene:
    """The demo scene shipped with the package."""

    def test_runs_to_completion(self):
        result = run_scene(load_scene(BUNDLED_SCENE))

        assert result.steps_run == 8
        assert not result.locked
        assert len(result.live_balls) == 1
        assert result.first_ball == "first_ball"
        assert "first_ball" not in result.live_balls

    def test_plays_victory_sound_once(self):
        result = run_scene(load_scene(BUNDLED_SCENE))

        assert len(result.sounds) == 1
        assert result.sounds[0].volume == 0.25

    def test_rotated_spawn_point(self):
        scene = load_scene(BUNDLED_SCENE)
        result = run_scene(scene)

        ball = result.world.get_object(result.live_balls[0])
        assert ball.position.as_tuple == pytest.approx((0.2, 0.02, 0.4))

    def test_settings_change_outcome(self):
        settings = MazeSettings.model_validate({"thresholds": {"drift": 5.0, "detector": 0.01}})

        result = run_scene(load_scene(BUNDLED_SCENE), settings)

        assert result.sounds == []
        assert result.live_balls == ["first_ball"]


class TestBuildWorld:
    """Scene objects become world objects."""

    def test_objects_and_user_data(self):
        world = build_world(parse_scene(scene_dict()))

        assert set(world.objects) == {"maze", "spawner", "detector", "ball"}
        assert '"tiltMaze"' in world.get_object_property("maze", "user_data")
        assert world.get_object_property("spawner", "user_data") == ""
        assert world.get_object_property("detector", "position").x == 0.5
        assert world.observer_position().y == 1.0

    def test_custom_namespace(self):
        world = build_world(parse_scene(scene_dict()), namespace="other")
        assert '"other"' in world.get_object_property("maze", "user_data")

    def test_maze_user_data_loads_as_config(self):
        scene = parse_scene(scene_dict())
        world = build_world(scene)

        assert load_config(world, "maze") == scene.maze.config


class TestScript:
    """Script steps."""

    def test_drift_and_wait(self):
        result = run_scene(parse_scene(scene_dict([
            {"move": {"object": "$ball", "to": [3, 0, 0]}},
            {"release": True},
            {"move": {"to": [0.5, 0, 0]}},
            {"grab": "far"},
            {"wait": 1.5},
        ])))

        assert result.steps_run == 5
        assert not result.locked
        assert len(result.live_balls) == 1
        assert len(result.sounds) == 1

    def test_grab_defaults_to_near(self):
        result = run_scene(parse_scene(scene_dict([
            {"move": {"object": "ball", "to": [0.5, 0, 0]}},
            {"grab": None},
        ])))
        assert result.sounds == []


class TestErrors:
    """Bad scenes raise SceneError."""

    def test_missing_file(self, tmp_path):
        with pytest.raises(SceneError, match="Cannot load scene"):
            load_scene(tmp_path / "missing.yaml")

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("objects: {maze: [\n")
        with pytest.raises(SceneError):
            load_scene(path)

    def test_maze_object_must_exist(self):
        data = scene_dict()
        data["maze"]["object"] = "ghost"
        with pytest.raises(SceneError, match="ghost"):
            parse_scene(data)

    def test_maze_config_must_be_complete(self):
        data = scene_dict()
        del data["maze"]["config"]["firstBall"]
        with pytest.raises(SceneError, match="firstBall"):
            parse_scene(data)

    @pytest.mark.parametrize("step, message", [
        ({"grab": "near", "release": True}, "exactly one action"),
        ({"jump": 1}, "unknown action"),
        ({"grab": "sideways"}, "unknown grab kind"),
        ({"move": {"object": "ball"}}, "needs 'object' and 'to'"),
        ({"move": {"object": "ghost", "to": [0, 0, 0]}}, "no live object"),
        ({"move": {"object": "ball", "to": [1, 2]}}, "must be \\[x, y, z\\]"),
        ({"move": {"object": "ball", "to": ["a", 0, 0]}}, "must be \\[x, y, z\\]"),
        ({"move": {"object": "ball", "to": 5}}, "must be \\[x, y, z\\]"),
        ({"wait": "soon"}, "wait needs seconds"),
        ({"wait": None}, "wait needs seconds"),
        ({"wait": float("inf")}, "must be finite"),
        ({"wait": float("nan")}, "must be finite"),
    ])
    def test_bad_steps(self, step, message):
        with pytest.raises(SceneError, match=message):
            run_scene(parse_scene(scene_dict([step])))
