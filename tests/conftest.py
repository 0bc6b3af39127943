"""Shared fixtures: a small maze world and an attached controller."""

import json
from typing import Any, Dict, List, Optional

import pytest

from models import MazeSettings, Vec3
from tiltmaze import logging as tm_logging
from tiltmaze.logging import LogSink
from tiltmaze.maze.controller import MazeController
from tiltmaze.world.memory import InMemoryWorld

MAZE_CONFIG = {
    "ballSpawner": "spawner",
    "detector": "detector",
    "firstBall": "first_ball",
}


def maze_user_data(config: Optional[Dict[str, Any]] = None, **extra: Any) -> str:
    data = dict(extra)
    data["tiltMaze"] = dict(MAZE_CONFIG if config is None else config)
    return json.dumps(data)


class RecordingSink(LogSink):
    """Sink that keeps structured records in memory."""

    def __init__(self):
        self.records: List[Dict[str, Any]] = []
        self.closed = False

    def emit(self, module: str, record: Dict[str, Any]) -> None:
        self.records.append({"module": module, **record})

    def close(self) -> None:
        self.closed = True


@pytest.fixture(autouse=True)
def _restore_logging():
    """Keep logging configuration changes local to each test."""
    saved = dict(tm_logging._config)
    saved["module_levels"] = dict(tm_logging._config["module_levels"])
    yield
    tm_logging._config.clear()
    tm_logging._config.update(saved)
    tm_logging.close_all_sinks()


@pytest.fixture
def settings():
    return MazeSettings()


@pytest.fixture
def world():
    """Maze at the origin (identity rotation), spawner at the origin,
    detector at (0.5, 0, 0), first ball sitting on the spawner."""
    world = InMemoryWorld(observer=Vec3(x=0.0, y=1.0, z=0.0))
    world.add_object("Tilt Maze", object_id="maze", object_type="Model",
                     user_data=maze_user_data(grabbableKey={"wantsTrigger": True}))
    world.add_object("Ball Spawner", object_id="spawner")
    world.add_object("Ball Detector", object_id="detector",
                     position=Vec3(x=0.5, y=0.0, z=0.0))
    world.add_object("Tilt Maze Ball", object_id="first_ball", object_type="Sphere")
    return world


@pytest.fixture
def controller(world, settings):
    controller = MazeController("maze", world, settings)
    controller.on_attach()
    return controller


@pytest.fixture
def records():
    sink = RecordingSink()
    tm_logging.register_sink("maze", sink)
    return sink.records


def live_balls(world: InMemoryWorld) -> List[str]:
    return [o.id for o in world.find_by_name("Maze Ball")]


def move_ball(world: InMemoryWorld, controller: MazeController, x: float, y: float = 0.0, z: float = 0.0) -> str:
    """Move the controller's tracked ball (or the first ball before resolution)."""
    ball_id = controller.state.ball_ref or "first_ball"
    world.move_object(ball_id, Vec3(x=x, y=y, z=z))
    return ball_id
