"""
Headless scene runner.

Loads a YAML scene (world objects, the maze config, and a script of
interaction steps), runs it against InMemoryWorld and reports what happened.
Used by `python -m tiltmaze` and by the tests to drive whole sequences.

Scene format:
    observer: [0, 1, 0]
    objects:
      maze:     {name: Tilt Maze, position: [0, 0, 0], rotation: {axis: [0, 1, 0], degrees: 90}}
      spawner:  {name: Ball Spawner, position: [0.2, 0.02, 0.4]}
      detector: {name: Ball Detector, position: [-0.3, 0.02, -0.3]}
      ball:     {name: Tilt Maze Ball, type: Sphere, position: [0.2, 0.02, 0.4]}
    maze:
      object: maze
      config: {ballSpawner: spawner, detector: detector, firstBall: ball}
    script:
      - grab: near              # near | far continuing grab
      - move: {object: $ball, to: [2, 0, 0]}
      - release: true
      - wait: 1.5               # seconds of simulated time

`$ball` in a move step names whichever ball the maze currently tracks.
"""

import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml
from pydantic import BaseModel, Field, ValidationError, model_validator

from models import MazeConfig, MazeSettings, Quat, Vec3

from .behaviors.engine import BehaviorHost
from .errors import TiltMazeError
from .events import InteractionKind
from .logging import get_logger
from .maze.config import config_to_user_data
from .world.entity import PlayedSound
from .world.memory import InMemoryWorld

log = get_logger('scene')

TRACKED_BALL = '$ball'
WAIT_STEP = 0.1
BUNDLED_SCENE = Path(__file__).parent / 'scenes' / 'tilt_maze.yaml'


class SceneError(TiltMazeError):
    """Raised when a scene file cannot be loaded or run."""
    pass


class SceneRotation(BaseModel):
    axis: Vec3 = Vec3(x=0.0, y=1.0, z=0.0)
    degrees: float = 0.0

    @model_validator(mode='before')
    @classmethod
    def _axis_from_list(cls, data: Any) -> Any:
        if isinstance(data, dict) and isinstance(data.get('axis'), (list, tuple)):
            data = {**data, 'axis': Vec3.from_tuple(data['axis'])}
        return data

    def to_quat(self) -> Quat:
        return Quat.from_axis_angle(self.axis, self.degrees)


class SceneObject(BaseModel):
    name: str = ""
    type: str = "Box"
    position: Vec3 = Field(default_factory=Vec3.zero)
    rotation: SceneRotation = Field(default_factory=SceneRotation)

    @model_validator(mode='before')
    @classmethod
    def _position_from_list(cls, data: Any) -> Any:
        if isinstance(data, dict) and isinstance(data.get('position'), (list, tuple)):
            data = {**data, 'position': Vec3.from_tuple(data['position'])}
        return data


class SceneMaze(BaseModel):
    object: str
    config: MazeConfig


class SceneSpec(BaseModel):
    observer: Vec3 = Field(default_factory=Vec3.zero)
    objects: Dict[str, SceneObject]
    maze: SceneMaze
    script: List[Dict[str, Any]] = Field(default_factory=list)

    @model_validator(mode='before')
    @classmethod
    def _observer_from_list(cls, data: Any) -> Any:
        if isinstance(data, dict) and isinstance(data.get('observer'), (list, tuple)):
            data = {**data, 'observer': Vec3.from_tuple(data['observer'])}
        return data

    @model_validator(mode='after')
    def _maze_is_an_object(self) -> 'SceneSpec':
        if self.maze.object not in self.objects:
            raise ValueError(f"maze object {self.maze.object!r} is not in objects")
        return self


@dataclass
class SceneResult:
    """Outcome of running a scene."""
    world: InMemoryWorld
    host: BehaviorHost
    maze_id: str
    first_ball: Optional[str] = None
    sounds: List[PlayedSound] = field(default_factory=list)
    steps_run: int = 0

    @property
    def live_balls(self) -> List[str]:
        tag = self.host.settings.ball_name_tag
        return [o.id for o in self.world.find_by_name(tag)]

    @property
    def locked(self) -> bool:
        controller = self.host.controller(self.maze_id)
        return bool(controller and controller.locked)


def load_scene(path: Union[str, Path]) -> SceneSpec:
    """Read and validate a scene file.

    Raises:
        SceneError: If the file is unreadable or does not describe a scene
    """
    path = Path(path)
    try:
        with open(path, 'r') as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise SceneError(f"Cannot load scene {path}: {e}") from e
    return parse_scene(data, str(path))


def parse_scene(data: Dict[str, Any], source: str = "<dict>") -> SceneSpec:
    try:
        return SceneSpec.model_validate(data)
    except ValidationError as e:
        raise SceneError(f"Invalid scene {source}: {e}") from e


def build_world(scene: SceneSpec, namespace: str = 'tiltMaze') -> InMemoryWorld:
    """Populate an InMemoryWorld from a scene; scene keys become object ids."""
    world = InMemoryWorld(observer=scene.observer)
    for object_id, obj in scene.objects.items():
        user_data = ""
        if object_id == scene.maze.object:
            user_data = config_to_user_data(scene.maze.config, namespace)
        world.add_object(
            obj.name,
            position=obj.position,
            rotation=obj.rotation.to_quat(),
            object_type=obj.type,
            user_data=user_data,
            object_id=object_id,
        )
    return world


def run_scene(scene: SceneSpec, settings: Optional[MazeSettings] = None) -> SceneResult:
    """Attach the maze behavior and play the scene's script."""
    settings = settings or MazeSettings()
    world = build_world(scene, settings.userdata_namespace)

    host = BehaviorHost(world, settings)
    host.attach(scene.maze.object)
    result = SceneResult(
        world=world,
        host=host,
        maze_id=scene.maze.object,
        first_ball=scene.maze.config.first_ball_id,
    )

    for index, step in enumerate(scene.script):
        if len(step) != 1:
            raise SceneError(f"Step {index} must have exactly one action: {step}")
        action, arg = next(iter(step.items()))
        log.debug("Step %d: %s %s", index, action, arg)
        _run_step(result, action, arg, index)
        result.sounds.extend(world.pop_sounds())
        result.steps_run += 1

    return result


def _run_step(result: SceneResult, action: str, arg: Any, index: int) -> None:
    world, host, maze_id = result.world, result.host, result.maze_id

    if action == 'grab':
        try:
            kind = InteractionKind(arg or 'near')
        except (TypeError, ValueError) as e:
            raise SceneError(f"Step {index}: unknown grab kind {arg!r}") from e
        host.grab(maze_id, kind)
    elif action == 'release':
        host.release(maze_id)
    elif action == 'move':
        if not isinstance(arg, dict) or 'to' not in arg:
            raise SceneError(f"Step {index}: move needs 'object' and 'to'")
        target = arg.get('object', TRACKED_BALL)
        if target == TRACKED_BALL:
            controller = host.controller(maze_id)
            target = controller.state.ball_ref if controller else None
            if target is None:
                target = result.first_ball
        try:
            position = Vec3.from_tuple(arg['to'])
        except (TypeError, ValueError, ValidationError) as e:
            raise SceneError(f"Step {index}: move 'to' must be [x, y, z], got {arg['to']!r}") from e
        try:
            world.move_object(target, position)
        except (KeyError, TypeError) as e:
            raise SceneError(f"Step {index}: no live object {target!r}") from e
    elif action == 'wait':
        try:
            remaining = float(arg)
        except (TypeError, ValueError) as e:
            raise SceneError(f"Step {index}: wait needs seconds, got {arg!r}") from e
        if not math.isfinite(remaining):
            raise SceneError(f"Step {index}: wait must be finite, got {arg!r}")
        while remaining > 0:
            dt = min(WAIT_STEP, remaining)
            world.update(dt)
            remaining -= dt
    else:
        raise SceneError(f"Step {index}: unknown action {action!r}")
