"""
Pydantic models for the tilt maze behavior.

Covers the per-maze configuration persisted in the maze's user data, the
controller state carried between events, and the tunable settings
(thresholds, spawn offsets, ball physics) loaded from YAML.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .primitives import Color, Vec3


class MazeConfig(BaseModel):
    """World-object references stored under the maze's user data namespace.

    The persisted keys are camelCase (`ballSpawner`, `detector`,
    `firstBall`); the Python attributes are snake_case.

    Examples:
        >>> MazeConfig.model_validate(
        ...     {"ballSpawner": "s1", "detector": "d1", "firstBall": "b1"})
        MazeConfig(spawner_id='s1', detector_id='d1', first_ball_id='b1')
    """
    spawner_id: str = Field(..., alias="ballSpawner", min_length=1)
    detector_id: str = Field(..., alias="detector", min_length=1)
    first_ball_id: str = Field(..., alias="firstBall", min_length=1)

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")


class MazePhase(str, Enum):
    """Phase of the win/cooldown state machine."""
    IDLE = "idle"
    LOCKED = "locked"


class ControllerState(BaseModel):
    """Per-attachment controller state.

    `ball_ref` is a weak reference into the world backend; the backend owns
    the object. `locked` brackets the interval between a win and the
    respawn timer firing.
    """
    maze_id: str
    ball_ref: Optional[str] = None
    locked: bool = False

    model_config = ConfigDict(frozen=True)

    @property
    def phase(self) -> MazePhase:
        return MazePhase.LOCKED if self.locked else MazePhase.IDLE

    def with_ball(self, ball_ref: Optional[str]) -> "ControllerState":
        return self.model_copy(update={"ball_ref": ball_ref})

    def with_locked(self, locked: bool) -> "ControllerState":
        return self.model_copy(update={"locked": locked})


class Thresholds(BaseModel):
    """Distance limits, in world units.

    drift: ball further than this from the spawner is respawned.
    detector: ball closer than this to the detector wins.
    """
    drift: float = Field(default=1.0, gt=0)
    detector: float = Field(default=0.2, gt=0)

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def detector_inside_drift(self) -> "Thresholds":
        if self.detector >= self.drift:
            raise ValueError(
                f"detector threshold ({self.detector}) must be smaller than "
                f"drift threshold ({self.drift})"
            )
        return self


class SpawnOffsets(BaseModel):
    """Ball spawn offsets relative to the maze, in the maze's local frame."""
    forward: float = -0.2
    right: float = -0.4
    vertical: float = 0.02

    model_config = ConfigDict(frozen=True)


class BallSpec(BaseModel):
    """Fixed physical parameters of a spawned ball."""
    name: str = "Tilt Maze Ball"
    object_type: str = "Sphere"
    dynamic: bool = True
    collisionless: bool = False
    friction: float = 0.7
    restitution: float = 0.1
    damping: float = 0.6
    angular_damping: float = 0.2
    density: float = 1000.0
    gravity: Vec3 = Vec3(x=0.0, y=-9.8, z=0.0)
    dimensions: Vec3 = Vec3(x=0.05, y=0.05, z=0.05)
    color: Color = Color(red=255, green=0, blue=0)

    model_config = ConfigDict(frozen=True)

    def to_properties(self, position: Vec3) -> dict:
        """Object properties for a create command at `position`."""
        properties = self.model_dump(exclude={"gravity", "dimensions", "color"})
        properties.update(
            position=position,
            gravity=self.gravity,
            dimensions=self.dimensions,
            color=self.color,
        )
        return properties


DEFAULT_VICTORY_SOUND_URL = (
    "http://hifi-content.s3.amazonaws.com/DomainContent/Home/tiltMaze/levelUp.wav"
)


class MazeSettings(BaseModel):
    """Tunable constants for the maze behavior (loaded from YAML)."""
    thresholds: Thresholds = Field(default_factory=Thresholds)
    spawn_offsets: SpawnOffsets = Field(default_factory=SpawnOffsets)
    ball: BallSpec = Field(default_factory=BallSpec)

    # Substring identifying maze balls among nearby objects
    ball_name_tag: str = Field(default="Maze Ball", min_length=1)
    # Radius of the nearby-object search used when destroying a ball
    search_radius: float = Field(default=10.0, gt=0)
    respawn_delay_ms: int = Field(default=1500, ge=0)
    victory_sound_url: str = DEFAULT_VICTORY_SOUND_URL
    victory_volume: float = Field(default=0.25, ge=0, le=1)
    userdata_namespace: str = Field(default="tiltMaze", min_length=1)

    model_config = ConfigDict(frozen=True, extra="forbid")

    @model_validator(mode="after")
    def ball_name_is_tagged(self) -> "MazeSettings":
        if self.ball_name_tag not in self.ball.name:
            raise ValueError(
                f"ball name {self.ball.name!r} does not contain tag "
                f"{self.ball_name_tag!r}; spawned balls could never be destroyed"
            )
        return self
