"""
WorldObject - a record held by the in-memory world backend.

A WorldObject is a placed object with:
- Identity (id, name, type)
- Transform (position, rotation)
- A free-form user data string (the maze stores its JSON config there)
- Any other creation properties (physics parameters, color, ...)

The in-memory backend does not simulate physics; positions change only when
a caller moves the object.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from models import Quat, Vec3


@dataclass
class WorldObject:
    """An object stored in the world backend."""

    # Identity
    id: str
    name: str = ""
    object_type: str = "Box"

    # Transform
    position: Vec3 = field(default_factory=Vec3.zero)
    rotation: Quat = field(default_factory=Quat.identity)

    # Persisted metadata (JSON text)
    user_data: str = ""

    # Other creation properties (friction, color, dimensions, ...)
    properties: dict[str, Any] = field(default_factory=dict)

    alive: bool = True

    def get(self, field_name: str) -> Any:
        """Read a named field, falling back to creation properties."""
        if field_name in ('id', 'name', 'object_type', 'position', 'rotation', 'user_data'):
            return getattr(self, field_name)
        return self.properties.get(field_name)

    def destroy(self) -> None:
        """Mark object for removal."""
        self.alive = False


@dataclass(frozen=True)
class SoundHandle:
    """A loaded sound resource."""
    url: str


@dataclass(frozen=True)
class PlayedSound:
    """A sound playback request recorded by the backend."""
    sound: SoundHandle
    position: Vec3
    volume: float


class ScheduledCallback:
    """A callback scheduled to run after a delay."""
    def __init__(self, time_remaining: float, callback: Callable[[], None],
                 delay_ms: int, label: Optional[str] = None):
        self.time_remaining = time_remaining
        self.callback = callback
        self.delay_ms = delay_ms
        self.label = label or getattr(callback, '__name__', 'callback')
