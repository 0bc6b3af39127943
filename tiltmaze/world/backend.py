"""
World backend interface consumed by the maze behavior.

The backend owns every world object; the behavior only holds ids. All
mutations the behavior performs go through this surface, so any engine that
can answer these calls can host the maze.
"""

from typing import Any, Callable, Optional, Protocol, runtime_checkable

from models import Vec3

from .entity import SoundHandle


@runtime_checkable
class WorldBackend(Protocol):
    """Capability surface of the physics/world engine."""

    def get_object_property(self, object_id: str, field: str) -> Optional[Any]:
        """Read one field of an object; None if the object or field is missing."""
        ...

    def create_object(self, properties: dict[str, Any]) -> str:
        """Create an object from properties and return its id."""
        ...

    def delete_object(self, object_id: str) -> None:
        """Delete an object. Unknown ids are ignored."""
        ...

    def find_objects_near(self, point: Vec3, radius: float) -> list[str]:
        """Ids of objects within `radius` of `point`."""
        ...

    def observer_position(self) -> Vec3:
        """Position of the local avatar/observer."""
        ...

    def load_sound(self, url: str) -> SoundHandle:
        ...

    def play_sound(self, sound: SoundHandle, position: Vec3, volume: float) -> None:
        ...

    def schedule_after(self, delay_ms: int, callback: Callable[[], None]) -> None:
        """Run `callback` once after `delay_ms`. There is no cancellation."""
        ...
