"""
In-memory world backend.

The backend:
1. Stores world objects by id
2. Answers property reads and proximity queries
3. Creates and deletes objects on request
4. Queues sound playback for the host application
5. Runs single-shot timers as simulated time advances

It performs no physics. Tests and the headless demo move objects
explicitly with move_object().
"""

import uuid
from typing import Any, Callable, Optional

from models import Quat, Vec3

from ..logging import get_logger
from .entity import PlayedSound, ScheduledCallback, SoundHandle, WorldObject

log = get_logger('world')

# Float slop tolerated when deciding a timer is due
_TIME_EPSILON = 1e-9


class InMemoryWorld:
    """
    Bookkeeping implementation of WorldBackend.

    Usage:
        world = InMemoryWorld()
        maze_id = world.add_object('Tilt Maze', position=Vec3(x=1, y=0, z=0),
                                   user_data='{"tiltMaze": {...}}')

        # In the host loop:
        world.update(dt)
        for sound in world.pop_sounds():
            play(sound)
    """

    def __init__(self, observer: Optional[Vec3] = None):
        self.objects: dict[str, WorldObject] = {}
        self.observer = observer or Vec3.zero()
        self.elapsed_time = 0.0

        # Every sound load request, in order
        self.loaded_sounds: list[SoundHandle] = []

        self._scheduled: list[ScheduledCallback] = []
        self._sound_queue: list[PlayedSound] = []

    # =========================================================================
    # Object management (host side)
    # =========================================================================

    def add_object(
        self,
        name: str,
        position: Optional[Vec3] = None,
        rotation: Optional[Quat] = None,
        object_type: str = "Box",
        user_data: str = "",
        object_id: Optional[str] = None,
        **properties: Any,
    ) -> str:
        """Place an object in the world and return its id."""
        if object_id is None:
            object_id = f"{object_type.lower()}_{uuid.uuid4().hex[:8]}"
        if object_id in self.objects:
            raise ValueError(f"Duplicate object id: {object_id}")

        self.objects[object_id] = WorldObject(
            id=object_id,
            name=name,
            object_type=object_type,
            position=position or Vec3.zero(),
            rotation=rotation or Quat.identity(),
            user_data=user_data,
            properties=dict(properties),
        )
        log.debug("Added %s (%s) at %s", object_id, name, self.objects[object_id].position)
        return object_id

    def get_object(self, object_id: str) -> Optional[WorldObject]:
        """Get a live object by id."""
        obj = self.objects.get(object_id)
        if obj is None or not obj.alive:
            return None
        return obj

    def move_object(self, object_id: str, position: Vec3) -> None:
        """Teleport an object (stands in for the physics step)."""
        obj = self.get_object(object_id)
        if obj is None:
            raise KeyError(object_id)
        obj.position = position

    def set_user_data(self, object_id: str, user_data: str) -> None:
        obj = self.get_object(object_id)
        if obj is None:
            raise KeyError(object_id)
        obj.user_data = user_data

    def find_by_name(self, fragment: str) -> list[WorldObject]:
        """Live objects whose name contains `fragment`."""
        return [o for o in self.objects.values() if o.alive and fragment in o.name]

    # =========================================================================
    # WorldBackend surface
    # =========================================================================

    def get_object_property(self, object_id: str, field: str) -> Optional[Any]:
        obj = self.get_object(object_id) if object_id else None
        if obj is None:
            return None
        return obj.get(field)

    def create_object(self, properties: dict[str, Any]) -> str:
        props = dict(properties)
        return self.add_object(
            name=props.pop('name', ''),
            position=props.pop('position', None),
            rotation=props.pop('rotation', None),
            object_type=props.pop('object_type', 'Box'),
            user_data=props.pop('user_data', ''),
            **props,
        )

    def delete_object(self, object_id: str) -> None:
        obj = self.objects.pop(object_id, None)
        if obj is None:
            log.debug("Delete of unknown object %s ignored", object_id)
            return
        obj.destroy()
        log.debug("Deleted %s (%s)", object_id, obj.name)

    def find_objects_near(self, point: Vec3, radius: float) -> list[str]:
        return [
            o.id for o in self.objects.values()
            if o.alive and o.position.distance_to(point) <= radius
        ]

    def observer_position(self) -> Vec3:
        return self.observer

    def load_sound(self, url: str) -> SoundHandle:
        sound = SoundHandle(url=url)
        self.loaded_sounds.append(sound)
        return sound

    def play_sound(self, sound: SoundHandle, position: Vec3, volume: float) -> None:
        self._sound_queue.append(PlayedSound(sound=sound, position=position, volume=volume))

    def schedule_after(self, delay_ms: int, callback: Callable[[], None]) -> None:
        self._scheduled.append(ScheduledCallback(delay_ms / 1000.0, callback, delay_ms))

    # =========================================================================
    # Time and queues
    # =========================================================================

    def update(self, dt: float) -> None:
        """
        Advance simulated time and fire due timers.

        Args:
            dt: Delta time in seconds
        """
        self.elapsed_time += dt

        for scheduled in self._scheduled[:]:
            scheduled.time_remaining -= dt
            if scheduled.time_remaining <= _TIME_EPSILON:
                self._scheduled.remove(scheduled)
                self._call_scheduled_callback(scheduled)

    def _call_scheduled_callback(self, scheduled: ScheduledCallback) -> None:
        try:
            scheduled.callback()
        except Exception:
            log.exception("Error in scheduled %s", scheduled.label)

    @property
    def pending_timers(self) -> list[ScheduledCallback]:
        """Timers that have not fired yet."""
        return list(self._scheduled)

    def pop_sounds(self) -> list[PlayedSound]:
        """Get and clear queued sounds."""
        sounds = self._sound_queue[:]
        self._sound_queue.clear()
        return sounds

    def clear(self) -> None:
        """Remove all objects and reset state."""
        self.objects.clear()
        self._scheduled.clear()
        self._sound_queue.clear()
        self.loaded_sounds.clear()
        self.elapsed_time = 0.0
