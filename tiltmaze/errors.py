"""Exceptions raised by the maze behavior."""

from typing import Optional


class TiltMazeError(Exception):
    """Base class for maze behavior errors."""
    pass


class ConfigParseError(TiltMazeError):
    """The maze's user data is absent, malformed, or missing a reference."""

    def __init__(self, maze_id: str, reason: str):
        super().__init__(f"Invalid maze config on {maze_id}: {reason}")
        self.maze_id = maze_id
        self.reason = reason


class MissingReference(TiltMazeError):
    """A configured world-object id no longer resolves in the backend."""

    def __init__(self, object_id: Optional[str], field: str):
        super().__init__(f"Object {object_id!r} has no {field!r} (missing or deleted)")
        self.object_id = object_id
        self.field = field


class SettingsError(TiltMazeError):
    """Raised when the settings file cannot be read or fails validation."""
    pass
