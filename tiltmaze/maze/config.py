"""
Maze configuration loading.

The maze object's user data holds a JSON object with a namespaced section
naming the world objects the behavior works against:

    {
        "tiltMaze": {
            "ballSpawner": "<id>",
            "detector": "<id>",
            "firstBall": "<id>"
        }
    }

The config is read fresh on every query because the user data may be edited
externally at any time.
"""

import json
from typing import Any

from pydantic import ValidationError

from models import MazeConfig

from ..errors import ConfigParseError
from ..world.backend import WorldBackend

DEFAULT_NAMESPACE = "tiltMaze"


def parse_config(maze_id: str, user_data: Any, namespace: str = DEFAULT_NAMESPACE) -> MazeConfig:
    """Parse a user data string into a MazeConfig.

    Args:
        maze_id: Maze object id (for error messages)
        user_data: Raw user data field value
        namespace: Key of the section holding the maze references

    Raises:
        ConfigParseError: If the data is absent, not a JSON object, lacks the
            namespace section, or lacks any required reference
    """
    if not isinstance(user_data, str) or not user_data.strip():
        raise ConfigParseError(maze_id, "user data is empty")

    try:
        data = json.loads(user_data)
    except json.JSONDecodeError as e:
        raise ConfigParseError(maze_id, f"user data is not valid JSON ({e.msg})") from e

    if not isinstance(data, dict):
        raise ConfigParseError(maze_id, "user data is not a JSON object")

    section = data.get(namespace)
    if not isinstance(section, dict):
        raise ConfigParseError(maze_id, f"missing '{namespace}' section")

    try:
        return MazeConfig.model_validate(section)
    except ValidationError as e:
        raise ConfigParseError(maze_id, _describe(e)) from e


def load_config(world: WorldBackend, maze_id: str, namespace: str = DEFAULT_NAMESPACE) -> MazeConfig:
    """Read and parse the maze's user data from the world backend."""
    user_data = world.get_object_property(maze_id, 'user_data')
    return parse_config(maze_id, user_data, namespace)


def _describe(error: ValidationError) -> str:
    problems = []
    for item in error.errors():
        location = '.'.join(str(p) for p in item['loc'])
        problems.append(f"{location}: {item['msg']}")
    return '; '.join(problems)


def config_to_user_data(config: MazeConfig, namespace: str = DEFAULT_NAMESPACE) -> str:
    """Serialize a MazeConfig into user data JSON under `namespace`."""
    return json.dumps({namespace: config.model_dump(by_alias=True)})
