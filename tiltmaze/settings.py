"""
Settings loading for the maze behavior.

Settings are the tunable constants of the behavior (thresholds, spawn offsets,
ball physics, sound, timer delay). They come from a YAML file whose keys
mirror MazeSettings; a partial file overrides only the keys it names.

Example settings.yaml:
    thresholds:
      drift: 1.5
      detector: 0.1
    respawn_delay_ms: 2000
    ball:
      friction: 0.5

Path resolution:
    1. Explicit path argument
    2. TILTMAZE_SETTINGS environment variable
    3. Built-in defaults
"""

import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from pydantic import ValidationError

from models import MazeSettings

from .errors import SettingsError
from .logging import get_logger

log = get_logger('settings')

SETTINGS_ENV_VAR = 'TILTMAZE_SETTINGS'


def settings_from_dict(data: Dict[str, Any], source: str = "<dict>") -> MazeSettings:
    """Validate a settings mapping.

    Raises:
        SettingsError: If validation fails
    """
    try:
        return MazeSettings.model_validate(data)
    except ValidationError as e:
        raise SettingsError(f"Invalid settings in {source}: {e}") from e


def load_settings(path: Optional[Union[str, Path]] = None) -> MazeSettings:
    """Load MazeSettings from YAML, falling back to defaults.

    Raises:
        SettingsError: If the file is missing, unreadable or invalid
    """
    if path is None:
        path = os.environ.get(SETTINGS_ENV_VAR) or None
    if path is None:
        log.debug("No settings file; using defaults")
        return MazeSettings()

    path = Path(path).expanduser()
    try:
        with open(path, 'r') as f:
            data = yaml.safe_load(f) or {}
    except OSError as e:
        raise SettingsError(f"Cannot read settings file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise SettingsError(f"Settings file {path} is not valid YAML: {e}") from e

    if not isinstance(data, dict):
        raise SettingsError(f"Settings file {path} must contain a mapping")

    settings = settings_from_dict(data, str(path))
    log.info("Loaded settings from %s", path)
    return settings
