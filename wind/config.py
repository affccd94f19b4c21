"""User configuration for the wind editor.

Settings live in ``config.json`` in the platform-appropriate config
directory. A missing or unreadable file falls back to the defaults.
"""

from __future__ import annotations

import copy
import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

import platformdirs

from .constants import EditorConstants

logger = logging.getLogger(__name__)

DEFAULT_CONFIG: Dict[str, Any] = {
    "placeholder_path": EditorConstants.PLACEHOLDER_PATH,
    "logging": {
        "file_level": "INFO",
        "keytrace": False,
    },
}


def config_path() -> Path:
    """Location of the user's config file."""
    return Path(platformdirs.user_config_dir("wind")) / "config.json"


def _merge(base: Dict[str, Any], overrides: Dict[str, Any], prefix: str = "") -> None:
    """Recursively merge ``overrides`` into ``base`` in place.

    A value whose type differs from the default it replaces is rejected
    with a warning and the default is kept. Unknown keys are taken as is.
    """
    for key, value in overrides.items():
        name = prefix + key
        if key not in base:
            base[key] = value
        elif isinstance(base[key], dict):
            if isinstance(value, dict):
                _merge(base[key], value, prefix=f"{name}.")
            else:
                logger.warning(f"Ignoring config key '{name}': expected a dict, got {value!r}")
        elif not validate_setting(name, value, base[key]):
            logger.warning(f"Ignoring config key '{name}': invalid value {value!r}")
        else:
            base[key] = value


def validate_setting(name: str, value: Any, default: Any) -> bool:
    """Check ``value`` against the type of its default.

    ``placeholder_path`` must also be non-empty.
    """
    # bool is a subclass of int; compare exact types
    if type(value) is not type(default):
        return False
    if name == "placeholder_path":
        return bool(value.strip())
    return True


def load_config(path: Optional[Path] = None) -> Dict[str, Any]:
    """Load the configuration, layered over the defaults.

    Args:
        path: Config file to read. Defaults to ``config_path()``.

    Returns:
        The merged configuration dictionary.
    """
    config = copy.deepcopy(DEFAULT_CONFIG)
    path = path or config_path()
    if not path.exists():
        return config

    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (json.JSONDecodeError, OSError) as e:
        logger.warning(f"Could not load config from {path}: {e}")
        return config

    if not isinstance(data, dict):
        logger.warning("Config file has invalid format (not a dict), ignoring")
        return config

    _merge(config, data)
    return config
