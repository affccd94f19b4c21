"""Logging setup for the wind editor.

The terminal is in raw mode while the editor runs, so nothing is logged to
the console: records go to a rotating ``wind.log`` in the platform log
directory. Key presses can additionally be traced to ``keytrace.log``,
enabled by the ``logging.keytrace`` config key or ``WIND_KEYTRACE=1``.
"""

import logging
import logging.handlers
import os
import sys
import tempfile
from pathlib import Path
from typing import Any, Optional

import platformdirs

# These loggers exist at import time but have no handlers until
# ``setup_logging()`` runs.
logger = logging.getLogger("wind")
KEY_LOGGER = logging.getLogger("wind.keyevents")


def log_dir() -> Path:
    return Path(platformdirs.user_log_dir("wind"))


def _rotating_handler(directory: Path, filename: str) -> logging.Handler:
    """Rotating file handler in ``directory``, or the temp dir on failure."""
    try:
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / filename
        return logging.handlers.RotatingFileHandler(
            path, maxBytes=2 * 1024 * 1024, backupCount=3, encoding="utf-8"
        )
    except OSError as e:
        fallback = Path(tempfile.gettempdir()) / f"wind-{filename}"
        print(f"Cannot log to '{directory}': {e}; using '{fallback}'", file=sys.stderr)
        return logging.handlers.RotatingFileHandler(
            fallback, maxBytes=2 * 1024 * 1024, backupCount=3, encoding="utf-8"
        )


def setup_logging(config: Optional[dict[str, Any]] = None,
                  directory: Optional[Path] = None) -> None:
    """Configure application-wide logging handlers.

    Only the ``["logging"]`` section of ``config`` is consulted:
    ``file_level`` (default INFO) and ``keytrace`` (default False).
    Existing handlers on the ``wind`` loggers are replaced, so calling this
    twice does not duplicate records.
    """
    logging_config = (config or {}).get("logging", {})
    level_name = str(logging_config.get("file_level", "INFO")).upper()
    level = getattr(logging, level_name, logging.INFO)
    directory = directory or log_dir()

    try:
        file_handler = _rotating_handler(directory, "wind.log")
    except OSError as e:
        print(f"Error setting up file logging: {e}", file=sys.stderr)
        file_handler = logging.NullHandler()
    file_handler.setFormatter(logging.Formatter(
        "%(asctime)s - %(levelname)-8s - %(name)-15s - %(message)s"
    ))
    file_handler.setLevel(level)

    for handler in logger.handlers:
        handler.close()
    logger.handlers = [file_handler]
    logger.setLevel(level)
    logger.propagate = False

    for handler in KEY_LOGGER.handlers:
        handler.close()
    KEY_LOGGER.handlers = []
    KEY_LOGGER.propagate = False
    keytrace = bool(logging_config.get("keytrace")) or \
        os.environ.get("WIND_KEYTRACE", "").lower() in {"1", "true", "yes"}
    if keytrace:
        try:
            key_handler = _rotating_handler(directory, "keytrace.log")
        except OSError as e:
            logger.error("Failed to set up key trace logging: %s", e)
            KEY_LOGGER.disabled = True
        else:
            key_handler.setFormatter(logging.Formatter("%(asctime)s - %(message)s"))
            KEY_LOGGER.addHandler(key_handler)
            KEY_LOGGER.setLevel(logging.DEBUG)
            KEY_LOGGER.disabled = False
            logger.info("Key event tracing enabled")
    else:
        KEY_LOGGER.addHandler(logging.NullHandler())
        KEY_LOGGER.disabled = True

    logger.info("Logging to %s at level %s", directory, logging.getLevelName(level))
