"""wind CLI entry point.

Allows running via `python -m wind` and provides the console script
defined in `pyproject.toml`.

Usage:
    wind [FILE]
    wind --version
"""

from __future__ import annotations

import logging
import sys

from .version import get_version_string

logger = logging.getLogger("wind")


def main() -> None:
    # Very small arg parsing: version flag or one optional filename
    args = sys.argv[1:]
    if args and args[0] in ("--version", "-V"):
        print(get_version_string())
        return
    if len(args) > 1:
        print("usage: wind [FILE]", file=sys.stderr)
        sys.exit(2)

    # Lazy import to avoid importing UI deps for --version
    from .app import App
    from .config import load_config
    from .logging_config import setup_logging

    config = load_config()
    setup_logging(config)

    path = args[0] if args else None
    try:
        app = App(path, config=config)
    except (OSError, UnicodeDecodeError) as e:
        logger.error("Error loading %s: %s", path, e)
        print(f"Error loading file: {e}", file=sys.stderr)
        sys.exit(1)
    app.run()


if __name__ == "__main__":  # pragma: no cover
    main()
