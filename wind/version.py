from __future__ import annotations

import importlib.metadata


def get_version() -> str:
    try:
        return importlib.metadata.version("wind")
    except importlib.metadata.PackageNotFoundError:
        # Running from a source checkout that was never installed
        return "unknown"


def get_version_string() -> str:
    return f"wind {get_version()}"
