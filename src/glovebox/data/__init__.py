"""
Glovebox data resource helpers.

Provides utilities for accessing the bundled mod set, default configuration
and schemas using importlib.resources.
"""

from __future__ import annotations

from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Any

import yaml


def get_data_path(subpackage: str, filename: str = "") -> Path:
    """
    Get absolute path to a data file or directory.

    Args:
        subpackage: Name of the data subpackage (e.g., "mods", "schemas")
        filename: Optional filename within the subpackage

    Returns:
        Absolute path to the file or directory

    Example:
        >>> get_data_path("config", "defaults.yaml")
        PosixPath('/path/to/glovebox/data/config/defaults.yaml')
    """
    pkg = resources.files("glovebox.data")
    base = Path(str(pkg / subpackage))
    return base / filename if filename else base


@lru_cache(maxsize=128)
def read_yaml(subpackage: str, filename: str) -> Any:
    """
    Read and parse a YAML data file (cached).

    Bundled data is read-only, so each file is parsed at most once per process.
    Callers must not mutate the returned value.
    """
    path = get_data_path(subpackage, filename)
    return yaml.safe_load(path.read_text(encoding="utf-8"))


def file_exists(subpackage: str, filename: str) -> bool:
    """Check if a data file exists."""
    return get_data_path(subpackage, filename).is_file()


__all__ = [
    "get_data_path",
    "read_yaml",
    "file_exists",
]
