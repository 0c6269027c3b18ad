"""User and project directory resolution.

Glovebox keeps state in two places:

1. the user-global directory (default ``~/.glovebox``) holding the base
   profile, its Dockerfile, user-wide mod overrides and ``config.yaml``;
2. the project directory ``<project>/.glovebox`` holding the project
   profile, its Dockerfile, project mod overrides and ``config.yaml``.

Precedence for the user directory (highest to lowest):
1. Environment variable: GLOVEBOX_paths__user_dir
2. Bundled defaults: glovebox.data/config/defaults.yaml (paths.user_dir)
"""
from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from glovebox.data import read_yaml as read_data_yaml

USER_DIR_ENV = "GLOVEBOX_paths__user_dir"
DEFAULT_DIR_NAME = ".glovebox"


def _bundled_paths() -> dict:
    data = read_data_yaml("config", "defaults.yaml") or {}
    section = data.get("paths") if isinstance(data, dict) else None
    return section if isinstance(section, dict) else {}


def get_user_dir(*, create: bool = False) -> Path:
    """Return the user-global Glovebox directory.

    Relative values are treated as relative to the user's home directory.
    """
    raw = os.environ.get(USER_DIR_ENV, "").strip() or str(_bundled_paths().get("user_dir") or f"~/{DEFAULT_DIR_NAME}")
    p = Path(raw).expanduser()
    if not p.is_absolute():
        p = Path.home() / p
    resolved = p.resolve()
    if create:
        resolved.mkdir(parents=True, exist_ok=True)
    return resolved


def get_project_dir(project_root: Optional[Path] = None, *, dir_name: Optional[str] = None) -> Path:
    """Return ``<project_root>/.glovebox`` (project_root defaults to CWD)."""
    root = Path(project_root) if project_root is not None else Path.cwd()
    name = dir_name or str(_bundled_paths().get("dir_name") or DEFAULT_DIR_NAME)
    return root.resolve() / name


__all__ = ["USER_DIR_ENV", "DEFAULT_DIR_NAME", "get_user_dir", "get_project_dir"]
