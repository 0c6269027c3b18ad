"""Shared CLI utilities: project root lookup and per-invocation services."""
from __future__ import annotations

import argparse
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from glovebox.core.artifact import digest_file
from glovebox.core.config import ConfigManager
from glovebox.core.exceptions import ProfileError
from glovebox.core.generator import Generator
from glovebox.core.logging import configure_stdlib_logging
from glovebox.core.mods import ModRegistry, profile_os
from glovebox.core.profile import Profile, ProfileStore


def get_project_root(args: argparse.Namespace) -> Path:
    """Project directory from ``--project-dir``, else the current directory."""
    value = getattr(args, "project_dir", None)
    return Path(value).resolve() if value else Path.cwd().resolve()


@dataclass
class Workspace:
    """Services for one CLI invocation, bound to a project directory."""

    project_root: Path
    config: ConfigManager
    registry: ModRegistry
    store: ProfileStore

    @property
    def artifact_file(self) -> str:
        return str(self.config.get("paths.artifact_file", "Dockerfile"))

    def generator(self) -> Generator:
        return Generator(self.registry, self.config)

    def target_profile(self, base: bool) -> Optional[Profile]:
        """The global profile for ``--base``, else the effective profile."""
        if base:
            return self.store.load_global()
        return self.store.load_effective(self.project_root)

    def require_profile(self, base: bool) -> Profile:
        profile = self.target_profile(base)
        if profile is None:
            hint = "glovebox init --base" if base else "glovebox init"
            raise ProfileError(f"no profile found; run '{hint}' first")
        return profile

    def os_name_for(self, profile: Profile) -> Optional[str]:
        """OS of ``profile``, falling back to the base profile's for projects."""
        name = profile_os(self.registry, profile.mods)
        if name is None and not profile.is_global:
            base = self.store.load_global()
            if base is not None:
                name = profile_os(self.registry, base.mods)
        return name

    def base_artifact_digest(self) -> Optional[str]:
        base = self.store.load_global()
        if base is None:
            return None
        path = base.artifact_path(self.artifact_file)
        return digest_file(path) if path is not None else None


def open_workspace(args: argparse.Namespace) -> Workspace:
    """Load configuration and set up logging for a command invocation."""
    root = get_project_root(args)
    config = ConfigManager(root)
    level = "DEBUG" if getattr(args, "verbose", False) else str(config.get("logging.level", "WARNING"))
    configure_stdlib_logging(level)
    return Workspace(
        project_root=root,
        config=config,
        registry=ModRegistry.default(config),
        store=ProfileStore(config),
    )


__all__ = ["Workspace", "get_project_root", "open_workspace"]
