"""Mod root resolution (project + user + bundled).

Mod layering model, in lookup precedence order (first match wins):
1. Project mods live under ``<project>/.glovebox/mods``
2. User mods live under ``~/.glovebox/mods``
3. Bundled mods live under the Glovebox distribution (glovebox.data/mods)

Every root mirrors the ``<category>/<name>.yaml`` identifier layout.
"""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Optional, TYPE_CHECKING

from glovebox.data import get_data_path

if TYPE_CHECKING:
    from glovebox.core.config import ConfigManager

MOD_SUFFIX = ".yaml"
BUNDLED = "bundled"


@dataclass(frozen=True)
class ModRoot:
    """A directory that holds mod definitions."""

    kind: str
    path: Path

    @property
    def is_bundled(self) -> bool:
        return self.kind == BUNDLED


def bundled_root() -> ModRoot:
    return ModRoot(kind=BUNDLED, path=get_data_path("mods"))


def get_mod_roots(config: "ConfigManager", *, include_bundled: bool = True) -> tuple[ModRoot, ...]:
    """Return mod roots in lookup precedence order (high → low)."""
    roots = [
        ModRoot(kind="project", path=config.project_mods_dir()),
        ModRoot(kind="user", path=config.user_mods_dir()),
    ]
    if include_bundled:
        roots.append(bundled_root())
    return tuple(roots)


def iter_mod_files(root: ModRoot) -> Iterator[tuple[str, Path]]:
    """Yield ``(identifier, path)`` for every definition under ``root``.

    Hidden files and directories (``.`` prefix) are skipped; output is sorted.
    """
    if not root.path.is_dir():
        return
    for path in sorted(root.path.rglob(f"*{MOD_SUFFIX}")):
        if not path.is_file():
            continue
        rel = path.relative_to(root.path)
        if any(part.startswith(".") for part in rel.parts):
            continue
        yield rel.with_suffix("").as_posix(), path


def mod_file(root: ModRoot, identifier: str) -> Optional[Path]:
    """Return the definition path for ``identifier`` under ``root`` if it exists."""
    candidate = root.path / f"{identifier}{MOD_SUFFIX}"
    return candidate if candidate.is_file() else None


__all__ = ["ModRoot", "BUNDLED", "MOD_SUFFIX", "bundled_root", "get_mod_roots", "iter_mod_files", "mod_file"]
