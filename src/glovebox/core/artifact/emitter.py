"""Dockerfile emission for a resolved mod set.

Output is a pure function of the resolved set, the layer kind and the
settings: the same inputs always produce byte-identical text, which the
digest tracker relies on.

Layout:
1. syntax line and a header listing the mods
2. ``FROM`` (the OS mod's image for a base build, the base image tag for a
   project build)
3. one block per mod, in resolution order: packages, root script, user script
4. merged ``ENV`` (last write wins, first-seen key order)
5. shell override, ``USER``, ``WORKDIR`` and the default command
"""
from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, List, Optional

from glovebox.core.mods.model import Mod

HEREDOC_MARKER = "GLOVEBOX_EOF"
ROOT_USER = "root"


class LayerKind(str, Enum):
    BASE = "base"
    PROJECT = "project"


@dataclass(frozen=True)
class EmitterSettings:
    base_image: str = "glovebox:base"
    user: str = "ubuntu"
    workdir: str = "/workspace"
    default_shell: str = "/bin/bash"
    package_install: str = "apt-get update && apt-get install -y {packages}"

    @classmethod
    def from_config(cls, config) -> "EmitterSettings":
        return cls(
            base_image=config.base_image_name,
            user=str(config.get("build.user", cls.user)),
            workdir=str(config.get("build.workdir", cls.workdir)),
            default_shell=str(config.get("build.default_shell", cls.default_shell)),
            package_install=str(config.get("build.package_install", cls.package_install)),
        )


def quote_env(value: str) -> str:
    return '"' + value.replace("\\", "\\\\").replace('"', '\\"') + '"'


def merge_environment(mods: Iterable[Mod]) -> Dict[str, str]:
    """Merge mod environments in order; a later mod's value wins."""
    env: Dict[str, str] = {}
    for mod in mods:
        for key, value in mod.environment.items():
            env[key] = value
    return env


class _Writer:
    def __init__(self, user: str) -> None:
        self.lines: List[str] = []
        self.current_user = user

    def add(self, *lines: str) -> None:
        self.lines.extend(lines)

    def blank(self) -> None:
        if self.lines and self.lines[-1] != "":
            self.lines.append("")

    def switch_user(self, user: str) -> None:
        if user != self.current_user:
            self.lines.append(f"USER {user}")
            self.current_user = user

    def heredoc(self, user: str, script: str) -> None:
        self.switch_user(user)
        self.add(f"RUN <<'{HEREDOC_MARKER}'", *script.rstrip("\n").splitlines(), HEREDOC_MARKER)

    def text(self) -> str:
        while self.lines and self.lines[-1] == "":
            self.lines.pop()
        return "\n".join(self.lines) + "\n"


def _comment(mod: Mod) -> str:
    summary = mod.description.strip().splitlines()[0] if mod.description.strip() else ""
    return f"# {mod.identifier}: {summary}" if summary else f"# {mod.identifier}"


def emit(
    resolved: Iterable[Mod],
    layer_kind: LayerKind | str,
    os_mod: Optional[Mod] = None,
    settings: Optional[EmitterSettings] = None,
) -> str:
    """Render ``resolved`` as Dockerfile text.

    ``os_mod`` supplies the package install command and build user. For a
    base build it defaults to the OS mod in ``resolved``; for a project build
    the caller passes the base image's OS mod.
    """
    mods = list(resolved)
    kind = LayerKind(layer_kind)
    settings = settings or EmitterSettings()
    if os_mod is None:
        os_mod = next((mod for mod in mods if mod.is_os), None)

    build_user = (os_mod.user if os_mod is not None else None) or settings.user
    install = (os_mod.package_install if os_mod is not None else None) or settings.package_install

    # A project image starts as the user its base image finished with.
    out = _Writer(ROOT_USER if kind is LayerKind.BASE else build_user)
    out.add(
        "# syntax=docker/dockerfile:1",
        "# Generated by glovebox",
        f"# Mods: {', '.join(mod.identifier for mod in mods) or '(none)'}",
    )
    out.blank()
    if kind is LayerKind.PROJECT:
        out.add(f"FROM {settings.base_image}")
    elif os_mod is not None and os_mod.base_image_reference:
        out.add(f"FROM {os_mod.base_image_reference}")

    for mod in mods:
        out.blank()
        out.add(_comment(mod))
        if mod.packages:
            out.switch_user(ROOT_USER)
            out.add("RUN " + install.replace("{packages}", " ".join(mod.packages)))
        if mod.root_script.strip():
            out.heredoc(ROOT_USER, mod.root_script)
        if mod.user_script.strip():
            out.heredoc(build_user, mod.user_script)

    env = merge_environment(mods)
    if env:
        out.blank()
        out.add(*(f"ENV {key}={quote_env(value)}" for key, value in env.items()))

    shell = next((mod.shell_override for mod in reversed(mods) if mod.shell_override), None)
    if shell:
        out.blank()
        out.switch_user(ROOT_USER)
        out.add(f"RUN usermod -s {shell} {build_user}", f"ENV SHELL={quote_env(shell)}")

    out.blank()
    out.add(f"USER {build_user}")
    out.add(f"WORKDIR {settings.workdir}")
    if kind is LayerKind.BASE or shell:
        out.add(f"CMD {json.dumps([shell or settings.default_shell])}")
    return out.text()


__all__ = ["EmitterSettings", "LayerKind", "emit", "merge_environment", "quote_env"]
