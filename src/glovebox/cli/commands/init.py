"""
Glovebox init command.

SUMMARY: Create a base or project profile

Without mods, a base profile starts from the default OS and shell; a
project profile starts empty and layers on the base image.
"""

from __future__ import annotations

import argparse

from glovebox.cli import OutputFormatter, add_base_flag, add_force_flag, add_standard_flags, open_workspace
from glovebox.core.exceptions import ProfileError
from glovebox.core.mods import check_os_compatibility, profile_os, resolve_variant

SUMMARY = "Create a base or project profile"

DEFAULT_BASE_MODS = ("os/ubuntu", "shells/bash")


def register_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("mods", nargs="*", help="Mods to start with (e.g., os/ubuntu tools/mise)")
    add_base_flag(parser)
    add_force_flag(parser)
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    ws = open_workspace(args)

    path = ws.store.global_path() if args.base else ws.store.project_path(ws.project_root)
    if path.exists() and not args.force:
        raise ProfileError(f"profile already exists at {path} (use --force to overwrite)", path=str(path))

    requested = list(args.mods) or (list(DEFAULT_BASE_MODS) if args.base else [])
    os_name = profile_os(ws.registry, requested)
    if os_name is None and not args.base:
        base = ws.store.load_global()
        os_name = profile_os(ws.registry, base.mods) if base is not None else None

    mods = []
    for requested_id in requested:
        identifier, mod = resolve_variant(ws.registry, requested_id, os_name, ws.config.known_os)
        check_os_compatibility(mod, os_name, ws.config.known_os)
        if identifier not in mods:
            mods.append(identifier)

    profile = ws.store.create(mods, is_global=args.base, project_dir=ws.project_root)
    saved = ws.store.save(profile)

    kind = "base" if args.base else "project"
    formatter.success(
        {"path": str(saved), "kind": kind, "mods": mods},
        f"Created {kind} profile at {saved}" + (f" with {', '.join(mods)}" if mods else ""),
    )
    return 0
