"""
Glovebox add command.

SUMMARY: Add a mod to your profile

OS-specific mods can be named without their suffix: on an ubuntu profile
``editors/vim`` adds ``editors/vim-ubuntu``.
"""

from __future__ import annotations

import argparse

from glovebox.cli import OutputFormatter, add_base_flag, add_standard_flags, open_workspace
from glovebox.core.exceptions import CrossOSRequirementError
from glovebox.core.mods import check_os_compatibility, resolve_variant, suggest_variant

SUMMARY = "Add a mod to your profile"


def register_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("mod", help="Mod identifier (e.g., shells/fish, ai/claude-code)")
    add_base_flag(parser)
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    ws = open_workspace(args)
    profile = ws.require_profile(args.base)
    os_name = ws.os_name_for(profile)
    known_os = ws.config.known_os

    identifier, mod = resolve_variant(ws.registry, args.mod, os_name, known_os)
    try:
        check_os_compatibility(mod, os_name, known_os)
    except CrossOSRequirementError as exc:
        suggestion = suggest_variant(ws.registry, args.mod, os_name, known_os)
        if suggestion is None:
            raise
        formatter.error(exc, f"{exc}\nDid you mean '{suggestion}'?")
        return 1

    if not profile.add_mod(identifier):
        formatter.success(
            {"mod": identifier, "added": False, "path": str(profile.path)},
            f"Mod '{identifier}' is already in your profile.",
        )
        return 0

    ws.store.save(profile)
    formatter.success(
        {"mod": identifier, "added": True, "path": str(profile.path)},
        f"✓ Added '{identifier}' to profile\n\nRun 'glovebox generate' to regenerate your Dockerfile.",
    )
    return 0
