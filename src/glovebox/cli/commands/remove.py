"""
Glovebox remove command.

SUMMARY: Remove a mod from your profile
"""

from __future__ import annotations

import argparse

from glovebox.cli import OutputFormatter, add_base_flag, add_standard_flags, open_workspace
from glovebox.core.exceptions import ProfileError

SUMMARY = "Remove a mod from your profile"


def register_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("mod", help="Mod identifier to remove")
    add_base_flag(parser)
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    ws = open_workspace(args)
    profile = ws.require_profile(args.base)

    if not profile.remove_mod(args.mod):
        raise ProfileError(
            f"mod '{args.mod}' is not in the profile at {profile.path}",
            path=str(profile.path) if profile.path else None,
        )

    ws.store.save(profile)
    formatter.success(
        {"mod": args.mod, "removed": True, "path": str(profile.path)},
        f"✓ Removed '{args.mod}' from profile",
    )
    return 0
