"""
Glovebox mod resolve command.

SUMMARY: Show the dependency order for a set of mods

With --on-base, mods already in the global base profile are left out, as
they would be for a project image.
"""

from __future__ import annotations

import argparse

from glovebox.cli import OutputFormatter, add_standard_flags, open_workspace
from glovebox.core.exceptions import ProfileError
from glovebox.core.mods import DependencyResolver, filter_for_layer, profile_os, validate

SUMMARY = "Show the dependency order for a set of mods"


def register_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("mods", nargs="+", help="Mod identifiers to resolve")
    parser.add_argument(
        "--on-base",
        action="store_true",
        help="Resolve as a project layered on the global base profile",
    )
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    ws = open_workspace(args)
    known_os = ws.config.known_os

    inherited_os = None
    if args.on_base:
        base_profile = ws.store.load_global()
        if base_profile is None:
            raise ProfileError("no base profile found; run 'glovebox init --base' first")
        resolved = filter_for_layer(ws.registry, args.mods, base_profile.mods, known_os=known_os)
        inherited_os = profile_os(ws.registry, base_profile.mods)
    else:
        resolved = DependencyResolver(ws.registry, known_os).resolve(args.mods)

    os_mod = validate(resolved, known_os, inherited_os=inherited_os)
    selected = os_mod.name if os_mod is not None else inherited_os

    if formatter.json_mode:
        formatter.json_output({"requested": list(args.mods), "resolved": resolved.ids(), "os": selected})
        return 0

    for position, identifier in enumerate(resolved.ids(), start=1):
        formatter.text(f"{position:>3}. {identifier}")
    formatter.text_kv("os", selected or "(none)", prefix="")
    return 0
