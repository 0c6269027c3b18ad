"""
Glovebox list command.

SUMMARY: Show the mods in your profile
"""

from __future__ import annotations

import argparse

from glovebox.cli import OutputFormatter, add_base_flag, add_standard_flags, open_workspace

SUMMARY = "Show the mods in your profile"


def register_args(parser: argparse.ArgumentParser) -> None:
    add_base_flag(parser)
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    ws = open_workspace(args)
    profile = ws.require_profile(args.base)

    repository = str(ws.config.get("image.repository"))
    base_tag = str(ws.config.get("image.base_tag"))
    data = {
        "path": str(profile.path),
        "kind": "base" if profile.is_global else "project",
        "image": profile.image_name(repository, base_tag),
        "mods": list(profile.mods),
        "passthrough_env": ws.store.effective_passthrough_env(ws.project_root),
    }
    if formatter.json_mode:
        formatter.json_output(data)
        return 0

    formatter.text(f"Profile: {data['path']} ({data['kind']})")
    formatter.text_kv("image", data["image"])
    formatter.text("Mods:")
    for identifier in profile.mods:
        formatter.text(f"  - {identifier}")
    if not profile.mods:
        formatter.text("  (none)")
    if data["passthrough_env"]:
        formatter.text_kv("passthrough env", ", ".join(data["passthrough_env"]))
    return 0
