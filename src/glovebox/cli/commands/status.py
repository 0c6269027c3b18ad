"""
Glovebox status command.

SUMMARY: Check whether the Dockerfile matches your profile
"""

from __future__ import annotations

import argparse

from glovebox.cli import OutputFormatter, add_base_flag, add_standard_flags, open_workspace
from glovebox.core.artifact import check_artifact, short
from glovebox.core.artifact.status import UP_TO_DATE

SUMMARY = "Check whether the Dockerfile matches your profile"


def register_args(parser: argparse.ArgumentParser) -> None:
    add_base_flag(parser)
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    ws = open_workspace(args)
    profile = ws.require_profile(args.base)
    base_profile = None if profile.is_global else ws.store.load_global()

    expected = ws.generator().generate_for(profile, base_profile)
    path = profile.artifact_path(ws.artifact_file)
    current = path.read_bytes() if path is not None and path.is_file() else None
    base_digest = None if profile.is_global else ws.base_artifact_digest()

    status = check_artifact(profile, current, expected.text, base_digest=base_digest)

    if formatter.json_mode:
        formatter.json_output({"path": str(path), **status.to_dict()})
        return 0

    formatter.text(f"Dockerfile: {path}")
    formatter.text_kv("state", status.state)
    if status.recorded_digest:
        formatter.text_kv("recorded", short(status.recorded_digest))
    if status.current_digest:
        formatter.text_kv("on disk", short(status.current_digest))
    for note in status.messages():
        formatter.text(f"  ! {note}")
    if status.needs_regeneration:
        formatter.text("Run 'glovebox generate' to bring it up to date.")
    elif status.state == UP_TO_DATE and not status.messages():
        formatter.text("Everything is up to date.")
    return 0
