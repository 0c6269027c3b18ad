"""
Glovebox generate command.

SUMMARY: Generate the Dockerfile for your profile

Writes the Dockerfile next to the profile and records its digest. A
Dockerfile edited by hand since it was generated is only overwritten with
--force.
"""

from __future__ import annotations

import argparse

from glovebox.cli import OutputFormatter, add_base_flag, add_force_flag, add_standard_flags, open_workspace
from glovebox.core.artifact import check_artifact, short
from glovebox.core.artifact.status import MANUALLY_EDITED
from glovebox.core.exceptions import ProfileError
from glovebox.core.utils.io import write_text

SUMMARY = "Generate the Dockerfile for your profile"


def register_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--stdout",
        action="store_true",
        help="Print the Dockerfile instead of writing it",
    )
    add_base_flag(parser)
    add_force_flag(parser)
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    ws = open_workspace(args)
    profile = ws.require_profile(args.base)
    base_profile = None if profile.is_global else ws.store.load_global()

    artifact = ws.generator().generate_for(profile, base_profile)
    if args.stdout:
        if formatter.json_mode:
            formatter.json_output({"digest": artifact.digest, "mods": artifact.mods, "text": artifact.text})
        else:
            print(artifact.text, end="")
        return 0

    path = profile.artifact_path(ws.artifact_file)
    if path is None:
        raise ProfileError("profile has no location; cannot place the Dockerfile")

    current = path.read_bytes() if path.is_file() else None
    status = check_artifact(profile, current, artifact.text)
    if status.state == MANUALLY_EDITED and not args.force:
        raise ProfileError(
            f"{path} was edited since it was generated; use --force to overwrite",
            path=str(path),
        )

    write_text(path, artifact.text)
    base_digest = None if profile.is_global else ws.base_artifact_digest()
    profile.update_build_info(artifact.digest, base_digest=base_digest)
    ws.store.save(profile)

    formatter.success(
        {
            "path": str(path),
            "digest": artifact.digest,
            "mods": artifact.mods,
            "image": profile.image_name(str(ws.config.get("image.repository")), str(ws.config.get("image.base_tag"))),
        },
        f"✓ Wrote {path} ({short(artifact.digest)})\n  mods: {', '.join(artifact.mods) or '(none)'}",
    )
    return 0
