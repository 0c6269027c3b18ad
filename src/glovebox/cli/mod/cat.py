"""
Glovebox mod cat command.

SUMMARY: Print a mod's definition
"""

from __future__ import annotations

import argparse

from glovebox.cli import OutputFormatter, add_standard_flags, open_workspace

SUMMARY = "Print a mod's definition"


def register_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("mod", help="Mod identifier (e.g., tools/mise)")
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    ws = open_workspace(args)
    text, source = ws.registry.load_raw(args.mod)

    if formatter.json_mode:
        formatter.json_output({"id": args.mod, "source": source, "content": text})
        return 0

    formatter.text(f"# source: {source}")
    print(text, end="" if text.endswith("\n") else "\n")
    return 0
