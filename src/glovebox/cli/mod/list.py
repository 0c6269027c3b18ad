"""
Glovebox mod list command.

SUMMARY: List available mods by category
"""

from __future__ import annotations

import argparse

from glovebox.cli import OutputFormatter, add_standard_flags, open_workspace

SUMMARY = "List available mods by category"


def register_args(parser: argparse.ArgumentParser) -> None:
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    ws = open_workspace(args)

    catalog = {}
    for category, identifiers in ws.registry.list_all().items():
        entries = []
        for identifier in identifiers:
            mod = ws.registry.load(identifier)
            entries.append(
                {
                    "id": identifier,
                    "description": mod.description,
                    "source": ws.registry.source_of(identifier),
                }
            )
        catalog[category] = entries

    if formatter.json_mode:
        formatter.json_output(catalog)
        return 0

    for category, entries in catalog.items():
        formatter.text(f"{category}:")
        for entry in entries:
            marker = "" if entry["source"] == "bundled" else "  [custom]"
            formatter.text(f"  {entry['id']:<24} {entry['description']}{marker}")
    return 0
