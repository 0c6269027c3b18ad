"""Common CLI argument registration helpers."""
from __future__ import annotations

import argparse


def add_json_flag(parser: argparse.ArgumentParser) -> None:
    """Add --json flag for JSON output mode."""
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output as JSON",
    )


def add_project_dir_flag(parser: argparse.ArgumentParser) -> None:
    """Add --project-dir flag (defaults to the current directory)."""
    parser.add_argument(
        "--project-dir",
        type=str,
        help="Project directory (default: current directory)",
    )


def add_base_flag(parser: argparse.ArgumentParser) -> None:
    """Add --base flag to target the global (base image) profile."""
    parser.add_argument(
        "--base",
        action="store_true",
        help="Operate on the global base profile instead of the project profile",
    )


def add_force_flag(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--force",
        "-f",
        action="store_true",
        help="Overwrite without asking",
    )


def add_verbose_flag(parser: argparse.ArgumentParser) -> None:
    """Add --verbose flag (DEBUG logging to stderr)."""
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging",
    )


def add_standard_flags(parser: argparse.ArgumentParser) -> None:
    """Add the flags every command accepts: --json, --project-dir, --verbose."""
    add_json_flag(parser)
    add_project_dir_flag(parser)
    add_verbose_flag(parser)


__all__ = [
    "add_json_flag",
    "add_project_dir_flag",
    "add_base_flag",
    "add_force_flag",
    "add_verbose_flag",
    "add_standard_flags",
]
