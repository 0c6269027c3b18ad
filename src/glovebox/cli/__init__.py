"""
Glovebox CLI package.

Commands are discovered automatically: top-level commands live in
``cli/commands``; every other subfolder is a command domain
(``cli/mod`` => ``glovebox mod <command>``).

Helpers for command modules:
- _output: Output formatting (JSON/text modes)
- _args: Common argument registration helpers
- _utils: Project root lookup and per-invocation services
"""
from ._output import OutputFormatter
from ._args import (
    add_base_flag,
    add_force_flag,
    add_json_flag,
    add_project_dir_flag,
    add_standard_flags,
    add_verbose_flag,
)
from ._utils import Workspace, get_project_root, open_workspace

__all__ = [
    # Output formatting
    "OutputFormatter",
    # Argument helpers
    "add_json_flag",
    "add_project_dir_flag",
    "add_base_flag",
    "add_force_flag",
    "add_verbose_flag",
    "add_standard_flags",
    # Utilities
    "Workspace",
    "get_project_root",
    "open_workspace",
]
