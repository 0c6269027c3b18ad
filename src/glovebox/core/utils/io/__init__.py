"""File I/O helpers: atomic text writes and locked YAML access."""
from __future__ import annotations

from .core import atomic_write, ensure_directory, read_text, write_text
from .yaml import read_yaml, write_yaml

__all__ = [
    "atomic_write",
    "ensure_directory",
    "read_text",
    "write_text",
    "read_yaml",
    "write_yaml",
]
