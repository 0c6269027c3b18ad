"""File access shared by the profile store, the registry and the CLI.

Profiles, configs and Dockerfiles are replaced in one step: content goes
to a sibling temp file that is flushed to disk and then renamed over the
target, so a reader never sees a half-written file.
"""
from __future__ import annotations

import fcntl
import os
import tempfile
from pathlib import Path
from typing import Callable, TextIO


def ensure_directory(path: Path) -> Path:
    """Create ``path`` (and parents) unless it is already a directory."""
    path = Path(path)
    if path.exists() and not path.is_dir():
        raise NotADirectoryError(f"not a directory: {path}")
    path.mkdir(parents=True, exist_ok=True)
    return path


def atomic_write(path: Path, write_fn: Callable[[TextIO], None], *, encoding: str = "utf-8") -> None:
    """Call ``write_fn`` on a temp file next to ``path``, then rename it into place.

    Newlines are written untranslated so the bytes on disk match what
    ``write_fn`` produced.
    """
    path = Path(path)
    ensure_directory(path.parent)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", dir=str(path.parent))
    try:
        with open(fd, "w", encoding=encoding, newline="") as handle:
            fcntl.flock(handle.fileno(), fcntl.LOCK_EX)
            write_fn(handle)
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


def read_text(path: Path) -> str:
    return Path(path).read_text(encoding="utf-8")


def write_text(path: Path, content: str) -> None:
    atomic_write(path, lambda handle: handle.write(content))


__all__ = ["ensure_directory", "atomic_write", "read_text", "write_text"]
