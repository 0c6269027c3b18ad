"""Process-wide stdlib logging setup for the CLI.

Library modules only create loggers; handlers are installed here, once.
"""
from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

from glovebox.core.utils.io import ensure_directory

_GLOVEBOX_HANDLER: logging.Handler | None = None
_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def level_from_name(name: str) -> int:
    """Map a level name (``"debug"``) to its value; unknown names mean WARNING."""
    value = logging.getLevelName(str(name).upper())
    return value if isinstance(value, int) else logging.WARNING


def configure_stdlib_logging(level: str = "WARNING", log_path: Optional[Path] = None) -> logging.Handler:
    """Install the glovebox handler on the ``glovebox`` logger.

    Logs go to stderr, or to ``log_path`` when given, so stdout stays clean
    for command output. Calling again replaces the previous handler.
    """
    global _GLOVEBOX_HANDLER

    logger = logging.getLogger("glovebox")
    if _GLOVEBOX_HANDLER is not None:
        logger.removeHandler(_GLOVEBOX_HANDLER)
        _GLOVEBOX_HANDLER.close()
        _GLOVEBOX_HANDLER = None

    if log_path is not None:
        resolved = Path(log_path).resolve()
        ensure_directory(resolved.parent)
        handler: logging.Handler = logging.FileHandler(resolved, encoding="utf-8")
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(_FORMAT))

    logger.setLevel(level_from_name(level))
    logger.addHandler(handler)
    _GLOVEBOX_HANDLER = handler
    return handler


def reset_stdlib_logging_for_tests() -> None:
    """Test-only: remove the installed handler."""
    global _GLOVEBOX_HANDLER
    if _GLOVEBOX_HANDLER is not None:
        logger = logging.getLogger("glovebox")
        logger.removeHandler(_GLOVEBOX_HANDLER)
        _GLOVEBOX_HANDLER.close()
        _GLOVEBOX_HANDLER = None
        logger.setLevel(logging.NOTSET)


__all__ = ["configure_stdlib_logging", "level_from_name", "reset_stdlib_logging_for_tests"]
