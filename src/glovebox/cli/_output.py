"""CLI output formatting (text and JSON modes)."""
from __future__ import annotations

import json
import sys
from typing import Any, Dict, Optional

from glovebox.core.exceptions import GloveboxError


class OutputFormatter:
    """Unified output formatter for CLI commands."""

    def __init__(self, json_mode: bool = False, indent: int = 2):
        self.json_mode = json_mode
        self.indent = indent

    def success(
        self,
        data: Dict[str, Any],
        message: str,
        *,
        status: str = "success",
    ) -> None:
        """Print ``message`` in text mode, or ``data`` with a status in JSON mode."""
        if self.json_mode:
            output = {"status": status, **data}
            print(json.dumps(output, indent=self.indent, default=str))
        else:
            print(message)

    def error(self, error: Exception, message: Optional[str] = None) -> None:
        """Report ``error`` on stderr.

        Glovebox errors carry their class name and context into JSON output.
        """
        msg = message or str(error)
        if self.json_mode:
            if isinstance(error, GloveboxError):
                output = {**error.to_json_error(), "message": msg}
            else:
                output = {"message": msg, "code": type(error).__name__, "context": {}}
            print(json.dumps({"error": output}, indent=self.indent, default=str), file=sys.stderr)
        else:
            print(f"Error: {msg}", file=sys.stderr)

    def json_output(self, data: Any) -> None:
        print(json.dumps(data, indent=self.indent, default=str))

    def text(self, message: str) -> None:
        if not self.json_mode:
            print(message)

    def text_kv(self, key: str, value: Any, prefix: str = "  ") -> None:
        if not self.json_mode:
            print(f"{prefix}{key}: {value}")


__all__ = ["OutputFormatter"]
