"""Deep merge for layered configuration documents.

Later layers override earlier ones:
- mappings merge recursively
- lists replace, unless the override list starts with ``"+"`` (append)
- anything else is replaced
"""
from __future__ import annotations

from typing import Any, Dict, List


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge ``override`` onto ``base`` without mutating either.

    Example:
        >>> deep_merge({"os": {"known": ["ubuntu"]}}, {"os": {"known": ["+", "arch"]}})
        {'os': {'known': ['ubuntu', 'arch']}}
    """
    result: Dict[str, Any] = dict(base)
    for key, value in (override or {}).items():
        current = result.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            result[key] = deep_merge(current, value)
        elif isinstance(current, list) and isinstance(value, list):
            result[key] = merge_lists(current, value)
        else:
            result[key] = value
    return result


def merge_lists(base: List[Any], override: List[Any]) -> List[Any]:
    """Replace ``base`` with ``override`` unless the override opts into appending."""
    if override and override[0] == "+":
        return [*base, *override[1:]]
    return list(override)


__all__ = ["deep_merge", "merge_lists"]
