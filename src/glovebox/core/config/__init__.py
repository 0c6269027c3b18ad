"""Layered YAML configuration."""
from __future__ import annotations

from .manager import ConfigManager

__all__ = ["ConfigManager"]
