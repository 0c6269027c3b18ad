"""Dockerfile emission and drift tracking."""
from __future__ import annotations

from .digest import digest, digest_bytes, digest_file, matches, short
from .emitter import EmitterSettings, LayerKind, emit, merge_environment
from .status import ArtifactStatus, check_artifact

__all__ = [
    "ArtifactStatus",
    "EmitterSettings",
    "LayerKind",
    "check_artifact",
    "digest",
    "digest_bytes",
    "digest_file",
    "emit",
    "matches",
    "merge_environment",
    "short",
]
