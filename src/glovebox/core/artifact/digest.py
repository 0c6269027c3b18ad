"""SHA-256 digests of generated artifacts.

Files on disk are hashed byte for byte so that line-ending or encoding
changes count as edits.
"""
from __future__ import annotations

import hashlib
from pathlib import Path
from typing import Optional, Union

PREFIX = "sha256:"
SHORT_LENGTH = 12


def digest_bytes(data: bytes) -> str:
    return PREFIX + hashlib.sha256(data).hexdigest()


def digest(content: Union[str, bytes]) -> str:
    """Return ``sha256:<hex>`` of ``content``; text is encoded as UTF-8."""
    if isinstance(content, bytes):
        return digest_bytes(content)
    return digest_bytes(content.encode("utf-8"))


def digest_file(path: Path) -> Optional[str]:
    """Digest of a file's raw bytes, or None when it does not exist."""
    path = Path(path)
    if not path.is_file():
        return None
    return digest_bytes(path.read_bytes())


def matches(content: Union[str, bytes], expected: Optional[str]) -> bool:
    """True when ``content`` hashes to ``expected``. A missing digest never matches."""
    if not expected:
        return False
    return digest(content) == expected


def short(value: Optional[str]) -> str:
    """First 12 hex characters of a digest, for display."""
    if not value:
        return ""
    if value.startswith(PREFIX):
        value = value[len(PREFIX):]
    return value[:SHORT_LENGTH]


__all__ = ["digest", "digest_bytes", "digest_file", "matches", "short", "PREFIX"]
