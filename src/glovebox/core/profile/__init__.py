"""Profiles: the persisted declaration of an image's mods."""
from __future__ import annotations

from .model import BuildInfo, Profile, PROFILE_VERSION
from .store import ProfileStore

__all__ = ["BuildInfo", "Profile", "ProfileStore", "PROFILE_VERSION"]
