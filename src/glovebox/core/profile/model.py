"""Profile data model.

A profile declares the mods an image should contain. The global profile
(in the user directory) describes the shared base image; a project profile
(in ``<project>/.glovebox``) describes an image layered on top of it.

``build`` metadata is written by generation only. ``content_hash`` covers
the user-editable fields so edits made outside glovebox can be detected.
"""
from __future__ import annotations

import hashlib
import json
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

from glovebox.core.utils.time import normalize_timestamp, utc_timestamp

PROFILE_VERSION = 1
CONTENT_HASH_LENGTH = 12


@dataclass
class BuildInfo:
    last_built_at: Optional[str] = None
    artifact_digest: Optional[str] = None
    content_hash: Optional[str] = None
    image_name: Optional[str] = None
    base_digest: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            key: value
            for key, value in {
                "last_built_at": self.last_built_at,
                "artifact_digest": self.artifact_digest,
                "content_hash": self.content_hash,
                "image_name": self.image_name,
                "base_digest": self.base_digest,
            }.items()
            if value
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "BuildInfo":
        data = data or {}
        return cls(
            last_built_at=normalize_timestamp(data.get("last_built_at")),
            artifact_digest=data.get("artifact_digest") or None,
            content_hash=data.get("content_hash") or None,
            image_name=data.get("image_name") or None,
            base_digest=data.get("base_digest") or None,
        )


@dataclass
class Profile:
    version: int = PROFILE_VERSION
    mods: List[str] = field(default_factory=list)
    passthrough_env: List[str] = field(default_factory=list)
    build: BuildInfo = field(default_factory=BuildInfo)
    path: Optional[Path] = None
    is_global: bool = False

    # ---------- serialization ----------

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"version": self.version, "mods": list(self.mods)}
        if self.passthrough_env:
            data["passthrough_env"] = list(self.passthrough_env)
        build = self.build.to_dict()
        if build:
            data["build"] = build
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any], *, path: Optional[Path] = None, is_global: bool = False) -> "Profile":
        return cls(
            version=int(data.get("version") or PROFILE_VERSION),
            mods=[str(m) for m in data.get("mods") or []],
            passthrough_env=[str(e) for e in data.get("passthrough_env") or []],
            build=BuildInfo.from_dict(data.get("build")),
            path=path,
            is_global=is_global,
        )

    # ---------- mod list ----------

    def has_mod(self, identifier: str) -> bool:
        return identifier in self.mods

    def add_mod(self, identifier: str) -> bool:
        """Append ``identifier``; returns False when it was already present."""
        if self.has_mod(identifier):
            return False
        self.mods.append(identifier)
        return True

    def remove_mod(self, identifier: str) -> bool:
        """Remove ``identifier``; returns False when it was not present."""
        if not self.has_mod(identifier):
            return False
        self.mods.remove(identifier)
        return True

    # ---------- build metadata ----------

    def update_build_info(
        self,
        artifact_digest: str,
        *,
        base_digest: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> None:
        """Record a successful artifact generation."""
        self.build.artifact_digest = artifact_digest
        self.build.base_digest = base_digest
        self.build.last_built_at = utc_timestamp(now)

    def compute_content_hash(self) -> str:
        """Hash of the editable fields (version, mods, passthrough_env)."""
        payload = json.dumps(
            {
                "version": self.version,
                "mods": list(self.mods),
                "passthrough_env": list(self.passthrough_env),
            },
            sort_keys=True,
            separators=(",", ":"),
        )
        return hashlib.sha256(payload.encode("utf-8")).hexdigest()[:CONTENT_HASH_LENGTH]

    def update_content_hash(self) -> None:
        self.build.content_hash = self.compute_content_hash()

    def was_manually_edited(self) -> bool:
        """True when the stored content hash no longer matches the fields."""
        if not self.build.content_hash:
            return False
        return self.build.content_hash != self.compute_content_hash()

    # ---------- naming ----------

    def project_root(self) -> Optional[Path]:
        """Directory the profile belongs to (parent of its ``.glovebox`` dir)."""
        if self.path is None or self.is_global:
            return None
        return Path(self.path).resolve().parent.parent

    def image_name(self, repository: str = "glovebox", base_tag: str = "base") -> str:
        """Image tag for this profile.

        An explicit ``build.image_name`` wins; the global profile builds
        ``<repository>:<base_tag>``; a project builds
        ``<repository>:<dirname>-<first 7 hex of sha256(abs path)>``.
        """
        if self.build.image_name:
            return self.build.image_name
        root = self.project_root()
        if root is None:
            return f"{repository}:{base_tag}"
        short = hashlib.sha256(str(root).encode("utf-8")).hexdigest()[:7]
        return f"{repository}:{root.name}-{short}"

    def artifact_path(self, artifact_file: str = "Dockerfile") -> Optional[Path]:
        """Path of the generated artifact next to the profile file."""
        if self.path is None:
            return None
        return Path(self.path).parent / artifact_file


__all__ = ["BuildInfo", "Profile", "PROFILE_VERSION", "CONTENT_HASH_LENGTH"]
