"""Generation pipeline: resolve -> validate -> (filter) -> emit."""
from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Iterable, List, Optional, Sequence

from glovebox.core.artifact import EmitterSettings, LayerKind, digest, emit
from glovebox.core.config import ConfigManager
from glovebox.core.exceptions import NoCompatibleOSProviderError, ProfileError
from glovebox.core.mods import (
    DependencyResolver,
    ModRegistry,
    ResolvedSet,
    filter_for_layer,
    validate,
)
from glovebox.core.profile import Profile

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GeneratedArtifact:
    text: str
    digest: str
    mods: List[str]
    layer_kind: LayerKind = LayerKind.BASE


class Generator:
    """Turn mod requests into Dockerfile text for base and project images."""

    def __init__(self, registry: ModRegistry, config: ConfigManager) -> None:
        self.registry = registry
        self.config = config
        self.known_os: Sequence[str] = config.known_os
        self.settings = EmitterSettings.from_config(config)

    def resolve(self, mod_ids: Iterable[str]) -> ResolvedSet:
        return DependencyResolver(self.registry, self.known_os).resolve(mod_ids)

    def generate_base(self, mod_ids: Iterable[str], *, allow_no_os: bool = False) -> GeneratedArtifact:
        """Dockerfile for a standalone image starting from an OS image.

        Raises:
            NoCompatibleOSProviderError: no OS mod was selected and
                ``allow_no_os`` is False.
        """
        resolved = self.resolve(mod_ids)
        os_mod = validate(resolved, self.known_os)
        if os_mod is None and not allow_no_os:
            raise NoCompatibleOSProviderError("", "base", selected_os=None)
        text = emit(resolved, LayerKind.BASE, os_mod, self.settings)
        return self._artifact(text, resolved, LayerKind.BASE)

    def generate_project(
        self,
        mod_ids: Iterable[str],
        base_mod_ids: Iterable[str],
        *,
        base_image: Optional[str] = None,
    ) -> GeneratedArtifact:
        """Dockerfile for an image layered on the base image.

        Mods already in the base closure are left out, and the base's OS mod
        drives package installation and the build user. ``base_image`` is the
        tag to build ``FROM``; it defaults to the configured base image name.
        """
        base = self.resolve(base_mod_ids)
        base_os = validate(base, self.known_os)
        resolved = filter_for_layer(self.registry, mod_ids, (), known_os=self.known_os, base=base)
        validate(resolved, self.known_os, inherited_os=base_os.name if base_os is not None else None)
        settings = replace(self.settings, base_image=base_image) if base_image else self.settings
        text = emit(resolved, LayerKind.PROJECT, base_os, settings)
        return self._artifact(text, resolved, LayerKind.PROJECT)

    def generate_for(self, profile: Profile, base_profile: Optional[Profile] = None) -> GeneratedArtifact:
        """Generate for a stored profile; project profiles need the base profile."""
        if profile.is_global:
            return self.generate_base(profile.mods)
        if base_profile is None:
            raise ProfileError(
                "project profile requires a base profile; run 'glovebox init --base' first",
                path=str(profile.path) if profile.path else None,
            )
        base_image = base_profile.image_name(
            str(self.config.get("image.repository")),
            str(self.config.get("image.base_tag")),
        )
        return self.generate_project(profile.mods, base_profile.mods, base_image=base_image)

    def _artifact(self, text: str, resolved: ResolvedSet, kind: LayerKind) -> GeneratedArtifact:
        logger.debug("Generated %s artifact for %s", kind.value, resolved.ids())
        return GeneratedArtifact(text=text, digest=digest(text), mods=resolved.ids(), layer_kind=kind)


__all__ = ["GeneratedArtifact", "Generator"]
