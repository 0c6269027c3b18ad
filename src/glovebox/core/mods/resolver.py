"""Dependency resolution for mod sets.

Requested identifiers are expanded into a dependency-ordered list: every
requirement is satisfied either by a mod already placed, by the resolution
context (a base image), or by resolving the first compatible provider from
the capability map. A mod is placed only after all of its requirements, so
providers always precede the mods that need them.

Ordering rules:
- requests are processed ``os`` mods first, then by identifier; the order a
  user listed mods in never changes the result
- providers are tried requested mods first, then registry listing order
- without a requested ``os`` mod, an OS named in a requested mod's
  ``requires`` is selected and placed first
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Iterable, Iterator, List, Optional, Sequence, Set, Tuple

from glovebox.core.exceptions import (
    CycleDetectedError,
    ModDefinitionError,
    NoCompatibleOSProviderError,
    UnsatisfiedRequirementError,
)
from glovebox.core.mods.capabilities import build_provides_map
from glovebox.core.mods.model import DEFAULT_KNOWN_OS, Mod
from glovebox.core.mods.registry import ModRegistry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolutionContext:
    """What a resolution run may treat as already present.

    Used for dependent images: everything the base image contains is
    satisfied, and the base's OS is the selected OS.
    """

    satisfied_identifiers: FrozenSet[str] = frozenset()
    satisfied_capabilities: FrozenSet[str] = frozenset()
    selected_os: Optional[str] = None


@dataclass(frozen=True)
class ResolvedSet:
    """Mods in dependency order, without duplicate identifiers."""

    mods: Tuple[Mod, ...] = ()

    def __iter__(self) -> Iterator[Mod]:
        return iter(self.mods)

    def __len__(self) -> int:
        return len(self.mods)

    def __contains__(self, identifier: object) -> bool:
        return identifier in self.ids()

    def ids(self) -> List[str]:
        return [mod.identifier for mod in self.mods]

    def os_mods(self) -> List[Mod]:
        return [mod for mod in self.mods if mod.is_os]

    def capabilities(self) -> Set[str]:
        caps: Set[str] = set()
        for mod in self.mods:
            caps.update(mod.capabilities())
        return caps


@dataclass
class _Run:
    providers: Dict[str, List[Mod]]
    context: ResolutionContext
    selected_os: Optional[str]
    placed: Dict[str, Mod] = field(default_factory=dict)
    satisfied: Set[str] = field(default_factory=set)
    in_progress: List[str] = field(default_factory=list)


class DependencyResolver:
    """Expand requested mod identifiers into a :class:`ResolvedSet`."""

    def __init__(self, registry: ModRegistry, known_os: Sequence[str] = DEFAULT_KNOWN_OS) -> None:
        self.registry = registry
        self.known_os: Tuple[str, ...] = tuple(known_os)

    def resolve(self, identifiers: Iterable[str], context: Optional[ResolutionContext] = None) -> ResolvedSet:
        """Resolve ``identifiers`` and their transitive requirements.

        Raises:
            ModNotFoundError: a requested identifier has no definition.
            UnsatisfiedRequirementError: nothing provides a required capability.
            CycleDetectedError: a requirement chain loops back on itself.
            NoCompatibleOSProviderError: every provider targets another OS.
        """
        context = context or ResolutionContext()
        requested = self._canonical(
            [i for i in dict.fromkeys(identifiers) if i not in context.satisfied_identifiers]
        )

        selected_os = context.selected_os
        named_os = None
        if selected_os is None:
            selected_os = next((mod.name for mod in requested if mod.is_os), None)
        if selected_os is None:
            named_os = selected_os = self._named_os(requested)

        run = _Run(
            providers=build_provides_map(self._provider_pool(requested)),
            context=context,
            selected_os=selected_os,
            satisfied=set(context.satisfied_capabilities) | set(context.satisfied_identifiers),
        )
        if named_os is not None:
            # A requested mod names its OS: place that OS before anything else.
            os_mod = next((p for p in run.providers.get(named_os, []) if p.is_os), None)
            if os_mod is not None:
                logger.debug("Selected OS %s from requirements of the requested mods", os_mod.identifier)
                self._visit(run, os_mod)
        for mod in requested:
            self._visit(run, mod)

        resolved = ResolvedSet(tuple(run.placed.values()))
        logger.debug("Resolved %s -> %s", [m.identifier for m in requested], resolved.ids())
        return resolved

    def _canonical(self, identifiers: List[str]) -> List[Mod]:
        mods = [self.registry.load(identifier) for identifier in identifiers]
        return sorted(mods, key=lambda mod: (not mod.is_os, mod.identifier))

    def _named_os(self, requested: List[Mod]) -> Optional[str]:
        """First known OS that a requested mod requires directly, if any."""
        for mod in requested:
            for name in mod.required_os(self.known_os):
                return name
        return None

    def _provider_pool(self, requested: List[Mod]) -> List[Mod]:
        """Requested mods, then every listed mod that loads cleanly.

        Unrequested definitions that fail to load are logged and left out of
        the capability map; requesting one still raises.
        """
        pool = list(requested)
        wanted = {mod.identifier for mod in requested}
        for identifier in self.registry.identifiers():
            if identifier in wanted:
                continue
            try:
                pool.append(self.registry.load(identifier))
            except ModDefinitionError as exc:
                logger.warning("Skipping mod %s: %s", identifier, exc)
        return pool

    def _visit(self, run: _Run, mod: Mod) -> None:
        if mod.identifier in run.placed or mod.identifier in run.context.satisfied_identifiers:
            return
        run.in_progress.append(mod.identifier)
        for capability in mod.requires:
            if capability in run.satisfied:
                continue
            if self._names_other_os(run, capability):
                # Reported by the compatibility validator.
                continue
            provider = self._pick_provider(run, mod, capability)
            if provider.identifier in run.in_progress:
                chain = run.in_progress[run.in_progress.index(provider.identifier):]
                raise CycleDetectedError(mod.identifier, capability, [*chain, provider.identifier])
            self._visit(run, provider)
        run.in_progress.pop()
        self._place(run, mod)

    def _place(self, run: _Run, mod: Mod) -> None:
        run.placed[mod.identifier] = mod
        run.satisfied.update(mod.capabilities())
        if mod.is_os and run.selected_os is None:
            run.selected_os = mod.name

    def _names_other_os(self, run: _Run, capability: str) -> bool:
        return (
            run.selected_os is not None
            and capability in self.known_os
            and capability != run.selected_os
        )

    def _compatible(self, run: _Run, candidate: Mod) -> bool:
        if run.selected_os is None:
            return True
        if candidate.is_os and candidate.name != run.selected_os:
            return False
        return all(req == run.selected_os for req in candidate.required_os(self.known_os))

    def _pick_provider(self, run: _Run, mod: Mod, capability: str) -> Mod:
        candidates = run.providers.get(capability, [])
        if not candidates:
            raise UnsatisfiedRequirementError(mod.identifier, capability)
        for candidate in candidates:
            if self._compatible(run, candidate):
                if len(candidates) > 1:
                    logger.debug(
                        "Capability %s for %s: chose %s from %s",
                        capability,
                        mod.identifier,
                        candidate.identifier,
                        [c.identifier for c in candidates],
                    )
                return candidate
        raise NoCompatibleOSProviderError(
            mod.identifier,
            capability,
            selected_os=run.selected_os,
            candidates=[c.identifier for c in candidates],
        )


def resolve(
    registry: ModRegistry,
    identifiers: Iterable[str],
    context: Optional[ResolutionContext] = None,
    *,
    known_os: Sequence[str] = DEFAULT_KNOWN_OS,
) -> ResolvedSet:
    """Shortcut for ``DependencyResolver(registry, known_os).resolve(...)``."""
    return DependencyResolver(registry, known_os).resolve(identifiers, context)


__all__ = ["DependencyResolver", "ResolutionContext", "ResolvedSet", "resolve"]
