"""Exclusion of base-image mods from a dependent (project) resolution."""
from __future__ import annotations

import logging
from typing import Iterable, Optional, Sequence

from glovebox.core.mods.model import DEFAULT_KNOWN_OS
from glovebox.core.mods.registry import ModRegistry
from glovebox.core.mods.resolver import DependencyResolver, ResolutionContext, ResolvedSet

logger = logging.getLogger(__name__)


def base_context(base: ResolvedSet) -> ResolutionContext:
    """Context that treats everything in ``base`` as already installed."""
    os_mods = base.os_mods()
    return ResolutionContext(
        satisfied_identifiers=frozenset(base.ids()),
        satisfied_capabilities=frozenset(base.capabilities()),
        selected_os=os_mods[0].name if os_mods else None,
    )


def filter_for_layer(
    registry: ModRegistry,
    requested: Iterable[str],
    base_identifiers: Iterable[str],
    *,
    known_os: Sequence[str] = DEFAULT_KNOWN_OS,
    base: Optional[ResolvedSet] = None,
) -> ResolvedSet:
    """Resolve ``requested`` on top of the closure of ``base_identifiers``.

    The base closure is resolved independently (or taken from ``base`` when
    the caller already has it). Nothing in that closure is placed again, even
    transitively.

    Example:
        base ``[os/ubuntu, tools/homebrew]`` and request ``[tools/mise]``
        (mise requires homebrew) resolve to ``[tools/mise]``.
    """
    resolver = DependencyResolver(registry, known_os)
    if base is None:
        base = resolver.resolve(base_identifiers)
    context = base_context(base)

    requested = list(requested)
    skipped = [i for i in requested if i in context.satisfied_identifiers]
    if skipped:
        logger.debug("Already in base image, skipping: %s", ", ".join(skipped))

    return resolver.resolve(requested, context)


__all__ = ["base_context", "filter_for_layer"]
