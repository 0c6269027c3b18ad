"""Capability map: capability name -> providers, in insertion order."""
from __future__ import annotations

from typing import Dict, Iterable, List

from glovebox.core.mods.model import Mod


def build_provides_map(mods: Iterable[Mod]) -> Dict[str, List[Mod]]:
    """Index ``mods`` under every capability they satisfy.

    Each mod is listed under its name, its explicit ``provides``, its bare
    identifier and its full identifier. Provider lists keep the order in which
    mods were given; a mod given twice (same identifier) is indexed once.
    The first provider in a list wins during resolution.
    """
    providers: Dict[str, List[Mod]] = {}
    seen: set[str] = set()
    for mod in mods:
        if mod.identifier in seen:
            continue
        seen.add(mod.identifier)
        for capability in mod.capabilities():
            providers.setdefault(capability, []).append(mod)
    return providers


__all__ = ["build_provides_map"]
