"""Compatibility checks over a resolved mod set."""
from __future__ import annotations

from typing import Optional, Sequence

from glovebox.core.exceptions import CrossOSRequirementError, MultipleOSModsError
from glovebox.core.mods.model import DEFAULT_KNOWN_OS, Mod
from glovebox.core.mods.resolver import ResolvedSet


def validate(
    resolved: ResolvedSet,
    known_os: Sequence[str] = DEFAULT_KNOWN_OS,
    inherited_os: Optional[str] = None,
) -> Optional[Mod]:
    """Check OS exclusivity and cross-OS requirements.

    ``inherited_os`` names the OS of a base image the set is layered on; it
    counts towards exclusivity like a selected OS mod.

    Returns:
        The selected OS mod, or None when the set contains no OS mod.

    Raises:
        MultipleOSModsError: more than one OS is selected.
        CrossOSRequirementError: a mod requires a different known OS.
    """
    os_mods = resolved.os_mods()
    names = [mod.identifier for mod in os_mods]
    if inherited_os is not None and os_mods:
        names.insert(0, f"{inherited_os} (base image)")
    if len(names) > 1:
        raise MultipleOSModsError(names)

    selected = os_mods[0] if os_mods else None
    selected_name = selected.name if selected is not None else inherited_os
    if selected_name is None:
        return None

    for mod in resolved:
        if mod.is_os:
            continue
        for required in mod.required_os(tuple(known_os)):
            if required != selected_name:
                raise CrossOSRequirementError(mod.identifier, required, selected_name)
    return selected


__all__ = ["validate"]
