"""OS-specific mod variants (``shells/zsh`` -> ``shells/zsh-ubuntu``)."""
from __future__ import annotations

from typing import Iterable, Optional, Sequence, Tuple

from glovebox.core.exceptions import CrossOSRequirementError, ModNotFoundError
from glovebox.core.mods.model import DEFAULT_KNOWN_OS, Mod
from glovebox.core.mods.registry import ModRegistry


def variant_identifier(identifier: str, os_name: str) -> str:
    return f"{identifier}-{os_name}"


def resolve_variant(
    registry: ModRegistry,
    identifier: str,
    os_name: Optional[str],
    known_os: Sequence[str] = DEFAULT_KNOWN_OS,
) -> Tuple[str, Mod]:
    """Find ``identifier`` or its variant for ``os_name``.

    The exact identifier wins. Otherwise ``<identifier>-<os_name>`` is tried.

    Raises:
        ModNotFoundError: neither exists; the message lists the OSes that do
            have a variant, if any.
    """
    if registry.exists(identifier):
        return identifier, registry.load(identifier)

    if os_name:
        candidate = variant_identifier(identifier, os_name)
        if registry.exists(candidate):
            return candidate, registry.load(candidate)

    available = [name for name in known_os if registry.exists(variant_identifier(identifier, name))]
    if available:
        message = f"mod not found: {identifier} (available for: {', '.join(available)})"
        if os_name:
            message = f"mod {identifier} is not available for {os_name} (available for: {', '.join(available)})"
        raise ModNotFoundError(identifier, message)
    raise ModNotFoundError(identifier)


def check_os_compatibility(mod: Mod, os_name: Optional[str], known_os: Sequence[str] = DEFAULT_KNOWN_OS) -> None:
    """Raise CrossOSRequirementError if ``mod`` requires a known OS other than ``os_name``."""
    if not os_name:
        return
    for required in mod.required_os(tuple(known_os)):
        if required != os_name:
            raise CrossOSRequirementError(mod.identifier, required, os_name)


def suggest_variant(
    registry: ModRegistry,
    identifier: str,
    os_name: Optional[str],
    known_os: Sequence[str] = DEFAULT_KNOWN_OS,
) -> Optional[str]:
    """Suggest the ``os_name`` counterpart of a mod meant for another OS.

    ``shells/zsh-fedora`` on ubuntu suggests ``shells/zsh-ubuntu``; a bare
    ``zsh`` is looked up in every listed category.
    """
    if not os_name:
        return None
    for other in known_os:
        suffix = f"-{other}"
        if other != os_name and identifier.endswith(suffix):
            candidate = variant_identifier(identifier[: -len(suffix)], os_name)
            if registry.exists(candidate):
                return candidate
    if "/" not in identifier:
        for category in registry.list_all():
            for candidate in (variant_identifier(f"{category}/{identifier}", os_name), f"{category}/{identifier}"):
                if registry.exists(candidate):
                    return candidate
    return None


def profile_os(registry: ModRegistry, identifiers: Iterable[str]) -> Optional[str]:
    """Name of the first ``os`` mod among ``identifiers``, if any."""
    for identifier in identifiers:
        if not registry.exists(identifier):
            continue
        mod = registry.load(identifier)
        if mod.is_os:
            return mod.name
    return None


__all__ = ["check_os_compatibility", "profile_os", "resolve_variant", "suggest_variant", "variant_identifier"]
