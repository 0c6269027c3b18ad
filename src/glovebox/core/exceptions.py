from __future__ import annotations

from typing import Any, Dict, Iterable, Mapping


class GloveboxError(Exception):
    """Base exception for Glovebox."""

    context: Dict[str, Any]

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        super().__init__(message)
        if context is not None:
            # Store a shallow copy to avoid accidental mutation.
            self.context = dict(context)
        else:
            self.context = {}

    def to_json_error(self) -> Dict[str, Any]:
        """Return a JSON-serializable error payload."""
        return {
            "message": str(self),
            "code": self.__class__.__name__,
            "context": self.context,
        }


class ConfigError(GloveboxError, ValueError):
    """Raised when the merged configuration is invalid."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        GloveboxError.__init__(self, message, context=context)
        ValueError.__init__(self, message)


class InvalidIdentifierError(GloveboxError, ValueError):
    """Raised for identifiers that could escape the mod search roots."""

    def __init__(self, identifier: str, reason: str) -> None:
        message = f"invalid mod id: {identifier} ({reason})"
        GloveboxError.__init__(self, message, context={"identifier": identifier, "reason": reason})
        ValueError.__init__(self, message)
        self.identifier = identifier


class ModNotFoundError(GloveboxError, LookupError):
    """Raised when no search root has a definition for an identifier."""

    def __init__(self, identifier: str, message: str | None = None, *, searched: Iterable[str] = ()) -> None:
        message = message or f"mod not found: {identifier}"
        ctx: Dict[str, Any] = {"identifier": identifier}
        searched = [str(s) for s in searched]
        if searched:
            ctx["searched"] = searched
        GloveboxError.__init__(self, message, context=ctx)
        LookupError.__init__(self, message)
        self.identifier = identifier


class ModDefinitionError(GloveboxError):
    """Raised when a mod document cannot be parsed or fails schema validation."""

    def __init__(self, identifier: str, source: str, details: str) -> None:
        super().__init__(
            f"parsing mod {identifier} ({source}): {details}",
            context={"identifier": identifier, "source": source, "details": details},
        )
        self.identifier = identifier


class UnsatisfiedRequirementError(GloveboxError):
    """Raised when nothing provides a capability a mod requires."""

    def __init__(self, mod_id: str, capability: str, message: str | None = None, **extra: Any) -> None:
        message = message or f"mod {mod_id!r} requires {capability!r}, but nothing provides it"
        super().__init__(message, context={"mod": mod_id, "capability": capability, **extra})
        self.mod_id = mod_id
        self.capability = capability


class CycleDetectedError(UnsatisfiedRequirementError):
    """Raised when a requirement chain loops back to a mod still being resolved."""

    def __init__(self, mod_id: str, capability: str, chain: Iterable[str]) -> None:
        self.chain = list(chain)
        loop = " -> ".join(self.chain)
        super().__init__(
            mod_id,
            capability,
            f"mod {mod_id!r} requires {capability!r}, which cycles back through: {loop}",
            chain=self.chain,
        )


class NoCompatibleOSProviderError(UnsatisfiedRequirementError):
    """Raised when every provider of a capability targets a different OS.

    Also raised (with ``mod_id`` empty) when a base build selects no OS mod.
    """

    def __init__(self, mod_id: str, capability: str, *, selected_os: str | None, candidates: Iterable[str] = ()) -> None:
        self.candidates = list(candidates)
        self.selected_os = selected_os
        if mod_id:
            message = (
                f"mod {mod_id!r} requires {capability!r}, but no provider is compatible with "
                f"{selected_os!r} (candidates: {', '.join(self.candidates) or 'none'})"
            )
        else:
            message = "no OS mod selected; add one (e.g., 'os/ubuntu') to build a base image"
        super().__init__(
            mod_id,
            capability,
            message,
            selected_os=selected_os,
            candidates=self.candidates,
        )


class MultipleOSModsError(GloveboxError):
    """Raised when more than one ``os`` category mod is selected."""

    def __init__(self, os_mods: Iterable[str]) -> None:
        self.os_mods = list(os_mods)
        super().__init__(
            f"multiple OS mods specified: {', '.join(self.os_mods)} (only one allowed)",
            context={"os_mods": self.os_mods},
        )


class CrossOSRequirementError(GloveboxError):
    """Raised when a mod requires a different concrete OS than the selected one."""

    def __init__(self, mod_id: str, required_os: str, selected_os: str) -> None:
        super().__init__(
            f"mod {mod_id!r} requires {required_os!r}, but {selected_os!r} is the selected OS",
            context={"mod": mod_id, "required_os": required_os, "selected_os": selected_os},
        )
        self.mod_id = mod_id
        self.required_os = required_os
        self.selected_os = selected_os


class ProfileError(GloveboxError):
    """Raised when a profile document cannot be read, parsed or written."""

    def __init__(self, message: str, *, path: str | None = None) -> None:
        super().__init__(message, context={"path": path} if path else None)
        self.path = path


__all__ = [
    "GloveboxError",
    "ConfigError",
    "InvalidIdentifierError",
    "ModNotFoundError",
    "ModDefinitionError",
    "UnsatisfiedRequirementError",
    "CycleDetectedError",
    "NoCompatibleOSProviderError",
    "MultipleOSModsError",
    "CrossOSRequirementError",
    "ProfileError",
]
