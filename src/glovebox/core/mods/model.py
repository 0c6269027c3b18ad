"""Mod data model.

A mod is an immutable, named fragment of image-build configuration. Its
identifier (``<category>/<name>``) is the path of its definition relative to
a mod root, without the ``.yaml`` suffix.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple

OS_CATEGORY = "os"
CORE_CATEGORY = "core"
DEFAULT_KNOWN_OS: Tuple[str, ...] = ("ubuntu", "fedora", "alpine")


def bare_name(identifier: str) -> str:
    """Return the last path segment of an identifier (``tools/mise`` -> ``mise``)."""
    return identifier.rsplit("/", 1)[-1]


def listing_category(identifier: str) -> str:
    """Return the listing group of an identifier; bare identifiers belong to ``core``."""
    if "/" not in identifier:
        return CORE_CATEGORY
    return identifier.split("/", 1)[0]


def _dedupe(values: Any) -> Tuple[str, ...]:
    seen: Dict[str, None] = {}
    for value in values or ():
        text = str(value).strip()
        if text:
            seen.setdefault(text, None)
    return tuple(seen)


def _env_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


@dataclass(frozen=True)
class Mod:
    identifier: str
    name: str
    description: str
    category: str
    requires: Tuple[str, ...] = ()
    provides: Tuple[str, ...] = ()
    base_image_reference: Optional[str] = None
    root_script: str = ""
    user_script: str = ""
    environment: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    shell_override: Optional[str] = None
    packages: Tuple[str, ...] = ()
    package_install: Optional[str] = None
    user: Optional[str] = None

    @classmethod
    def from_dict(cls, identifier: str, data: Mapping[str, Any]) -> "Mod":
        """Build a mod from a parsed definition document.

        Unknown fields are ignored. ``requires``/``provides``/``packages``
        keep their declared order with duplicates dropped.
        """
        env = data.get("environment") or {}
        return cls(
            identifier=identifier,
            name=str(data.get("name") or bare_name(identifier)),
            description=str(data.get("description") or ""),
            category=str(data.get("category") or listing_category(identifier)),
            requires=_dedupe(data.get("requires")),
            provides=_dedupe(data.get("provides")),
            base_image_reference=data.get("base_image_reference") or None,
            root_script=str(data.get("root_script") or ""),
            user_script=str(data.get("user_script") or ""),
            environment=MappingProxyType({str(k): _env_value(v) for k, v in env.items()}),
            shell_override=data.get("shell_override") or None,
            packages=_dedupe(data.get("packages")),
            package_install=data.get("package_install") or None,
            user=data.get("user") or None,
        )

    @property
    def is_os(self) -> bool:
        return self.category == OS_CATEGORY

    @property
    def bare_identifier(self) -> str:
        return bare_name(self.identifier)

    def effective_provides(self) -> Tuple[str, ...]:
        """Capabilities this mod satisfies: its own name plus explicit provides."""
        return _dedupe((self.name, *self.provides))

    def capabilities(self) -> Tuple[str, ...]:
        """Every key this mod is indexed under (effective provides and identifier)."""
        return _dedupe((*self.effective_provides(), self.bare_identifier, self.identifier))

    def required_os(self, known_os: Tuple[str, ...] | list[str]) -> Tuple[str, ...]:
        """Requirements that literally name a known operating system."""
        known = set(known_os)
        return tuple(req for req in self.requires if req in known)


__all__ = [
    "Mod",
    "OS_CATEGORY",
    "CORE_CATEGORY",
    "DEFAULT_KNOWN_OS",
    "bare_name",
    "listing_category",
]
