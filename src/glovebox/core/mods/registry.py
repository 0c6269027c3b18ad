"""Mod registry: identifier → definition lookup across layered roots.

Lookup checks the project root, then the user root, then the bundled set;
the first match wins, so a local file shadows a built-in mod of the same
identifier without touching the bundled data. Identifiers are validated
before any filesystem access.
"""
from __future__ import annotations

import logging
from pathlib import Path, PurePosixPath, PureWindowsPath
from typing import Any, Dict, List, Sequence, Tuple

import yaml

from glovebox.core.exceptions import InvalidIdentifierError, ModDefinitionError, ModNotFoundError
from glovebox.core.mods.model import Mod, listing_category
from glovebox.core.mods.paths import BUNDLED, ModRoot, MOD_SUFFIX, get_mod_roots, iter_mod_files, mod_file
from glovebox.core.schemas import validate_payload_safe
from glovebox.core.utils.io import read_text
from glovebox.data import get_data_path, read_yaml as read_bundled_yaml

logger = logging.getLogger(__name__)


def validate_identifier(identifier: str) -> str:
    """Reject identifiers that could escape the mod roots.

    Returns the identifier unchanged when it is safe.

    Raises:
        InvalidIdentifierError: for empty, absolute or traversing identifiers.
    """
    if not isinstance(identifier, str) or not identifier.strip():
        raise InvalidIdentifierError(str(identifier), "empty identifier")
    if PurePosixPath(identifier).is_absolute() or PureWindowsPath(identifier).is_absolute():
        raise InvalidIdentifierError(identifier, "absolute paths not allowed")
    segments = identifier.replace("\\", "/").split("/")
    if any(seg == ".." for seg in segments):
        raise InvalidIdentifierError(identifier, "path traversal not allowed")
    if any(seg in ("", ".") for seg in segments):
        raise InvalidIdentifierError(identifier, "empty path segment")
    return identifier


class ModRegistry:
    """Layered, read-only mod lookup.

    Loaded definitions are cached per registry instance, so repeated lookups
    of the same identifier return the same ``Mod``.
    """

    def __init__(self, roots: Sequence[ModRoot]) -> None:
        self.roots: Tuple[ModRoot, ...] = tuple(roots)
        self._cache: Dict[str, Mod] = {}

    @classmethod
    def default(cls, config: Any) -> "ModRegistry":
        """Registry over project, user and bundled roots for ``config``."""
        return cls(get_mod_roots(config))

    # ---------- lookup ----------

    def locate(self, identifier: str) -> Tuple[ModRoot, Path]:
        """Return the root and file that define ``identifier``."""
        validate_identifier(identifier)
        for root in self.roots:
            path = mod_file(root, identifier)
            if path is not None:
                return root, path
        raise ModNotFoundError(identifier, searched=[str(r.path) for r in self.roots])

    def exists(self, identifier: str) -> bool:
        try:
            self.locate(identifier)
        except ModNotFoundError:
            return False
        return True

    def load(self, identifier: str) -> Mod:
        """Load a mod by identifier (e.g., ``shells/bash``).

        Raises:
            InvalidIdentifierError: identifier is absolute or traverses upward.
            ModNotFoundError: no root defines the identifier.
            ModDefinitionError: the definition is unparseable or invalid.
        """
        cached = self._cache.get(identifier)
        if cached is not None:
            return cached

        root, path = self.locate(identifier)
        data = self._read_definition(identifier, root, path)
        errors = validate_payload_safe(data, "mod")
        if errors:
            raise ModDefinitionError(identifier, self._source(root, path), "; ".join(errors))

        if not root.is_bundled:
            shadowed = [r for r in self.roots[self.roots.index(root) + 1:] if mod_file(r, identifier)]
            if shadowed:
                logger.debug("Mod %s from %s shadows %s", identifier, root.kind, shadowed[0].kind)

        mod = Mod.from_dict(identifier, data)
        self._cache[identifier] = mod
        return mod

    def load_raw(self, identifier: str) -> Tuple[str, str]:
        """Return a mod's raw document and its source (a path, or ``"bundled"``)."""
        root, path = self.locate(identifier)
        return read_text(path), self._source(root, path)

    def _source(self, root: ModRoot, path: Path) -> str:
        return BUNDLED if root.is_bundled else str(path)

    def _read_definition(self, identifier: str, root: ModRoot, path: Path) -> Dict[str, Any]:
        try:
            if root.is_bundled and root.path == get_data_path("mods"):
                data = read_bundled_yaml("mods", f"{identifier}{MOD_SUFFIX}")
            else:
                data = yaml.safe_load(read_text(path))
        except yaml.YAMLError as exc:
            raise ModDefinitionError(identifier, self._source(root, path), str(exc)) from exc
        if not isinstance(data, dict):
            raise ModDefinitionError(identifier, self._source(root, path), "document must be a mapping")
        return data

    # ---------- listing ----------

    def identifiers(self) -> List[str]:
        """Every available identifier, in listing order (sorted)."""
        seen: Dict[str, None] = {}
        for root in self.roots:
            for identifier, _path in iter_mod_files(root):
                seen.setdefault(identifier, None)
        return sorted(seen)

    def list_all(self) -> Dict[str, List[str]]:
        """Return available identifiers grouped by category.

        Top-level identifiers (no ``/``) are grouped under ``core``.
        """
        result: Dict[str, List[str]] = {}
        for identifier in self.identifiers():
            result.setdefault(listing_category(identifier), []).append(identifier)
        return {category: result[category] for category in sorted(result)}

    def load_all(self) -> List[Mod]:
        """Load every listed mod in listing order."""
        return [self.load(identifier) for identifier in self.identifiers()]

    def os_names(self) -> Tuple[str, ...]:
        """Names of every ``os`` category mod available in any root."""
        return tuple(mod.name for mod in self.load_all() if mod.is_os)

    def source_of(self, identifier: str) -> str:
        root, path = self.locate(identifier)
        return self._source(root, path)


__all__ = ["ModRegistry", "validate_identifier"]
