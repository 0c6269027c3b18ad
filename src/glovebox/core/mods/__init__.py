"""Mod loading, resolution and compatibility checks."""
from __future__ import annotations

from .capabilities import build_provides_map
from .layering import base_context, filter_for_layer
from .model import CORE_CATEGORY, DEFAULT_KNOWN_OS, OS_CATEGORY, Mod, bare_name, listing_category
from .paths import BUNDLED, ModRoot, bundled_root, get_mod_roots
from .registry import ModRegistry, validate_identifier
from .resolver import DependencyResolver, ResolutionContext, ResolvedSet, resolve
from .validation import validate
from .variants import check_os_compatibility, profile_os, resolve_variant, suggest_variant

__all__ = [
    "BUNDLED",
    "CORE_CATEGORY",
    "DEFAULT_KNOWN_OS",
    "OS_CATEGORY",
    "DependencyResolver",
    "Mod",
    "ModRegistry",
    "ModRoot",
    "ResolutionContext",
    "ResolvedSet",
    "bare_name",
    "base_context",
    "build_provides_map",
    "bundled_root",
    "check_os_compatibility",
    "filter_for_layer",
    "get_mod_roots",
    "listing_category",
    "profile_os",
    "resolve",
    "resolve_variant",
    "suggest_variant",
    "validate",
    "validate_identifier",
]
