from __future__ import annotations

import pytest

from glovebox.core.exceptions import CrossOSRequirementError, ModNotFoundError
from glovebox.core.mods import (
    ModRegistry,
    check_os_compatibility,
    profile_os,
    resolve_variant,
    suggest_variant,
)


def test_exact_identifier_wins(bundled_registry: ModRegistry):
    identifier, mod = resolve_variant(bundled_registry, "shells/zsh-fedora", "ubuntu")
    assert identifier == "shells/zsh-fedora"
    assert mod.identifier == identifier


def test_os_suffix_is_tried(bundled_registry: ModRegistry):
    identifier, _ = resolve_variant(bundled_registry, "editors/vim", "ubuntu")
    assert identifier == "editors/vim-ubuntu"


def test_missing_variant_lists_available_os(bundled_registry: ModRegistry):
    with pytest.raises(ModNotFoundError) as exc:
        resolve_variant(bundled_registry, "shells/fish", "fedora")
    assert "available for: ubuntu" in str(exc.value)


def test_no_os_and_no_exact_match(bundled_registry: ModRegistry):
    with pytest.raises(ModNotFoundError) as exc:
        resolve_variant(bundled_registry, "editors/vim", None)
    assert "available for: ubuntu, fedora" in str(exc.value)


def test_unknown_mod(bundled_registry: ModRegistry):
    with pytest.raises(ModNotFoundError):
        resolve_variant(bundled_registry, "tools/nothing", "ubuntu")


def test_check_os_compatibility(bundled_registry: ModRegistry):
    fedora_vim = bundled_registry.load("editors/vim-fedora")
    check_os_compatibility(fedora_vim, "fedora")
    check_os_compatibility(fedora_vim, None)
    with pytest.raises(CrossOSRequirementError):
        check_os_compatibility(fedora_vim, "ubuntu")


def test_suggest_variant(bundled_registry: ModRegistry):
    assert suggest_variant(bundled_registry, "shells/zsh-fedora", "ubuntu") == "shells/zsh-ubuntu"
    assert suggest_variant(bundled_registry, "zsh", "fedora") == "shells/zsh-fedora"
    assert suggest_variant(bundled_registry, "shells/fish-ubuntu", "fedora") is None
    assert suggest_variant(bundled_registry, "shells/zsh-fedora", None) is None


def test_profile_os(bundled_registry: ModRegistry):
    assert profile_os(bundled_registry, ["tools/tmux", "os/fedora", "os/ubuntu"]) == "fedora"
    assert profile_os(bundled_registry, ["tools/tmux", "tools/missing"]) is None
