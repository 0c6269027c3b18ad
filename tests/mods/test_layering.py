from __future__ import annotations

import pytest

from glovebox.core.exceptions import MultipleOSModsError
from glovebox.core.mods import ModRegistry, filter_for_layer, resolve, validate


def test_base_closure_is_excluded_from_project(bundled_registry: ModRegistry):
    result = filter_for_layer(bundled_registry, ["tools/mise"], ["os/ubuntu", "tools/homebrew"])
    assert result.ids() == ["tools/mise"]


def test_transitive_base_mods_are_excluded(bundled_registry: ModRegistry):
    # homebrew reaches the base only as a dependency of mise
    result = filter_for_layer(bundled_registry, ["tools/homebrew", "tools/tmux"], ["os/ubuntu", "tools/mise"])
    assert result.ids() == ["tools/tmux"]


@pytest.mark.parametrize(
    "base, requested",
    [
        (["os/ubuntu"], ["tools/mise", "shells/oh-my-zsh"]),
        (["os/ubuntu", "shells/oh-my-zsh"], ["shells/zsh-ubuntu", "tools/tmux"]),
        (["os/fedora", "tools/homebrew"], ["tools/mise", "editors/vim-fedora", "ai/claude-code"]),
        (["os/ubuntu", "tools/mise", "ai/claude-code"], ["tools/mise", "ai/claude-code", "os/ubuntu"]),
    ],
)
def test_result_never_contains_base_identifiers(bundled_registry: ModRegistry, base, requested):
    base_closure = set(resolve(bundled_registry, base).ids())
    result = filter_for_layer(bundled_registry, requested, base)
    assert not base_closure & set(result.ids())


def test_project_does_not_pull_in_another_os_for_base(bundled_registry: ModRegistry):
    result = filter_for_layer(bundled_registry, ["tools/tmux"], ["os/fedora"])
    assert result.ids() == ["tools/tmux"]
    assert result.os_mods() == []


def test_project_variant_follows_base_os(bundled_registry: ModRegistry):
    result = filter_for_layer(bundled_registry, ["shells/oh-my-zsh"], ["os/fedora"])
    assert result.ids() == ["shells/zsh-fedora", "shells/oh-my-zsh"]


def test_everything_in_base_gives_empty_result(bundled_registry: ModRegistry):
    result = filter_for_layer(bundled_registry, ["os/ubuntu", "tools/tmux"], ["os/ubuntu", "tools/tmux"])
    assert result.ids() == []


def test_project_requesting_other_os_fails_validation(bundled_registry: ModRegistry):
    result = filter_for_layer(bundled_registry, ["os/fedora"], ["os/ubuntu"])
    with pytest.raises(MultipleOSModsError):
        validate(result, inherited_os="ubuntu")


def test_precomputed_base_is_reused(bundled_registry: ModRegistry):
    base = resolve(bundled_registry, ["os/ubuntu", "tools/homebrew"])
    result = filter_for_layer(bundled_registry, ["tools/mise"], (), base=base)
    assert result.ids() == ["tools/mise"]
