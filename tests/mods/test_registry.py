from __future__ import annotations

from pathlib import Path

import pytest

from conftest import write, write_mod
from glovebox.core.exceptions import InvalidIdentifierError, ModDefinitionError, ModNotFoundError
from glovebox.core.mods import ModRegistry, ModRoot, bundled_root, get_mod_roots, validate_identifier


@pytest.mark.parametrize(
    "identifier",
    ["../etc/passwd", "os/../../secret", "/etc/passwd", "C:\\mods\\x", "", "  ", "os//ubuntu", "./os/ubuntu"],
)
def test_validate_identifier_rejects_escaping_ids(identifier: str):
    with pytest.raises(InvalidIdentifierError):
        validate_identifier(identifier)


def test_validate_identifier_accepts_nested_and_bare_ids():
    assert validate_identifier("os/ubuntu") == "os/ubuntu"
    assert validate_identifier("custom") == "custom"
    assert validate_identifier("vendor/tools/x") == "vendor/tools/x"


def test_load_rejects_traversal_before_touching_disk(tmp_path: Path):
    secret = tmp_path / "secret.yaml"
    write(secret, "name: secret\ndescription: x\ncategory: x\n")
    registry = ModRegistry([ModRoot("project", tmp_path / "mods")])
    with pytest.raises(InvalidIdentifierError):
        registry.load("../secret")


def test_load_bundled_mod(bundled_registry: ModRegistry):
    mod = bundled_registry.load("os/ubuntu")
    assert mod.identifier == "os/ubuntu"
    assert mod.is_os
    assert mod.base_image_reference.startswith("ubuntu:")
    assert "base" in mod.provides


def test_load_is_deterministic_and_cached(bundled_registry: ModRegistry):
    assert bundled_registry.load("tools/mise") is bundled_registry.load("tools/mise")
    fresh = ModRegistry([bundled_root()])
    assert fresh.load("tools/mise") == bundled_registry.load("tools/mise")


def test_missing_mod_raises_not_found(registry: ModRegistry):
    with pytest.raises(ModNotFoundError) as exc:
        registry.load("tools/nope")
    assert exc.value.identifier == "tools/nope"
    assert "tools/nope" in str(exc.value)


def test_project_root_shadows_user_and_bundled(tmp_path: Path):
    project = tmp_path / "project-mods"
    user = tmp_path / "user-mods"
    write_mod(project, "tools/tmux", description="project tmux")
    write_mod(user, "tools/tmux", description="user tmux")
    write_mod(user, "tools/extra", description="user extra")
    registry = ModRegistry([ModRoot("project", project), ModRoot("user", user), bundled_root()])

    assert registry.load("tools/tmux").description == "project tmux"
    assert registry.load("tools/extra").description == "user extra"
    assert registry.source_of("tools/tmux") == str(project / "tools/tmux.yaml")
    assert registry.source_of("os/ubuntu") == "bundled"


def test_list_all_merges_roots_without_duplicates(tmp_path: Path):
    project = tmp_path / "project-mods"
    write_mod(project, "tools/tmux")
    write_mod(project, "custom")
    registry = ModRegistry([ModRoot("project", project), bundled_root()])

    listing = registry.list_all()
    assert listing["tools"].count("tools/tmux") == 1
    assert listing["core"] == ["custom"]
    assert list(listing) == sorted(listing)
    assert listing["os"] == ["os/alpine", "os/fedora", "os/ubuntu"]


def test_identifiers_skip_hidden_files(tmp_path: Path):
    root = tmp_path / "mods"
    write_mod(root, "tools/visible")
    write_mod(root, ".cache/tools/hidden")
    registry = ModRegistry([ModRoot("project", root)])
    assert registry.identifiers() == ["tools/visible"]


def test_invalid_document_raises_definition_error(tmp_path: Path):
    root = tmp_path / "mods"
    write(root / "tools/broken.yaml", "name: broken\ncategory: tools\n")
    write(root / "tools/garbled.yaml", "name: [unclosed\n")
    write(root / "tools/scalar.yaml", "just a string\n")
    registry = ModRegistry([ModRoot("project", root)])

    for identifier in ("tools/broken", "tools/garbled", "tools/scalar"):
        with pytest.raises(ModDefinitionError) as exc:
            registry.load(identifier)
        assert identifier in str(exc.value)


def test_multiline_environment_value_is_rejected(tmp_path: Path):
    root = tmp_path / "mods"
    write_mod(root, "tools/split", environment={"GREETING": "hello\nRUN rm -rf /"})
    write_mod(root, "tools/flags", environment={"DEBUG": True, "PORT": 8080})
    registry = ModRegistry([ModRoot("project", root)])

    with pytest.raises(ModDefinitionError) as exc:
        registry.load("tools/split")
    assert "tools/split" in str(exc.value)
    assert dict(registry.load("tools/flags").environment) == {"DEBUG": "true", "PORT": "8080"}


def test_unknown_fields_are_ignored(tmp_path: Path):
    root = tmp_path / "mods"
    write_mod(root, "tools/x", future_field={"anything": True})
    mod = ModRegistry([ModRoot("project", root)]).load("tools/x")
    assert mod.name == "x"


def test_load_raw_returns_text_and_source(bundled_registry: ModRegistry):
    text, source = bundled_registry.load_raw("tools/mise")
    assert source == "bundled"
    assert "name: mise" in text


def test_os_names_lists_bundled_operating_systems(bundled_registry: ModRegistry):
    assert bundled_registry.os_names() == ("alpine", "fedora", "ubuntu")


def test_default_roots_follow_config(config):
    roots = get_mod_roots(config)
    assert [r.kind for r in roots] == ["project", "user", "bundled"]
    assert roots[0].path == config.project_dir / "mods"
    assert roots[1].path == config.user_dir / "mods"


def test_default_registry_sees_user_mods(config, user_dir: Path):
    write_mod(user_dir / "mods", "tools/mine", description="from user dir")
    registry = ModRegistry.default(config)
    assert registry.load("tools/mine").description == "from user dir"
    assert registry.exists("os/ubuntu")
