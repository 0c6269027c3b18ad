from __future__ import annotations

import json
from pathlib import Path

import pytest
import yaml

from conftest import write_mod
from glovebox.cli._dispatcher import main
from glovebox.core.artifact import digest


def run(*argv: str) -> int:
    return main(list(argv))


def read_profile(path: Path) -> dict:
    return yaml.safe_load(path.read_text(encoding="utf-8"))


@pytest.fixture
def base_profile(user_dir: Path, capsys) -> Path:
    assert run("init", "--base") == 0
    capsys.readouterr()
    return user_dir / "profile.yaml"


def test_no_command_prints_help(capsys):
    assert run() == 0
    assert "usage: glovebox" in capsys.readouterr().out


def test_init_base_uses_default_mods(user_dir: Path, capsys):
    assert run("init", "--base") == 0
    assert "Created base profile" in capsys.readouterr().out
    assert read_profile(user_dir / "profile.yaml")["mods"] == ["os/ubuntu", "shells/bash"]


def test_init_refuses_to_overwrite(base_profile: Path, capsys):
    assert run("init", "--base") == 1
    assert "already exists" in capsys.readouterr().err
    assert run("init", "--base", "--force", "os/fedora") == 0
    assert read_profile(base_profile)["mods"] == ["os/fedora"]


def test_init_project_resolves_variants_against_base_os(base_profile: Path, project_dir: Path, capsys):
    assert run("init", "shells/zsh", "--project-dir", str(project_dir), "--json") == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["kind"] == "project"
    assert payload["mods"] == ["shells/zsh-ubuntu"]
    assert (project_dir / ".glovebox" / "profile.yaml").is_file()


def test_add_variant_and_duplicate(base_profile: Path, capsys):
    assert run("add", "--base", "editors/vim") == 0
    assert "Added 'editors/vim-ubuntu'" in capsys.readouterr().out
    assert read_profile(base_profile)["mods"][-1] == "editors/vim-ubuntu"

    assert run("add", "--base", "editors/vim-ubuntu") == 0
    assert "already in your profile" in capsys.readouterr().out


def test_add_other_os_suggests_variant(base_profile: Path, capsys):
    assert run("add", "--base", "shells/zsh-fedora") == 1
    err = capsys.readouterr().err
    assert "Did you mean 'shells/zsh-ubuntu'?" in err
    assert "shells/zsh-fedora" not in read_profile(base_profile)["mods"]


def test_add_unknown_mod(base_profile: Path, capsys):
    assert run("add", "--base", "tools/nope") == 1
    assert "mod not found: tools/nope" in capsys.readouterr().err


def test_remove(base_profile: Path, capsys):
    assert run("remove", "--base", "shells/bash") == 0
    assert read_profile(base_profile)["mods"] == ["os/ubuntu"]
    capsys.readouterr()

    assert run("remove", "--base", "shells/bash", "--json") == 1
    error = json.loads(capsys.readouterr().err)["error"]
    assert error["code"] == "ProfileError"
    assert "not in the profile" in error["message"]


def test_commands_without_profile_point_to_init(capsys):
    assert run("list") == 1
    assert "glovebox init" in capsys.readouterr().err


def test_list_json(base_profile: Path, capsys):
    assert run("list", "--base", "--json") == 0
    data = json.loads(capsys.readouterr().out)
    assert data["kind"] == "base"
    assert data["image"] == "glovebox:base"
    assert data["mods"] == ["os/ubuntu", "shells/bash"]


def test_generate_base_and_status(base_profile: Path, user_dir: Path, capsys):
    assert run("generate", "--base") == 0
    dockerfile = user_dir / "Dockerfile"
    text = dockerfile.read_text(encoding="utf-8")
    assert "FROM ubuntu:24.04" in text
    build = read_profile(base_profile)["build"]
    assert build["artifact_digest"] == digest(text)
    assert build["last_built_at"].endswith("Z")
    capsys.readouterr()

    assert run("status", "--base", "--json") == 0
    status = json.loads(capsys.readouterr().out)
    assert status["state"] == "up-to-date"
    assert status["stale"] is False

    dockerfile.write_text(text + "RUN echo local\n", encoding="utf-8")
    assert run("status", "--base", "--json") == 0
    assert json.loads(capsys.readouterr().out)["state"] == "manually-edited"

    assert run("generate", "--base") == 1
    assert "--force" in capsys.readouterr().err
    assert run("generate", "--base", "--force") == 0
    assert dockerfile.read_text(encoding="utf-8") == text


def test_generate_refuses_to_overwrite_crlf_edit(base_profile: Path, user_dir: Path, capsys):
    assert run("generate", "--base") == 0
    dockerfile = user_dir / "Dockerfile"
    text = dockerfile.read_text(encoding="utf-8")
    dockerfile.write_bytes(text.replace("\n", "\r\n").encode("utf-8"))
    capsys.readouterr()

    assert run("status", "--base", "--json") == 0
    assert json.loads(capsys.readouterr().out)["state"] == "manually-edited"
    assert run("generate", "--base") == 1
    assert b"\r\n" in dockerfile.read_bytes()


def test_status_reports_profile_change(base_profile: Path, capsys):
    assert run("generate", "--base") == 0
    assert run("add", "--base", "tools/tmux") == 0
    capsys.readouterr()

    assert run("status", "--base") == 0
    out = capsys.readouterr().out
    assert "profile changed since the artifact was generated" in out
    assert "Run 'glovebox generate'" in out


def test_generate_project_layers_on_base(base_profile: Path, user_dir: Path, project_dir: Path, capsys):
    assert run("generate", "--base") == 0
    assert run("init", "tools/mise", "--project-dir", str(project_dir)) == 0
    assert run("generate", "--project-dir", str(project_dir), "--json") == 0
    capsys.readouterr()

    text = (project_dir / ".glovebox" / "Dockerfile").read_text(encoding="utf-8")
    assert "FROM glovebox:base" in text
    assert "# tools/homebrew:" in text

    build = read_profile(project_dir / ".glovebox" / "profile.yaml")["build"]
    assert build["base_digest"] == digest((user_dir / "Dockerfile").read_text(encoding="utf-8"))

    assert run("add", "--base", "tools/homebrew") == 0
    assert run("generate", "--base") == 0
    capsys.readouterr()
    assert run("status", "--project-dir", str(project_dir), "--json") == 0
    status = json.loads(capsys.readouterr().out)
    assert status["base_changed"] is True
    assert status["stale"] is True


def test_generate_stdout(base_profile: Path, user_dir: Path, capsys):
    assert run("generate", "--base", "--stdout") == 0
    assert capsys.readouterr().out.startswith("# syntax=docker/dockerfile:1\n")
    assert not (user_dir / "Dockerfile").exists()


def test_mod_list_marks_custom_mods(project_dir: Path, capsys):
    write_mod(project_dir / ".glovebox" / "mods", "tools/custom", description="Project tool")
    assert run("mod", "list", "--json") == 0
    catalog = json.loads(capsys.readouterr().out)
    ubuntu = next(entry for entry in catalog["os"] if entry["id"] == "os/ubuntu")
    assert ubuntu["source"] == "bundled"
    custom = next(entry for entry in catalog["tools"] if entry["id"] == "tools/custom")
    assert custom["source"].endswith("tools/custom.yaml")

    assert run("mod", "list") == 0
    out = capsys.readouterr().out
    assert "tools/custom" in out and "[custom]" in out


def test_mod_cat(capsys):
    assert run("mod", "cat", "tools/mise") == 0
    out = capsys.readouterr().out
    assert out.splitlines()[0] == "# source: bundled"
    assert "name: mise" in out


def test_mod_resolve(capsys):
    assert run("mod", "resolve", "tools/mise", "os/ubuntu") == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines[:3] == ["  1. os/ubuntu", "  2. tools/homebrew", "  3. tools/mise"]
    assert lines[-1] == "os: ubuntu"


def test_mod_resolve_on_base(capsys, user_dir: Path):
    assert run("init", "--base", "os/ubuntu", "tools/homebrew") == 0
    capsys.readouterr()
    assert run("mod", "resolve", "--on-base", "tools/mise", "--json") == 0
    data = json.loads(capsys.readouterr().out)
    assert data["resolved"] == ["tools/mise"]
    assert data["os"] == "ubuntu"


def test_mod_resolve_multiple_os_fails(capsys):
    assert run("mod", "resolve", "os/ubuntu", "os/fedora", "--json") == 1
    error = json.loads(capsys.readouterr().err)["error"]
    assert error["code"] == "MultipleOSModsError"
    assert error["context"]["os_mods"] == ["os/fedora", "os/ubuntu"]


def test_invalid_identifier_is_rejected(capsys):
    assert run("mod", "cat", "../secrets") == 1
    assert "invalid mod id" in capsys.readouterr().err
