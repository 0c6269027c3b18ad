from __future__ import annotations

import hashlib
from datetime import datetime, timezone
from pathlib import Path

from glovebox.core.profile import Profile


def test_add_and_remove_mods():
    profile = Profile(mods=["os/ubuntu"])
    assert profile.add_mod("tools/tmux") is True
    assert profile.add_mod("tools/tmux") is False
    assert profile.mods == ["os/ubuntu", "tools/tmux"]
    assert profile.remove_mod("tools/tmux") is True
    assert profile.remove_mod("tools/tmux") is False
    assert not profile.has_mod("tools/tmux")


def test_content_hash_covers_editable_fields_only():
    profile = Profile(mods=["os/ubuntu"], passthrough_env=["GITHUB_TOKEN"])
    original = profile.compute_content_hash()
    assert len(original) == 12

    profile.update_build_info("sha256:abc")
    assert profile.compute_content_hash() == original

    profile.passthrough_env.append("AWS_PROFILE")
    assert profile.compute_content_hash() != original


def test_manual_edit_detection():
    profile = Profile(mods=["os/ubuntu"])
    assert profile.was_manually_edited() is False

    profile.update_content_hash()
    assert profile.was_manually_edited() is False

    profile.mods.append("tools/tmux")
    assert profile.was_manually_edited() is True


def test_update_build_info_records_digest_and_time():
    profile = Profile()
    now = datetime(2026, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
    profile.update_build_info("sha256:abc", base_digest="sha256:base", now=now)
    assert profile.build.artifact_digest == "sha256:abc"
    assert profile.build.base_digest == "sha256:base"
    assert profile.build.last_built_at == "2026-01-02T03:04:05Z"


def test_dict_roundtrip_omits_empty_build():
    profile = Profile(mods=["os/ubuntu"])
    data = profile.to_dict()
    assert data == {"version": 1, "mods": ["os/ubuntu"]}
    assert Profile.from_dict(data).mods == ["os/ubuntu"]


def test_image_name_for_global_and_project(tmp_path: Path):
    base = Profile(path=tmp_path / "home/.glovebox/profile.yaml", is_global=True)
    assert base.image_name() == "glovebox:base"

    project_root = (tmp_path / "my-app").resolve()
    project = Profile(path=project_root / ".glovebox/profile.yaml")
    short = hashlib.sha256(str(project_root).encode("utf-8")).hexdigest()[:7]
    assert project.image_name() == f"glovebox:my-app-{short}"

    project.build.image_name = "custom:tag"
    assert project.image_name() == "custom:tag"


def test_artifact_path_sits_next_to_profile(tmp_path: Path):
    profile = Profile(path=tmp_path / ".glovebox/profile.yaml")
    assert profile.artifact_path() == tmp_path / ".glovebox/Dockerfile"
    assert Profile().artifact_path() is None
