import os
import sys
import textwrap
from pathlib import Path
from typing import Any, Callable

import pytest
import yaml

# Keep the repository free of Python bytecode and __pycache__ artifacts during tests.
sys.dont_write_bytecode = True

TESTS_ROOT = Path(__file__).resolve().parent
REPO_ROOT = TESTS_ROOT.parent
SRC_ROOT = REPO_ROOT / "src"

# Make src/ importable as 'glovebox' and conftest helpers importable from tests
for p in (SRC_ROOT, TESTS_ROOT):
    if str(p) not in sys.path:
        sys.path.insert(0, str(p))

from glovebox.core.config import ConfigManager
from glovebox.core.logging import reset_stdlib_logging_for_tests
from glovebox.core.mods import ModRegistry, ModRoot, bundled_root
from glovebox.core.mods.model import bare_name, listing_category
from glovebox.core.utils.paths import USER_DIR_ENV


def write(path: Path, content: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(textwrap.dedent(content).lstrip(), encoding="utf-8")
    return path


def write_mod(root: Path, identifier: str, **fields: Any) -> Path:
    """Write ``<root>/<identifier>.yaml`` with sensible defaults for required fields."""
    data = {
        "name": bare_name(identifier),
        "description": f"{identifier} test mod",
        "category": listing_category(identifier),
    }
    data.update(fields)
    path = root / f"{identifier}.yaml"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(yaml.safe_dump(data, sort_keys=False), encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """Point the user directory into tmp_path and run from a scratch project."""
    for key in list(os.environ):
        if key.startswith("GLOVEBOX_"):
            monkeypatch.delenv(key, raising=False)
    user_dir = tmp_path / "home" / ".glovebox"
    monkeypatch.setenv(USER_DIR_ENV, str(user_dir))
    project = tmp_path / "project"
    project.mkdir()
    monkeypatch.chdir(project)
    yield
    reset_stdlib_logging_for_tests()


@pytest.fixture
def user_dir(tmp_path: Path) -> Path:
    return tmp_path / "home" / ".glovebox"


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    return tmp_path / "project"


@pytest.fixture
def config(project_dir: Path) -> ConfigManager:
    return ConfigManager(project_dir)


@pytest.fixture
def mod_root(tmp_path: Path) -> Path:
    root = tmp_path / "mods"
    root.mkdir()
    return root


@pytest.fixture
def add_mod(mod_root: Path) -> Callable[..., Path]:
    """Write a mod into the scratch mod root: ``add_mod("tools/x", requires=["base"])``."""

    def _add(identifier: str, **fields: Any) -> Path:
        return write_mod(mod_root, identifier, **fields)

    return _add


@pytest.fixture
def registry(mod_root: Path) -> ModRegistry:
    """Registry over the scratch mod root only (no bundled mods)."""
    return ModRegistry([ModRoot(kind="project", path=mod_root)])


@pytest.fixture
def bundled_registry() -> ModRegistry:
    return ModRegistry([bundled_root()])


@pytest.fixture
def os_mods(add_mod: Callable[..., Path]) -> None:
    """Two operating systems, both providing ``base``."""
    add_mod("os/ubuntu", base_image_reference="ubuntu:24.04", provides=["base"], user="ubuntu")
    add_mod("os/fedora", base_image_reference="fedora:41", provides=["base"], user="fedora")
