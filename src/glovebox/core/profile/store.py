"""Profile persistence (YAML files under the user and project directories)."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from glovebox.core.config import ConfigManager
from glovebox.core.exceptions import ProfileError
from glovebox.core.profile.model import Profile
from glovebox.core.schemas import validate_payload_safe
from glovebox.core.utils.io import read_yaml, write_yaml
from glovebox.core.utils.paths import get_project_dir
from glovebox.core.utils.time import normalize_timestamp

logger = logging.getLogger(__name__)


class ProfileStore:
    """Read and write global and project profiles.

    Writes are atomic (temp file + rename) so a concurrent reader never sees
    a partial document. Concurrent writers are not serialized.
    """

    def __init__(self, config: ConfigManager) -> None:
        self.config = config

    # ---------- paths ----------

    @property
    def profile_file(self) -> str:
        return str(self.config.get("paths.profile_file", "profile.yaml"))

    def global_path(self) -> Path:
        return self.config.user_dir / self.profile_file

    def project_path(self, project_dir: Optional[Path] = None) -> Path:
        root = Path(project_dir) if project_dir is not None else self.config.project_root
        dir_name = self.config.get("paths.dir_name")
        return get_project_dir(root, dir_name=dir_name) / self.profile_file

    # ---------- loading ----------

    def load(self, path: Path, *, is_global: bool = False) -> Optional[Profile]:
        """Load the profile at ``path``; None when the file does not exist.

        Raises:
            ProfileError: the file is unreadable, unparseable or invalid.
        """
        path = Path(path)
        if not path.exists():
            return None
        try:
            data = read_yaml(path, default={}, raise_on_error=True)
        except (OSError, yaml.YAMLError) as exc:
            raise ProfileError(f"reading profile {path}: {exc}", path=str(path)) from exc
        if not isinstance(data, dict):
            raise ProfileError(f"profile {path} must contain a mapping", path=str(path))

        data = _normalize(data)
        errors = validate_payload_safe(data, "profile")
        if errors:
            raise ProfileError(f"invalid profile {path}: {'; '.join(errors)}", path=str(path))
        return Profile.from_dict(data, path=path, is_global=is_global)

    def load_global(self) -> Optional[Profile]:
        return self.load(self.global_path(), is_global=True)

    def load_project(self, project_dir: Optional[Path] = None) -> Optional[Profile]:
        return self.load(self.project_path(project_dir))

    def load_effective(self, project_dir: Optional[Path] = None) -> Optional[Profile]:
        """The project profile if one exists, else the global profile."""
        return self.load_project(project_dir) or self.load_global()

    # ---------- saving ----------

    def save(self, profile: Profile) -> Path:
        """Write ``profile`` to its path, refreshing its content hash first."""
        if profile.path is None:
            profile.path = self.global_path() if profile.is_global else self.project_path()
        profile.update_content_hash()
        write_yaml(Path(profile.path), profile.to_dict(), sort_keys=False)
        logger.debug("Saved profile %s", profile.path)
        return Path(profile.path)

    def create(self, mods: List[str], *, is_global: bool, project_dir: Optional[Path] = None) -> Profile:
        """New, unsaved profile at the default global or project location."""
        path = self.global_path() if is_global else self.project_path(project_dir)
        return Profile(mods=list(mods), path=path, is_global=is_global)

    # ---------- environment ----------

    def effective_passthrough_env(self, project_dir: Optional[Path] = None) -> List[str]:
        """Variables to forward: global profile first, then project, de-duplicated."""
        names: Dict[str, None] = {}
        for profile in (self.load_global(), self.load_project(project_dir)):
            if profile is not None:
                for name in profile.passthrough_env:
                    names.setdefault(name, None)
        return list(names)


def _normalize(data: Dict[str, Any]) -> Dict[str, Any]:
    build = data.get("build")
    if isinstance(build, dict) and "last_built_at" in build:
        data = {**data, "build": {**build, "last_built_at": normalize_timestamp(build["last_built_at"])}}
    return data


__all__ = ["ProfileStore"]
