"""
Glovebox configuration management (layered YAML + environment overrides).
"""
from __future__ import annotations

import json
import logging
import os
import re
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Tuple

import yaml

from glovebox.core.exceptions import ConfigError
from glovebox.core.schemas import validate_payload_safe
from glovebox.core.utils.io import read_yaml
from glovebox.core.utils.merge import deep_merge
from glovebox.core.utils.paths import get_project_dir, get_user_dir
from glovebox.data import get_data_path

logger = logging.getLogger(__name__)

ENV_PREFIX = "GLOVEBOX_"
CONFIG_FILE = "config.yaml"


class ConfigManager:
    """Load, merge, and validate Glovebox configuration.

    Configuration sources (highest to lowest priority):
    1. Environment variables: GLOVEBOX_<section>__<key>
    2. Project config: <project>/.glovebox/config.yaml
    3. User config: ~/.glovebox/config.yaml
    4. Bundled defaults: glovebox.data/config/defaults.yaml

    The merged document is loaded once per instance and treated as immutable.
    """

    def __init__(self, project_root: Optional[Path] = None) -> None:
        self.project_root = Path(project_root).resolve() if project_root is not None else Path.cwd().resolve()
        self.defaults_path = get_data_path("config", "defaults.yaml")
        self.user_dir = get_user_dir()
        self.project_dir = get_project_dir(self.project_root)
        self._config: Optional[Dict[str, Any]] = None

    # ========== Loading ==========

    def config_files(self) -> List[Path]:
        """Return config files in low → high precedence order."""
        return [self.defaults_path, self.user_dir / CONFIG_FILE, self.project_dir / CONFIG_FILE]

    def load_yaml(self, path: Path) -> Dict[str, Any]:
        try:
            data = read_yaml(path, default={}, raise_on_error=path.exists())
        except (OSError, yaml.YAMLError) as exc:
            raise ConfigError(f"Invalid YAML in {path}: {exc}", context={"path": str(path)}) from exc
        if not isinstance(data, dict):
            raise ConfigError(f"Config file must contain a mapping: {path}", context={"path": str(path)})
        return data

    def load_config(self, validate: bool = True) -> Dict[str, Any]:
        """Return the merged configuration (cached per instance)."""
        if self._config is None:
            cfg: Dict[str, Any] = {}
            for path in self.config_files():
                if path.exists():
                    logger.debug("Loading config layer %s", path)
                    cfg = deep_merge(cfg, self.load_yaml(path))
            self.apply_env_overrides(cfg)
            if validate:
                errors = validate_payload_safe(cfg, "config")
                if errors:
                    raise ConfigError(
                        "Invalid configuration: " + "; ".join(errors),
                        context={"errors": errors},
                    )
            self._config = cfg
        return self._config

    # ========== Environment overrides ==========

    def _coerce_type(self, value: str) -> Any:
        s = value.strip()
        low = s.lower()
        if low in {"true", "false"}:
            return low == "true"
        if re.fullmatch(r"[-+]?\d+", s):
            return int(s)
        if (s.startswith("[") and s.endswith("]")) or (s.startswith("{") and s.endswith("}")):
            try:
                return json.loads(s)
            except json.JSONDecodeError:
                return s
        return s

    def _iter_env_overrides(self) -> Iterator[Tuple[List[str], Any]]:
        for key in sorted(os.environ.keys()):
            if not key.startswith(ENV_PREFIX):
                continue
            raw = key[len(ENV_PREFIX):]
            segments = raw.split("__")
            if len(segments) < 2 or any(not seg for seg in segments):
                # Only section__key style variables are configuration overrides.
                continue
            yield [seg.lower() for seg in segments], self._coerce_type(os.environ[key])

    def apply_env_overrides(self, cfg: Dict[str, Any]) -> None:
        for path, value in self._iter_env_overrides():
            current = cfg
            for part in path[:-1]:
                nxt = current.get(part)
                if not isinstance(nxt, dict):
                    nxt = {}
                    current[part] = nxt
                current = nxt
            logger.debug("Config override from environment: %s", ".".join(path))
            current[path[-1]] = value

    # ========== Accessors ==========

    def get(self, key: str, default: Any = None) -> Any:
        """Get a config value by dot-notation key.

        Example:
            >>> manager.get('image.repository')
            'glovebox'
            >>> manager.get('nonexistent.key', 'fallback')
            'fallback'
        """
        current: Any = self.load_config()
        for part in key.split("."):
            if isinstance(current, dict) and part in current:
                current = current[part]
            else:
                return default
        return current

    # ========== Typed helpers ==========

    @property
    def known_os(self) -> Tuple[str, ...]:
        return tuple(str(name) for name in self.get("os.known", []) or [])

    @property
    def base_image_name(self) -> str:
        return f"{self.get('image.repository')}:{self.get('image.base_tag')}"

    def user_mods_dir(self) -> Path:
        return self.user_dir / str(self.get("paths.mods_dir"))

    def project_mods_dir(self) -> Path:
        return self.project_dir / str(self.get("paths.mods_dir"))


__all__ = ["ConfigManager", "ENV_PREFIX", "CONFIG_FILE"]
