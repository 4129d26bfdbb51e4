from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from platformdirs import user_config_dir

from .models import ServerConfig

APP_NAME = "pyeverything"


class ConfigError(ValueError):
    pass


def _candidate_paths(cwd: Path) -> list[Path]:
    # project-level (higher priority)
    return [
        cwd / "pyeverything.yaml",
        cwd / ".pyeverything.yaml",
    ]


def _global_candidate_paths() -> list[Path]:
    cfg_dir = Path(user_config_dir(APP_NAME))
    return [
        cfg_dir / "pyeverything.yaml",
    ]


def _load_yaml(p: Path) -> dict[str, Any] | None:
    try:
        obj = yaml.safe_load(p.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError):
        return None
    if isinstance(obj, dict):
        return obj
    return None


def load_server_config(*, cwd: Path, explicit_path: Path | None = None) -> ServerConfig:
    """Load server config.

    Merge order: global < project < explicit_path. A missing or unparsable
    global/project file is skipped; an explicit path must exist and parse.
    """
    cfg = ServerConfig()

    for p in _global_candidate_paths():
        if p.exists() and p.is_file():
            obj = _load_yaml(p)
            if obj is not None:
                cfg.apply_obj(obj, base_dir=p.parent)
                cfg.loaded_from = p

    for p in _candidate_paths(cwd):
        if p.exists() and p.is_file():
            obj = _load_yaml(p)
            if obj is not None:
                cfg.apply_obj(obj, base_dir=p.parent)
                cfg.loaded_from = p
                break  # first match wins for project-level

    if explicit_path is not None:
        p = explicit_path.expanduser().resolve()
        if not p.exists() or not p.is_file():
            raise ConfigError(f"Config YAML not found: {p}")
        try:
            obj = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {p}: {e}") from e
        if not isinstance(obj, dict):
            raise ConfigError(f"Config YAML must be a mapping: {p}")
        cfg.apply_obj(obj, base_dir=p.parent)
        cfg.loaded_from = p

    return cfg
