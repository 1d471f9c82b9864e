"""
git-set-mtime config loader - user and repo config.

Loads config from ~/.config/git-set-mtime/config.yaml and optionally the
repo's .git-set-mtime.yaml or .git/set-mtime.yaml. The log level can also
be set through the GIT_SET_MTIME_LOG_LEVEL environment variable, which
wins over both files.
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from .constants import LOG_LEVEL_ENV
from .errors import ConfigError

logger = logging.getLogger("git-set-mtime.config")

# Canonical config keys
CONFIG_SKIP_MODIFIED = "skip_modified"
CONFIG_DIRECTORIES = "directories"
CONFIG_TRUST_ORDER = "trust_order"
CONFIG_LOG_LEVEL = "log_level"

DEFAULTS: Dict[str, Any] = {
    CONFIG_SKIP_MODIFIED: True,
    CONFIG_DIRECTORIES: True,
    CONFIG_TRUST_ORDER: True,
    CONFIG_LOG_LEVEL: "WARNING",
}


def _user_config_path() -> Path:
    """Path to user-level config (XDG or ~/.config/git-set-mtime/config.yaml)."""
    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg).expanduser() / "git-set-mtime" / "config.yaml"
    return Path.home() / ".config" / "git-set-mtime" / "config.yaml"


def _repo_config_paths(repo_root: Path) -> List[Path]:
    """Paths to repo-level config (first existing wins)."""
    root = Path(repo_root).resolve()
    return [
        root / ".git-set-mtime.yaml",
        root / ".git" / "set-mtime.yaml",
    ]


def _load_yaml(path: Path) -> Dict[str, Any]:
    """Load a YAML file with safe_load. Returns {} on missing or unreadable file."""
    if not path.exists() or not path.is_file():
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        logger.warning("Ignoring config %s: %s", path, e)
        return {}
    return data if isinstance(data, dict) else {}


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Merge override into base recursively. Override wins; base is not mutated."""
    out = dict(base)
    for k, v in override.items():
        if k in out and isinstance(out[k], dict) and isinstance(v, dict):
            out[k] = _deep_merge(out[k], v)
        else:
            out[k] = v
    return out


def load_config(repo_root: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load merged config (defaults + user + optional repo + environment).

    Merge order: defaults -> user -> repo (repo overrides user) -> env.

    Returns:
        Merged config dict. Read values through the accessor functions.
    """
    config = dict(DEFAULTS)
    user_cfg = _load_yaml(_user_config_path())
    if user_cfg:
        config = _deep_merge(config, user_cfg)

    if repo_root:
        for p in _repo_config_paths(repo_root):
            repo_cfg = _load_yaml(p)
            if repo_cfg:
                config = _deep_merge(config, repo_cfg)
                break

    env_level = os.environ.get(LOG_LEVEL_ENV)
    if env_level:
        config[CONFIG_LOG_LEVEL] = env_level
    return config


def _get_bool(config: Optional[Dict[str, Any]], key: str) -> bool:
    if not config or key not in config:
        return bool(DEFAULTS[key])
    value = config[key]
    if not isinstance(value, bool):
        raise ConfigError(f"config key '{key}' must be true or false, got {value!r}")
    return value


def skip_modified(config: Optional[Dict[str, Any]]) -> bool:
    """Return True if locally modified files are left untouched (default True)."""
    return _get_bool(config, CONFIG_SKIP_MODIFIED)


def update_directories(config: Optional[Dict[str, Any]]) -> bool:
    """Return True if directory mtimes are propagated and written (default True)."""
    return _get_bool(config, CONFIG_DIRECTORIES)


def trust_order(config: Optional[Dict[str, Any]]) -> bool:
    """Return True if history is trusted to be newest-first (default True)."""
    return _get_bool(config, CONFIG_TRUST_ORDER)


def log_level(config: Optional[Dict[str, Any]]) -> int:
    """Return the logging level as a logging module constant."""
    name = (config or {}).get(CONFIG_LOG_LEVEL, DEFAULTS[CONFIG_LOG_LEVEL])
    level = logging.getLevelName(str(name).upper())
    if not isinstance(level, int):
        raise ConfigError(f"config key '{CONFIG_LOG_LEVEL}' has unknown level {name!r}")
    return level
