"""
preproc.config.loader - Find, parse and merge configuration files.

Configuration is read from ``.preproc.toml`` in the working directory or
the nearest parent that has one, merged over DEFAULT_CONFIG, and finally
overridden by ``PREPROC_<SECTION>_<KEY>`` environment variables.
"""

from __future__ import annotations

import copy
import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

import tomlkit

from preproc.config.defaults import CONFIG_FILENAME, DEFAULT_CONFIG, ENV_PREFIX


def find_config_file(start_dir: Path) -> Optional[Path]:
    """Find the configuration file in start_dir or one of its parents.

    Args:
        start_dir: Directory to start searching from.

    Returns:
        Path to the configuration file, or None if none exists.
    """
    current = Path(start_dir).resolve()
    while True:
        candidate = current / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
        if current == current.parent:
            return None
        current = current.parent


def parse_toml(content: str) -> Dict[str, Any]:
    """Parse TOML text into plain Python values."""
    return tomlkit.parse(content).unwrap()


def merge_configs(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Deep-merge override into a copy of base.

    Nested tables are merged key by key; any other value in override
    replaces the value in base.
    """
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_configs(merged[key], value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


def load_config(config_path: Path) -> Dict[str, Any]:
    """Load a configuration file and merge it over the defaults.

    Raises:
        FileNotFoundError: If config_path does not exist.
        tomlkit.exceptions.ParseError: If the file is not valid TOML.
    """
    content = Path(config_path).read_text(encoding="utf-8")
    return merge_configs(DEFAULT_CONFIG, parse_toml(content))


def get_config(
    config_path: Optional[Path] = None,
    start_dir: Optional[Path] = None,
) -> Dict[str, Any]:
    """Return the effective configuration.

    Args:
        config_path: Explicit configuration file. If None, one is searched
            for from start_dir (default: the working directory).
        start_dir: Where to start searching for a configuration file.

    Returns:
        Configuration dict with defaults and environment overrides applied.
    """
    if config_path is None:
        config_path = find_config_file(start_dir or Path.cwd())

    if config_path is not None:
        config = load_config(config_path)
    else:
        config = copy.deepcopy(DEFAULT_CONFIG)

    return _apply_env_overrides(config)


def _try_parse_env_value(value: str) -> Any:
    """Convert an environment variable string to a typed value.

    ``true``/``false`` become booleans and JSON arrays or objects are
    decoded. Anything else, including malformed JSON, stays a string.
    """
    lowered = value.lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    if value.startswith(("[", "{")):
        try:
            return json.loads(value)
        except json.JSONDecodeError:
            return value
    return value


def _apply_env_overrides(config: Dict[str, Any]) -> Dict[str, Any]:
    """Apply PREPROC_<SECTION>_<KEY> environment variables to config.

    The section is the first word after the prefix and the key is the
    rest, so PREPROC_PREPROCESS_INCLUDE_PATHS sets
    ``preprocess.include_paths``.
    """
    for name, raw in os.environ.items():
        if not name.startswith(ENV_PREFIX):
            continue
        parts = name[len(ENV_PREFIX) :].lower().split("_", 1)
        if len(parts) != 2 or not all(parts):
            continue
        section, key = parts
        config.setdefault(section, {})[key] = _try_parse_env_value(raw)
    return config
