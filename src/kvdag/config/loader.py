"""
kvdag.config.loader - Configuration file discovery and loading.

Configuration is layered: DEFAULT_CONFIG, then the nearest .kvdag.toml,
then KVDAG_<SECTION>_<KEY> environment variables.
"""

from __future__ import annotations

import copy
import json
import logging
import os
from pathlib import Path
from typing import Any

import tomlkit

from kvdag.config.defaults import DEFAULT_CONFIG

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".kvdag.toml"
ENV_PREFIX = "KVDAG_"


def find_config_file(start: Path) -> Path | None:
    """Find .kvdag.toml in `start` or any parent directory.

    Args:
        start: Directory to start searching from.

    Returns:
        Path to the config file, or None if not found.
    """
    current = Path(start).resolve()
    while True:
        candidate = current / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
        if current == current.parent:
            return None
        current = current.parent


def parse_toml_document(text: str) -> dict[str, Any]:
    """Parse TOML text into plain Python values."""
    return tomlkit.parse(text).unwrap()


def merge_configs(defaults: dict[str, Any], user: dict[str, Any]) -> dict[str, Any]:
    """Deep-merge `user` over `defaults` without mutating either.

    Nested tables are merged key by key; any other value in `user`
    replaces the default.
    """
    merged = copy.deepcopy(defaults)
    for key, value in user.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_configs(merged[key], value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


def _try_parse_env_value(value: str) -> Any:
    """Parse an environment value into a typed value where possible.

    JSON arrays and objects are decoded, "true"/"false" become booleans,
    and anything else (including malformed JSON) stays a string.
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


def _apply_env_overrides(config: dict[str, Any]) -> dict[str, Any]:
    """Apply KVDAG_<SECTION>_<KEY> environment variables to `config`.

    The section is the first underscore-separated word; the rest, in
    lower case, is the key (KVDAG_GRAPH_KEYPATH_SEPARATOR sets
    graph.keypath_separator).
    """
    for name, raw in os.environ.items():
        if not name.startswith(ENV_PREFIX):
            continue
        section, _, key = name[len(ENV_PREFIX):].lower().partition("_")
        if not section or not key:
            continue
        table = config.setdefault(section, {})
        if not isinstance(table, dict):
            raise ValueError(f"Cannot apply {name}: config [{section}] is not a table")
        table[key] = _try_parse_env_value(raw)
        logger.debug("Config override from %s", name)
    return config


def _check_sections(config: dict[str, Any]) -> None:
    """Reject scalars where DEFAULT_CONFIG has a table.

    Raises:
        ValueError: If a default section was overridden by a non-table.
    """
    for section, default in DEFAULT_CONFIG.items():
        if isinstance(default, dict) and not isinstance(config.get(section), dict):
            raise ValueError(f"Config section [{section}] must be a table")


def load_config(path: Path | None = None) -> dict[str, Any]:
    """Load configuration, merged over defaults.

    Args:
        path: Explicit config file. When None, the nearest .kvdag.toml
            above the working directory is used, if any.

    Returns:
        The merged configuration dict.

    Raises:
        OSError: If an explicit path cannot be read.
        tomlkit.exceptions.ParseError: If the file is not valid TOML.
        ValueError: If a section that must be a table is not one.
    """
    if path is None:
        path = find_config_file(Path.cwd())

    user: dict[str, Any] = {}
    if path is not None:
        user = parse_toml_document(Path(path).read_text(encoding="utf-8"))
        logger.debug("Loaded config from %s", path)

    config = merge_configs(DEFAULT_CONFIG, user)
    _check_sections(config)
    return _apply_env_overrides(config)
