"""
kvdag.config - Configuration loading and defaults
"""

from kvdag.config.defaults import DEFAULT_CONFIG
from kvdag.config.loader import (
    CONFIG_FILENAME,
    _apply_env_overrides,
    _try_parse_env_value,
    find_config_file,
    load_config,
    merge_configs,
    parse_toml_document,
)

__all__ = [
    "CONFIG_FILENAME",
    "DEFAULT_CONFIG",
    "find_config_file",
    "load_config",
    "merge_configs",
    "parse_toml_document",
]
