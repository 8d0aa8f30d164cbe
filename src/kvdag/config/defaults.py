"""
kvdag.config.defaults - Default configuration values.
"""

DEFAULT_CONFIG = {
    "graph": {
        # Empty string disables key-path lookup
        "keypath_separator": ".",
    },
    "output": {
        "format": "text",
        "indent": 2,
    },
}
