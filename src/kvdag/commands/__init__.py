"""
kvdag.commands - CLI command implementations
"""

__all__ = [
    "attrs_cmd",
    "check",
    "export",
    "query",
    "reachable",
]
