"""Exception types raised by kvdag.

Every error is a precondition violation raised synchronously. Nothing in
the library retries or recovers from them.
"""

from __future__ import annotations


class KVDAGError(Exception):
    """Base class for all kvdag errors."""


class CrossGraphError(KVDAGError):
    """Two vertices were compared or linked across different KVDAGs."""


class CycleError(KVDAGError):
    """Adding the requested edge would make the graph cyclic."""


class GraphFormatError(KVDAGError):
    """A serialized graph document is malformed."""


__all__ = ["KVDAGError", "CrossGraphError", "CycleError", "GraphFormatError"]
