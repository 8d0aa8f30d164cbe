"""
kvdag - Key-value directed acyclic graphs

A KVDAG is a DAG whose vertices and edges carry key/value attributes.
Looking up an attribute on a vertex sees everything contributed by the
vertices it can reach, with nearer contributions overriding farther ones.
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("kvdag")
except PackageNotFoundError:
    __version__ = "0.0.0+unknown"  # Not installed
__license__ = "MIT"

from kvdag.attributes import AttributeMap, AttributeNode
from kvdag.dag import KVDAG
from kvdag.edge import Edge
from kvdag.errors import CrossGraphError, CycleError, GraphFormatError, KVDAGError
from kvdag.vertex import Vertex

__all__ = [
    "__version__",
    "AttributeMap",
    "AttributeNode",
    "CrossGraphError",
    "CycleError",
    "Edge",
    "GraphFormatError",
    "KVDAG",
    "KVDAGError",
    "Vertex",
]
