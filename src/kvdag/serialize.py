"""Graph Serialization - Export and import KVDAGs.

Vertices have no identity beyond the object itself, so serialized
documents name them. Names default to creation indices ("0", "1", ...).

Document shape:

    {
        "vertices": {
            "<name>": {
                "attrs": {...},
                "edges": [{"to": "<name>", "attrs": {...}}, ...],
            },
        },
        "metadata": {...},
    }

An edge may also be written as a bare target name.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import tomlkit
from tomlkit.exceptions import TOMLKitError

from kvdag.dag import KVDAG
from kvdag.errors import GraphFormatError
from kvdag.vertex import Vertex

logger = logging.getLogger(__name__)


def default_names(dag: KVDAG) -> dict[Vertex, str]:
    """Name every vertex by its creation index."""
    return {vertex: str(index) for index, vertex in enumerate(dag)}


def serialize_vertex(vertex: Vertex, names: Mapping[Vertex, str]) -> dict[str, Any]:
    """Serialize a Vertex and its outgoing edges.

    Only the vertex's own attributes are written; inherited values are
    recomputed when the graph is loaded again.

    Args:
        vertex: The vertex to serialize.
        names: Name for every vertex the edges may point at.

    Returns:
        Dict suitable for JSON or TOML serialization.
    """
    result: dict[str, Any] = {"attrs": vertex.attrs.to_dict()}

    edges = []
    for edge in vertex.edges:
        entry: dict[str, Any] = {"to": names[edge.to_vertex]}
        if edge.attrs:
            entry["attrs"] = edge.attrs.to_dict()
        edges.append(entry)
    if edges:
        result["edges"] = edges

    return result


def serialize_graph(
    dag: KVDAG,
    names: Mapping[Vertex, str] | None = None,
) -> dict[str, Any]:
    """Serialize a KVDAG to a JSON-compatible dict.

    Args:
        dag: The graph to serialize.
        names: Optional vertex names; creation indices are used otherwise.

    Returns:
        Dict with named vertices and metadata.
    """
    if names is None:
        names = default_names(dag)

    vertices = {names[vertex]: serialize_vertex(vertex, names) for vertex in dag}
    return {
        "vertices": vertices,
        "metadata": {
            "vertex_count": len(vertices),
            "edge_count": dag.edge_count(),
            "root_count": sum(1 for _ in dag.roots()),
        },
    }


def _edge_target(owner: str, raw_edge: Any) -> tuple[str, Any]:
    if isinstance(raw_edge, str):
        return raw_edge, None
    if isinstance(raw_edge, Mapping) and "to" in raw_edge:
        return str(raw_edge["to"]), raw_edge.get("attrs")
    raise GraphFormatError(f"Vertex {owner!r} has a malformed edge: {raw_edge!r}")


def load_graph(
    data: Mapping[str, Any],
    *,
    separator: str | None = ".",
) -> tuple[KVDAG, dict[str, Vertex]]:
    """Build a KVDAG from a serialized document.

    All vertices are created first, then edges are added in document
    order through `Vertex.edge()`, so a cyclic document raises
    CycleError at the edge that closes the cycle.

    Args:
        data: Parsed document (see module docstring).
        separator: Key-path separator for the new graph.

    Returns:
        Tuple of (graph, mapping of vertex name to Vertex).

    Raises:
        GraphFormatError: If the document does not have the expected shape.
        CycleError: If the edges would form a cycle.
    """
    if not isinstance(data, Mapping):
        raise GraphFormatError("Graph document must be a table")
    raw_vertices = data.get("vertices", {})
    if not isinstance(raw_vertices, Mapping):
        raise GraphFormatError("'vertices' must be a table of named vertices")

    dag = KVDAG(separator=separator)
    names: dict[str, Vertex] = {}
    for name, entry in raw_vertices.items():
        if not isinstance(entry, Mapping):
            raise GraphFormatError(f"Vertex {name!r} must be a table")
        attrs = entry.get("attrs", {})
        if not isinstance(attrs, Mapping):
            raise GraphFormatError(f"Vertex {name!r} has non-table attrs")
        names[str(name)] = dag.vertex(attrs)

    for name, entry in raw_vertices.items():
        raw_edges = entry.get("edges", [])
        if not isinstance(raw_edges, list):
            raise GraphFormatError(f"Vertex {name!r} has non-list edges")
        for raw_edge in raw_edges:
            target, attrs = _edge_target(str(name), raw_edge)
            if target not in names:
                raise GraphFormatError(
                    f"Vertex {name!r} has an edge to unknown vertex {target!r}"
                )
            if attrs is not None and not isinstance(attrs, Mapping):
                raise GraphFormatError(f"Edge {name!r} -> {target!r} has non-table attrs")
            names[str(name)].edge(names[target], attrs)

    logger.debug("Loaded %d vertices, %d edges", len(dag), dag.edge_count())
    return dag, names


def to_json(
    dag: KVDAG,
    names: Mapping[Vertex, str] | None = None,
    indent: int | None = 2,
) -> str:
    """Serialize a KVDAG to a JSON string."""
    return json.dumps(serialize_graph(dag, names), indent=indent)


def from_json(text: str, *, separator: str | None = ".") -> tuple[KVDAG, dict[str, Vertex]]:
    """Load a KVDAG from a JSON string."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise GraphFormatError(f"Invalid JSON: {e}") from e
    return load_graph(data, separator=separator)


def to_toml(dag: KVDAG, names: Mapping[Vertex, str] | None = None) -> str:
    """Serialize a KVDAG to a TOML string.

    TOML has no null, so attributes holding None cannot be written.
    """
    return tomlkit.dumps(serialize_graph(dag, names))


def from_toml(text: str, *, separator: str | None = ".") -> tuple[KVDAG, dict[str, Vertex]]:
    """Load a KVDAG from a TOML string."""
    try:
        data = tomlkit.parse(text).unwrap()
    except TOMLKitError as e:
        raise GraphFormatError(f"Invalid TOML: {e}") from e
    return load_graph(data, separator=separator)


def read_graph_file(
    path: Path,
    *,
    separator: str | None = ".",
) -> tuple[KVDAG, dict[str, Vertex]]:
    """Load a KVDAG from a .json or .toml file, chosen by suffix.

    Raises:
        GraphFormatError: For unknown suffixes or unparseable content.
        OSError: If the file cannot be read.
    """
    path = Path(path)
    text = path.read_text(encoding="utf-8")
    suffix = path.suffix.lower()
    if suffix == ".json":
        return from_json(text, separator=separator)
    if suffix == ".toml":
        return from_toml(text, separator=separator)
    raise GraphFormatError(f"Unsupported graph file type: {path.name}")


__all__ = [
    "default_names",
    "serialize_vertex",
    "serialize_graph",
    "load_graph",
    "to_json",
    "from_json",
    "to_toml",
    "from_toml",
    "read_graph_file",
]
