"""KVDAG - Container and factory for the vertices of one graph."""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from typing import Any

from kvdag.attributes import AttributeMap, Filter
from kvdag.edge import Edge
from kvdag.vertex import Vertex

logger = logging.getLogger(__name__)

_UNSET: Any = object()


class KVDAG:
    """A key-value directed acyclic graph.

    The graph owns its vertices and is the only place they are created.
    Every attribute map in one graph shares the same key-path separator.

    Example:
        >>> dag = KVDAG()
        >>> base = dag.vertex({"os": "linux", "dns": "10.0.0.53"})
        >>> host = dag.vertex({"name": "web01"})
        >>> _ = host.edge(base)
        >>> host["os"]
        'linux'
    """

    def __init__(
        self,
        *,
        separator: Any = _UNSET,
        config: Mapping[str, Any] | None = None,
    ) -> None:
        """Create an empty graph.

        Args:
            separator: Key-path separator; None disables key paths.
                Wins over `config` when given.
            config: Loaded config dict; `graph.keypath_separator` is used
                when no separator is passed. An empty value disables
                key paths.
        """
        if separator is _UNSET:
            separator = "."
            if config is not None:
                separator = config.get("graph", {}).get("keypath_separator", ".") or None
        self.separator: str | None = separator
        self._vertices: list[Vertex] = []

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> KVDAG:
        """Create an empty graph configured from a loaded config dict.

        An empty `graph.keypath_separator` disables key-path lookup.
        """
        return cls(config=config)

    def __repr__(self) -> str:
        return f"<KVDAG vertices={len(self._vertices)}>"

    def __len__(self) -> int:
        return len(self._vertices)

    def __iter__(self) -> Iterator[Vertex]:
        """Iterate vertices in creation order."""
        return iter(self._vertices)

    def __contains__(self, vertex: object) -> bool:
        return isinstance(vertex, Vertex) and vertex.dag is self

    def attribute_map(self, data: Mapping[str, Any] | None = None) -> AttributeMap:
        """Create an attribute map using this graph's separator."""
        return AttributeMap(data, separator=self.separator)

    def vertex(self, attrs: Mapping[str, Any] | None = None) -> Vertex:
        """Create a new vertex in this graph.

        Args:
            attrs: Optional initial key/values for the vertex.

        Returns:
            The new Vertex, already registered with this graph.
        """
        vertex = Vertex(self, self.attribute_map(attrs))
        self._vertices.append(vertex)
        logger.debug("Created vertex %r", vertex)
        return vertex

    new_vertex = vertex

    def vertices(self, filter: Filter = None) -> set[Vertex]:
        """Return all vertices whose proxied attributes match `filter`."""
        if not filter:
            return set(self._vertices)
        return {vertex for vertex in self._vertices if vertex.match(filter)}

    def edges(self, filter: Filter = None) -> set[Edge]:
        """Return all edges whose proxied attributes match `filter`."""
        return {
            edge
            for vertex in self._vertices
            for edge in vertex.edges
            if not filter or edge.match(filter)
        }

    def edge_count(self) -> int:
        """Return the total number of edges in this graph."""
        return sum(len(vertex.edges) for vertex in self._vertices)

    def roots(self) -> Iterator[Vertex]:
        """Iterate vertices without parents, in creation order."""
        for vertex in self._vertices:
            if not vertex.edges:
                yield vertex

    def leaves(self) -> Iterator[Vertex]:
        """Iterate vertices without children, in creation order."""
        for vertex in self._vertices:
            if not vertex.children():
                yield vertex


__all__ = ["KVDAG"]
