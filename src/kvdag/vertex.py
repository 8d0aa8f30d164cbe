"""Vertex - A node in a KVDAG.

Vertices hold their own attributes, the edges pointing at their parents,
and a cache of the children that point back at them. All traversal,
reachability and cycle-checked edge creation lives here.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from kvdag.attributes import AttributeMap, AttributeNode, Filter
from kvdag.edge import Edge
from kvdag.errors import CrossGraphError, CycleError

if TYPE_CHECKING:
    from kvdag.dag import KVDAG

logger = logging.getLogger(__name__)


def _as_vertex(other: Any) -> Vertex:
    """Coerce `other` through its `to_vertex` capability if needed."""
    if isinstance(other, Vertex):
        return other
    converter = getattr(other, "to_vertex", None)
    if callable(converter):
        converter = converter()
    if not isinstance(converter, Vertex):
        raise TypeError(f"Cannot convert {type(other).__name__} to a Vertex")
    return converter


def _select(candidates: Iterable[Vertex], filter: Filter) -> set[Vertex]:
    if not filter:
        return set(candidates)
    return {vertex for vertex in candidates if vertex.match(filter)}


@dataclass(eq=False, repr=False)
class Vertex(AttributeNode):
    """A vertex in a KVDAG.

    Never construct a Vertex directly; use `KVDAG.vertex()`, which also
    registers it with the graph. Equality and hashing are by identity.

    Edges point from a vertex towards the more general vertices it
    depends on, so `a.edge(b)` makes `b` a parent of `a`.
    """

    dag: KVDAG
    _attrs: AttributeMap = field(default_factory=AttributeMap)

    # Outgoing edges in creation order; children keyed by identity, ordered
    _edges: list[Edge] = field(default_factory=list, init=False)
    _children: dict[Vertex, None] = field(default_factory=dict, init=False)

    def __repr__(self) -> str:
        return f"<Vertex attrs={self._attrs.to_dict()!r} edges={len(self._edges)}>"

    @property
    def attrs(self) -> AttributeMap:
        """This vertex's own attributes, without anything inherited."""
        return self._attrs

    @property
    def edges(self) -> tuple[Edge, ...]:
        """Outgoing edges, in creation order."""
        return tuple(self._edges)

    def __setitem__(self, key: str, value: Any) -> None:
        self._attrs[key] = value

    # ─────────────────────────────────────────────────────────────────────
    # Adjacency
    # ─────────────────────────────────────────────────────────────────────

    def parents(self, filter: Filter = None) -> set[Vertex]:
        """Return the direct parents, optionally filtered.

        Args:
            filter: Key/value pairs every returned parent's proxied
                attributes must match.

        Returns:
            Set of vertices one outgoing edge away.
        """
        return _select((edge.to_vertex for edge in self._edges), filter)

    def children(self, filter: Filter = None) -> set[Vertex]:
        """Return the direct children, optionally filtered.

        Answered from the children cache maintained by `edge()`.
        """
        return _select(self._children, filter)

    def _iter_parents(self) -> Iterable[Vertex]:
        return (edge.to_vertex for edge in self._edges)

    def _iter_children(self) -> Iterable[Vertex]:
        return iter(self._children)

    # ─────────────────────────────────────────────────────────────────────
    # Closures and reachability
    # ─────────────────────────────────────────────────────────────────────

    def _closure(
        self,
        step: Callable[[Vertex], Iterable[Vertex]],
        filter: Filter,
    ) -> set[Vertex]:
        result: set[Vertex] = set()
        visited = {self}
        stack = [self]
        while stack:
            vertex = stack.pop()
            if not filter or vertex.match(filter):
                result.add(vertex)
            for neighbour in step(vertex):
                if neighbour not in visited:
                    visited.add(neighbour)
                    stack.append(neighbour)
        return result

    def ancestors(self, filter: Filter = None) -> set[Vertex]:
        """Return this vertex and everything reachable through its parents.

        The filter applies to every candidate, this vertex included.
        Traversal continues through vertices the filter rejects.
        """
        return self._closure(Vertex._iter_parents, filter)

    def descendants(self, filter: Filter = None) -> set[Vertex]:
        """Return this vertex and everything reachable through its children."""
        return self._closure(Vertex._iter_children, filter)

    def _check_same_dag(self, other: Vertex) -> None:
        if self.dag is not other.dag:
            raise CrossGraphError("Not in the same DAG")

    def reachable(self, other: Vertex) -> bool:
        """Is `other` reachable from here through zero or more edges?

        Raises:
            CrossGraphError: If `other` belongs to a different KVDAG.
        """
        self._check_same_dag(other)
        if other is self:
            return True

        visited = {self}
        stack = [self]
        while stack:
            for parent in stack.pop()._iter_parents():
                if parent is other:
                    return True
                if parent not in visited:
                    visited.add(parent)
                    stack.append(parent)
        return False

    def reachable_from(self, other: Vertex) -> bool:
        """Am I reachable from `other`?

        Raises:
            CrossGraphError: If `other` belongs to a different KVDAG.
        """
        return other.reachable(self)

    def compare(self, other: Vertex) -> int:
        """Three-way comparison derived from reachability.

        Returns -1 if `other` is reachable from this vertex, 1 if this
        vertex is reachable from `other`, and 0 otherwise.

        This is only a partial order: unrelated vertices compare as 0,
        which does not make them interchangeable, and 0 is not
        transitive. Rich comparison operators are deliberately absent;
        use `functools.cmp_to_key(Vertex.compare)` where a sort key is
        needed and the result is understood to be one of many valid
        orderings.
        """
        if self.reachable(other):
            return -1
        if self.reachable_from(other):
            return 1
        return 0

    # ─────────────────────────────────────────────────────────────────────
    # Mutation
    # ─────────────────────────────────────────────────────────────────────

    def edge(self, other: Any, attrs: Mapping[str, Any] | None = None) -> Edge:
        """Create an edge towards `other`, making it a parent of this vertex.

        This is the only way edges are ever added. Both checks run before
        anything is modified, so a rejected edge leaves the graph unchanged.

        Args:
            other: A Vertex, or an object with a `to_vertex` capability.
            attrs: Optional key/values for the new edge.

        Returns:
            The created Edge.

        Raises:
            CrossGraphError: If `other` belongs to a different KVDAG.
            CycleError: If `other` can already reach this vertex.
        """
        other = _as_vertex(other)
        self._check_same_dag(other)
        if other.reachable(self):
            logger.info("Rejected edge %r -> %r: would become cyclic", self, other)
            raise CycleError("Would become cyclic")

        edge = Edge(self.dag, other, self.dag.attribute_map(attrs))
        self._edges.append(edge)
        other._add_child(self)
        logger.debug("Created edge %r -> %r", self, other)
        return edge

    def _add_child(self, other: Vertex) -> None:
        # Only called from edge(), after all checks have passed
        self._children[other] = None

    # ─────────────────────────────────────────────────────────────────────
    # Attribute inheritance
    # ─────────────────────────────────────────────────────────────────────

    def _ancestors_postorder(self) -> list[Vertex]:
        """Ancestors ordered so every parent precedes its children."""
        order: list[Vertex] = []
        visited = {self}
        stack = [(self, iter(self._edges))]
        while stack:
            vertex, edges = stack[-1]
            for edge in edges:
                parent = edge.to_vertex
                if parent not in visited:
                    visited.add(parent)
                    stack.append((parent, iter(parent._edges)))
                    break
            else:
                stack.pop()
                order.append(vertex)
        return order

    def attribute_proxy(self) -> AttributeMap:
        """Return the attributes visible from this vertex.

        Own attributes win over edge attributes, which win over anything
        the edge's target sees. Among several edges, the one created
        first wins. Each ancestor's view is computed once per call, so
        diamond ancestries stay linear.

        The result is a detached snapshot: nested values are copied, so
        changing them never rewrites an ancestor's own attributes.
        Write through `vertex[key] = value` instead.
        """
        proxies: dict[Vertex, AttributeMap] = {}
        for vertex in self._ancestors_postorder():
            result = vertex._attrs.copy()
            for edge in vertex._edges:
                result.merge(edge._overlay(proxies[edge.to_vertex]))
            proxies[vertex] = result
        return proxies[self].copy(deep=True)


__all__ = ["Vertex"]
