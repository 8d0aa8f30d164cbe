"""Edge - Immutable link from a vertex to one of its parents."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from kvdag.attributes import AttributeMap, AttributeNode

if TYPE_CHECKING:
    from kvdag.dag import KVDAG
    from kvdag.vertex import Vertex


@dataclass(frozen=True, eq=False)
class Edge(AttributeNode):
    """A directed edge towards a parent vertex.

    Edges are created only by `Vertex.edge()` and are owned by the source
    vertex. Two edges between the same pair of vertices are distinct
    objects; equality is identity.

    Attributes:
        dag: The KVDAG both endpoints belong to.
        to_vertex: The parent vertex this edge points at.
        attrs: Key/values local to this edge.
    """

    dag: KVDAG = field(repr=False)
    to_vertex: Vertex
    attrs: AttributeMap

    def attribute_proxy(self) -> AttributeMap:
        """Return this edge's attributes merged over its target's view.

        The result is a detached copy; nested values can be changed
        without affecting any vertex or edge.
        """
        return self._overlay(self.to_vertex.attribute_proxy()).copy(deep=True)

    def _overlay(self, target_proxy: AttributeMap) -> AttributeMap:
        return self.attrs.copy().merge(target_proxy)


__all__ = ["Edge"]
