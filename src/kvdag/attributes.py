"""Attribute maps - Key/value storage with receiver-wins merging.

This module provides:
- AttributeMap: a mutable mapping with key-path lookup and `merge`
- AttributeNode: read access to an element's merged attribute view,
  shared by Vertex and Edge
"""

from __future__ import annotations

import copy
from collections.abc import Iterator, Mapping, MutableMapping
from typing import Any, Optional

# Declarative filter: every key must resolve to an equal value.
Filter = Optional[Mapping[str, Any]]


def _plain(value: Any) -> Any:
    """Convert nested mappings and lists into plain dicts and lists."""
    if isinstance(value, Mapping):
        return {key: _plain(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain(item) for item in value]
    return value


class AttributeMap(MutableMapping[str, Any]):
    """Key/value attributes of a single vertex or edge.

    Keys are unique and stored in insertion order. String keys that are
    not stored literally but contain the separator are resolved as key
    paths through nested mappings:

        >>> attrs = AttributeMap({"net": {"ip": "10.0.0.1"}})
        >>> attrs["net.ip"]
        '10.0.0.1'

    Writes always store the literal key. A separator of None disables
    key-path lookup.
    """

    def __init__(
        self,
        data: Mapping[str, Any] | None = None,
        *,
        separator: str | None = ".",
    ) -> None:
        self._data: dict[str, Any] = dict(data) if data else {}
        self.separator = separator

    def __getitem__(self, key: str) -> Any:
        if key in self._data:
            return self._data[key]
        if self.separator and isinstance(key, str) and self.separator in key:
            return self._lookup_path(key)
        raise KeyError(key)

    def __setitem__(self, key: str, value: Any) -> None:
        self._data[key] = value

    def __delitem__(self, key: str) -> None:
        del self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"AttributeMap({self._data!r})"

    def _lookup_path(self, key: str) -> Any:
        head, *rest = key.split(self.separator)
        if head not in self._data:
            raise KeyError(key)
        value = self._data[head]
        for part in rest:
            if not isinstance(value, Mapping) or part not in value:
                raise KeyError(key)
            value = value[part]
        return value

    def merge(self, other: Mapping[str, Any]) -> AttributeMap:
        """Overlay this map onto `other`, in place.

        Keys only present in `other` are added. On collision the value
        already held by this map wins. Nested mappings are not merged
        recursively.

        Args:
            other: Mapping whose entries fill in missing keys.

        Returns:
            This map, for chaining.
        """
        for key, value in other.items():
            self._data.setdefault(key, value)
        return self

    def copy(self, *, deep: bool = False) -> AttributeMap:
        """Return a copy sharing this map's separator.

        With `deep`, nested values are copied too, so mutating them does
        not reach back into this map.
        """
        data = copy.deepcopy(self._data) if deep else self._data
        return AttributeMap(data, separator=self.separator)

    def match(self, filter: Filter = None) -> bool:
        """Check that every filter key resolves to an equal value.

        An empty or missing filter matches everything.
        """
        if not filter:
            return True
        for key, expected in filter.items():
            try:
                value = self[key]
            except KeyError:
                return False
            if value != expected:
                return False
        return True

    def to_dict(self) -> dict[str, Any]:
        """Return a plain nested dict copy, e.g. for JSON output."""
        return _plain(self._data)


class AttributeNode:
    """Read access to the merged attribute view of a graph element.

    Subclasses provide `attribute_proxy()`; every lookup here is answered
    from that view, never from the element's own attributes alone.
    """

    def attribute_proxy(self) -> AttributeMap:
        raise NotImplementedError

    def __getitem__(self, key: str) -> Any:
        return self.attribute_proxy()[key]

    def __contains__(self, key: object) -> bool:
        return key in self.attribute_proxy()

    def get(self, key: str, default: Any = None) -> Any:
        """Get a proxied attribute, or `default` if it is not visible."""
        return self.attribute_proxy().get(key, default)

    def match(self, filter: Filter = None) -> bool:
        """Check the proxied attributes against a declarative filter."""
        return self.attribute_proxy().match(filter)

    def to_dict(self) -> dict[str, Any]:
        """Return the proxied attributes as a plain dict."""
        return self.attribute_proxy().to_dict()


__all__ = ["AttributeMap", "AttributeNode", "Filter"]
