"""
kvdag.commands.common - Helpers shared by command implementations.
"""

from __future__ import annotations

import argparse
import json
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

from kvdag.config import _try_parse_env_value, load_config
from kvdag.dag import KVDAG
from kvdag.errors import GraphFormatError
from kvdag.serialize import read_graph_file
from kvdag.vertex import Vertex


class LoadedGraph:
    """A graph read from a file, with its vertex names and config."""

    def __init__(self, dag: KVDAG, names: dict[str, Vertex], config: dict[str, Any]) -> None:
        self.dag = dag
        self.names = names
        self.config = config
        self._reverse = {vertex: name for name, vertex in names.items()}

    def vertex(self, name: str) -> Vertex:
        """Look up a vertex by name.

        Raises:
            GraphFormatError: If no vertex has that name.
        """
        try:
            return self.names[name]
        except KeyError:
            raise GraphFormatError(f"No vertex named {name!r}") from None

    def name_of(self, vertex: Vertex) -> str:
        return self._reverse[vertex]

    def sorted_names(self, vertices: Iterable[Vertex]) -> list[str]:
        """Names of `vertices`, in file order."""
        order = {vertex: index for index, vertex in enumerate(self.dag)}
        return [self._reverse[v] for v in sorted(vertices, key=order.__getitem__)]


def load(args: argparse.Namespace) -> LoadedGraph:
    """Load config and the graph file named by `args.file`."""
    config = load_config(getattr(args, "config", None))
    separator = config["graph"].get("keypath_separator") or None
    dag, names = read_graph_file(Path(args.file), separator=separator)
    return LoadedGraph(dag, names, config)


def output_format(args: argparse.Namespace, config: Mapping[str, Any]) -> str:
    """Resolve output format: --json flag, then config."""
    if getattr(args, "json", False):
        return "json"
    return str(config["output"].get("format", "text"))


def dump_json(data: Any, config: Mapping[str, Any]) -> str:
    indent = config["output"].get("indent", 2)
    return json.dumps(data, indent=int(indent) if indent is not None else None)


def parse_filters(items: Iterable[str] | None) -> dict[str, Any]:
    """Parse KEY=VALUE pairs into a filter mapping.

    Values use the same typing rules as environment overrides, plus
    integers: JSON lists/objects, true/false, whole numbers, else strings.

    Raises:
        ValueError: If an item has no '='.
    """
    result: dict[str, Any] = {}
    for item in items or []:
        key, sep, raw = item.partition("=")
        if not sep or not key:
            raise ValueError(f"Filter must be KEY=VALUE, got {item!r}")
        value = _try_parse_env_value(raw)
        if isinstance(value, str) and value.lstrip("-").isdigit():
            value = int(value)
        result[key] = value
    return result
