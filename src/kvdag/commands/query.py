"""
kvdag.commands.query - List related vertices of a vertex.
"""

from __future__ import annotations

import argparse

from kvdag.commands.common import dump_json, load, output_format, parse_filters

RELATIONS = ("parents", "children", "ancestors", "descendants")


def run(args: argparse.Namespace) -> int:
    """Run the query command."""
    loaded = load(args)
    vertex = loaded.vertex(args.vertex)
    filter = parse_filters(args.filter)

    related = getattr(vertex, args.relation)(filter)
    names = loaded.sorted_names(related)

    if output_format(args, loaded.config) == "json":
        print(dump_json(names, loaded.config))
        return 0

    for name in names:
        print(name)
    return 0
