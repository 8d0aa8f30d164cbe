"""
kvdag.commands.attrs_cmd - Show the attributes visible from a vertex.
"""

from __future__ import annotations

import argparse

from kvdag.commands.common import dump_json, load, output_format


def run(args: argparse.Namespace) -> int:
    """Run the attrs command."""
    loaded = load(args)
    vertex = loaded.vertex(args.vertex)

    attrs = vertex.attrs.to_dict() if args.own else vertex.to_dict()

    if args.key:
        view = vertex.attrs if args.own else vertex.attribute_proxy()
        attrs = {key: view[key] for key in args.key if key in view}

    if output_format(args, loaded.config) == "json":
        print(dump_json(attrs, loaded.config))
        return 0

    for key, value in attrs.items():
        print(f"{key} = {value!r}")
    return 0
