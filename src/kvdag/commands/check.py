"""
kvdag.commands.check - Load a graph file and report its shape.
"""

from __future__ import annotations

import argparse

from kvdag.commands.common import dump_json, load, output_format


def run(args: argparse.Namespace) -> int:
    """Run the check command.

    Loading already enforces acyclicity, so a file that loads is valid.
    """
    loaded = load(args)
    dag = loaded.dag

    summary = {
        "file": str(args.file),
        "vertices": len(dag),
        "edges": dag.edge_count(),
        "roots": loaded.sorted_names(dag.roots()),
        "leaves": loaded.sorted_names(dag.leaves()),
    }

    if output_format(args, loaded.config) == "json":
        print(dump_json(summary, loaded.config))
        return 0

    if not args.quiet:
        print(f"{args.file}: OK")
        print(f"  Vertices: {summary['vertices']}")
        print(f"  Edges:    {summary['edges']}")
        print(f"  Roots:    {', '.join(summary['roots']) or '-'}")
        print(f"  Leaves:   {', '.join(summary['leaves']) or '-'}")
    return 0
