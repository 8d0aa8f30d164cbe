"""
kvdag.commands.reachable - Test reachability between two vertices.
"""

from __future__ import annotations

import argparse

from kvdag.commands.common import load


def run(args: argparse.Namespace) -> int:
    """Run the reachable command.

    Exit code 0 if TO is reachable from FROM, 1 otherwise.
    """
    loaded = load(args)
    source = loaded.vertex(args.source)
    target = loaded.vertex(args.target)

    result = source.reachable(target)
    if not args.quiet:
        print("true" if result else "false")
    return 0 if result else 1
