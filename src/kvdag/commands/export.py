"""
kvdag.commands.export - Write a graph file in normalized form.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from kvdag.commands.common import load
from kvdag.serialize import to_json, to_toml


def run(args: argparse.Namespace) -> int:
    """Run the export command."""
    loaded = load(args)
    names = {vertex: name for name, vertex in loaded.names.items()}

    fmt = args.format or loaded.config["output"].get("format", "json")
    if fmt == "toml":
        text = to_toml(loaded.dag, names)
    else:
        indent = loaded.config["output"].get("indent", 2)
        text = to_json(loaded.dag, names, indent=int(indent)) + "\n"

    if args.output:
        Path(args.output).write_text(text, encoding="utf-8")
        if not args.quiet:
            print(f"Wrote {args.output}", file=sys.stderr)
    else:
        sys.stdout.write(text)
    return 0
