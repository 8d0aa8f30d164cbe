"""
kvdag.cli - Command-line interface.

Main entry point for the kvdag CLI tool.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from kvdag import __version__
from kvdag.commands import attrs_cmd, check, export, query, reachable
from kvdag.errors import KVDAGError


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="kvdag",
        description="Inspect key-value directed acyclic graphs",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  kvdag check hosts.toml                        # Load and validate a graph file
  kvdag attrs hosts.toml web01                  # Attributes visible from a vertex
  kvdag query hosts.toml web01 -r ancestors     # Everything web01 inherits from
  kvdag query hosts.toml base -r descendants --filter role=web
  kvdag reachable hosts.toml web01 base         # Exit 0 if base is reachable
  kvdag export hosts.toml --format json         # Normalize to JSON

Configuration:
  .kvdag.toml in the current or any parent directory, or --config PATH.
  Environment variables KVDAG_<SECTION>_<KEY> override file values.

For detailed command help: kvdag <command> --help
        """,
    )

    # Global options
    parser.add_argument(
        "--version",
        action="version",
        version=f"kvdag {__version__}",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to configuration file",
        metavar="PATH",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Verbose output",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Suppress non-error output",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # check command
    check_parser = subparsers.add_parser(
        "check",
        help="Load a graph file and report vertex and edge counts",
    )
    check_parser.add_argument("file", type=Path, help="Graph file (.json or .toml)")
    check_parser.add_argument("-j", "--json", action="store_true", help="Output JSON")

    # attrs command
    attrs_parser = subparsers.add_parser(
        "attrs",
        help="Show the attributes visible from a vertex",
    )
    attrs_parser.add_argument("file", type=Path, help="Graph file (.json or .toml)")
    attrs_parser.add_argument("vertex", help="Vertex name")
    attrs_parser.add_argument(
        "-k",
        "--key",
        action="append",
        help="Only show this key (can be repeated; key paths allowed)",
        metavar="KEY",
    )
    attrs_parser.add_argument(
        "--own",
        action="store_true",
        help="Show only the vertex's own attributes, nothing inherited",
    )
    attrs_parser.add_argument("-j", "--json", action="store_true", help="Output JSON")

    # query command
    query_parser = subparsers.add_parser(
        "query",
        help="List parents, children, ancestors or descendants of a vertex",
    )
    query_parser.add_argument("file", type=Path, help="Graph file (.json or .toml)")
    query_parser.add_argument("vertex", help="Vertex name")
    query_parser.add_argument(
        "-r",
        "--relation",
        choices=query.RELATIONS,
        default="ancestors",
        help="Relation to follow (default: ancestors)",
    )
    query_parser.add_argument(
        "-f",
        "--filter",
        action="append",
        help="Only include vertices whose attributes match KEY=VALUE (can be repeated)",
        metavar="KEY=VALUE",
    )
    query_parser.add_argument("-j", "--json", action="store_true", help="Output JSON")

    # reachable command
    reachable_parser = subparsers.add_parser(
        "reachable",
        help="Test whether one vertex can reach another",
    )
    reachable_parser.add_argument("file", type=Path, help="Graph file (.json or .toml)")
    reachable_parser.add_argument("source", help="Vertex to start from")
    reachable_parser.add_argument("target", help="Vertex to reach")

    # export command
    export_parser = subparsers.add_parser(
        "export",
        help="Write a graph file in normalized form",
    )
    export_parser.add_argument("file", type=Path, help="Graph file (.json or .toml)")
    export_parser.add_argument(
        "--format",
        choices=["json", "toml"],
        help="Output format (default: json)",
    )
    export_parser.add_argument(
        "-o",
        "--output",
        type=Path,
        help="Write to PATH instead of stdout",
        metavar="PATH",
    )

    return parser


def _configure_logging(args: argparse.Namespace) -> None:
    if args.verbose:
        level = logging.DEBUG
    elif args.quiet:
        level = logging.ERROR
    else:
        level = logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    parser = create_parser()

    # Enable shell tab-completion if argcomplete is installed
    # Install with: pip install kvdag[completion]
    # Then activate: eval "$(register-python-argcomplete kvdag)"
    try:
        import argcomplete

        argcomplete.autocomplete(parser)
    except ImportError:
        pass

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    _configure_logging(args)

    try:
        if args.command == "check":
            return check.run(args)
        elif args.command == "attrs":
            return attrs_cmd.run(args)
        elif args.command == "query":
            return query.run(args)
        elif args.command == "reachable":
            return reachable.run(args)
        elif args.command == "export":
            return export.run(args)
        else:
            parser.print_help()
            return 1

    except KeyboardInterrupt:
        print("\nOperation cancelled.", file=sys.stderr)
        return 130
    except (KVDAGError, OSError, ValueError) as e:
        if args.verbose:
            raise
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
