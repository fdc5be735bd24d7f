"""Wren CLI — serve an app over stdio, or inspect its catalog locally.

Entry point registered as ``wren`` in ``pyproject.toml``::

    [project.scripts]
    wren = "wren.cli:main"
"""

import argparse
import sys

from wren.cli._resolve import DEFAULT_APP


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``wren`` command."""
    # Options every subcommand shares
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--app",
        default=DEFAULT_APP,
        help=f"Import string of the app or app factory (default: {DEFAULT_APP})",
    )
    common.add_argument(
        "--root", default=None, help="Directory served by file:/// and docs://readme"
    )
    common.add_argument(
        "--log-level",
        default=None,
        choices=["debug", "info", "warning", "error", "critical"],
        help="Log level (logs always go to stderr)",
    )

    parser = argparse.ArgumentParser(
        prog="wren",
        description="Wren — a demonstration MCP resource and tool server.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- wren serve -------------------------------------------------------
    subparsers.add_parser("serve", parents=[common], help="Serve the app over stdio")

    # -- wren resources ---------------------------------------------------
    subparsers.add_parser(
        "resources", parents=[common], help="List static resources and templates"
    )

    # -- wren tools -------------------------------------------------------
    subparsers.add_parser("tools", parents=[common], help="List tools and their input schemas")

    # -- wren read --------------------------------------------------------
    read_parser = subparsers.add_parser("read", parents=[common], help="Read a resource by URI")
    read_parser.add_argument("uri", help="Resource URI (e.g. users://1/profile)")

    # -- wren call --------------------------------------------------------
    call_parser = subparsers.add_parser("call", parents=[common], help="Call a tool")
    call_parser.add_argument("name", help="Tool name (e.g. create_user)")
    call_parser.add_argument(
        "--arg",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="String argument; repeat for several",
    )
    call_parser.add_argument(
        "--json",
        default=None,
        metavar="OBJECT",
        help="Arguments as a JSON object (merged under --arg values)",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "serve":
        from wren.cli._serve import run_serve

        run_serve(args)
    elif args.command == "resources":
        from wren.cli._inspect import run_resources

        run_resources(args)
    elif args.command == "tools":
        from wren.cli._inspect import run_tools

        run_tools(args)
    elif args.command == "read":
        from wren.cli._inspect import run_read

        run_read(args)
    elif args.command == "call":
        from wren.cli._inspect import run_call

        run_call(args)
