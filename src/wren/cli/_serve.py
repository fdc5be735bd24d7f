"""``wren serve`` — run an app over the MCP stdio transport."""

import argparse

from wren.cli._resolve import load_app


def run_serve(args: argparse.Namespace) -> None:
    """Resolve the app and serve it until stdin closes."""
    app = load_app(args)

    from wren.server.stdio import run

    try:
        run(app)
    except KeyboardInterrupt:
        pass
