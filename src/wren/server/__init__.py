"""Server adapters — expose a wren App over an MCP transport."""

from wren.server.stdio import build_server, run, serve_stdio

__all__ = [
    "build_server",
    "run",
    "serve_stdio",
]
