"""Wren — a demonstration Model Context Protocol server.

Registers static resources, URI-templated resources, and tools against an
in-memory dataset, and serves them over stdio JSON-RPC via the ``mcp`` SDK.

Basic usage::

    from wren import App
    from wren.server import run

    app = App()

    @app.resource("system://info", name="System Information")
    def info(uri):
        return "running"

    @app.template("users://{id}/profile", name="User Profile")
    def profile(uri, id):
        return {"id": id}

    run(app)
"""

__version__ = "1.0.0"
__all__ = [
    "App",
    "AppConfig",
    "Argument",
    "BadArgument",
    "ConfigurationError",
    "Content",
    "HandlerError",
    "NotFound",
    "RPCError",
    "ToolFailure",
    "ToolNotFound",
    "ToolResult",
    "WrenError",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import wren`` fast while providing a clean top-level API.
    """
    if name == "App":
        from wren.app import App

        return App

    if name == "AppConfig":
        from wren.config import AppConfig

        return AppConfig

    if name == "Argument":
        from wren.tools.schema import Argument

        return Argument

    if name in ("Content", "ToolResult"):
        from wren import content as _content

        return getattr(_content, name)

    if name in (
        "BadArgument",
        "ConfigurationError",
        "HandlerError",
        "NotFound",
        "RPCError",
        "ToolFailure",
        "ToolNotFound",
        "WrenError",
    ):
        from wren import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
