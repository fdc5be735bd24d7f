"""MCP tool support for wren.

Register functions as tools with an explicit argument schema. Clients call
them via ``tools/call``; every call is validated against the schema before
the handler runs.

Usage::

    from wren import App
    from wren.tools import Argument

    app = App()

    @app.tool(
        "create_user",
        description="Create a new user",
        arguments=(
            Argument("name", required=True),
            Argument("role", enum=("admin", "user"), default="user"),
        ),
    )
    def create_user(name: str, role: str) -> dict:
        return store.create(name=name, role=role).to_dict()
"""

from wren.tools.registry import ToolDef, ToolRegistry
from wren.tools.schema import Argument

__all__ = [
    "Argument",
    "ToolDef",
    "ToolRegistry",
]
