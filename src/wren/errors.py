"""Wren exception hierarchy.

Shared across the router, tool registry, app, and server adapter so every
module raises and catches the same types. ``RPCError`` subclasses carry a
JSON-RPC error code; the stdio adapter is the only place that turns them
into wire errors.
"""

from typing import Any

# JSON-RPC 2.0 reserved codes
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603

# MCP resource-not-found code
RESOURCE_NOT_FOUND = -32002


class WrenError(Exception):
    """Base for all wren-specific errors."""


class ConfigurationError(WrenError):
    """Raised when a resource, template, or tool registration is invalid.

    Typically surfaces while the app is being frozen, before the first
    request is served.
    """


class RPCError(WrenError):
    """An error that maps directly to a JSON-RPC error object.

    Terminal for the request that raised it. Never retried.
    """

    code: int = INTERNAL_ERROR
    message: str = "Internal error"

    def __init__(self, detail: str = "") -> None:
        super().__init__(detail or self.message)
        self.detail = detail or self.message

    def data(self) -> dict[str, Any]:
        """Structured payload for the ``data`` member of the error object."""
        return {"details": self.detail}

    def __str__(self) -> str:
        return f"{self.code}: {self.detail}"


class NotFound(RPCError):  # noqa: N818
    """No static resource or template matched the requested URI."""

    code = RESOURCE_NOT_FOUND
    message = "Resource not found"

    def __init__(self, identifier: str, detail: str = "") -> None:
        super().__init__(detail or f"No resource matches {identifier!r}")
        self.identifier = identifier

    def data(self) -> dict[str, Any]:
        return {"uri": self.identifier, "details": self.detail}


class ToolNotFound(NotFound):
    """No tool is registered under the requested name."""

    code = INVALID_PARAMS
    message = "Tool not found"

    def __init__(self, name: str) -> None:
        super().__init__(name, f"Tool not found: {name!r}")

    def data(self) -> dict[str, Any]:
        return {"name": self.identifier, "details": self.detail}


class BadArgument(RPCError):  # noqa: N818
    """A tool argument is missing, mistyped, or outside its allowed values."""

    code = INVALID_PARAMS
    message = "Invalid arguments"

    def __init__(self, argument: str, expected: str, detail: str = "") -> None:
        super().__init__(detail or f"Argument {argument!r} must be {expected}")
        self.argument = argument
        self.expected = expected

    def data(self) -> dict[str, Any]:
        return {
            "argument": self.argument,
            "expected": self.expected,
            "details": self.detail,
        }


class HandlerError(RPCError):
    """A resource or tool handler failed while producing its outcome.

    The original exception is chained as ``__cause__``.
    """

    code = INTERNAL_ERROR
    message = "Handler error"

    def __init__(self, identifier: str, detail: str = "") -> None:
        super().__init__(detail or f"Handler for {identifier!r} failed")
        self.identifier = identifier

    def data(self) -> dict[str, Any]:
        return {"identifier": self.identifier, "details": self.detail}


class ToolFailure(WrenError):
    """Raised by a tool handler to report a caller-facing failure.

    Unlike ``RPCError`` this is not a protocol error: the registry turns it
    into a normal tool result flagged ``is_error`` so the caller can show
    the message.
    """
