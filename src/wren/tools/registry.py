"""Tool registry — compiled tool table with validated dispatch.

Mirrors the ``ResourceRouter`` + ``Resource`` pattern from ``wren.routing``:
``ToolDef`` is the frozen definition (like ``Resource``), ``ToolRegistry``
is the compiled lookup table (like ``ResourceRouter``).

Thread safety:
    - ToolDef is a frozen dataclass (immutable)
    - ToolRegistry._tools is a dict built at compile time, never mutated
    - Handlers that touch shared state own their own locking
"""

import json
import logging
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from wren._internal.invoke import invoke
from wren.content import ToolResult
from wren.errors import ConfigurationError, HandlerError, RPCError, ToolFailure, ToolNotFound
from wren.tools.schema import Argument, arguments_from_signature, to_json_schema, validate_arguments

logger = logging.getLogger("wren.tools")


@dataclass(frozen=True, slots=True)
class ToolDef:
    """A frozen tool definition.

    Created during app setup, compiled into the registry at freeze time.
    """

    name: str
    description: str
    handler: Callable[..., Any]
    arguments: tuple[Argument, ...] = ()

    @property
    def input_schema(self) -> dict[str, Any]:
        return to_json_schema(self.arguments)


class ToolRegistry:
    """Compiled tool table. Created at freeze time, immutable at runtime.

    Provides ``list_tools()`` for MCP ``tools/list`` and ``call_tool()``
    for MCP ``tools/call`` dispatch.
    """

    __slots__ = ("_tools",)

    def __init__(self, tools: Sequence[ToolDef]) -> None:
        self._tools: dict[str, ToolDef] = {t.name: t for t in tools}

    def list_tools(self) -> tuple[ToolDef, ...]:
        """Registered tools in registration order."""
        return tuple(self._tools.values())

    async def call_tool(
        self,
        name: str,
        arguments: Mapping[str, Any],
    ) -> ToolResult:
        """Dispatch a tool call by name.

        Every declared argument is validated before the handler runs, so a
        bad call never has side effects. The handler is invoked exactly once.

        Raises ``ToolNotFound`` if the tool name is not registered,
        ``BadArgument`` if validation fails, and ``HandlerError`` if the
        handler raises anything other than ``ToolFailure``.
        """
        tool = self._tools.get(name)
        if tool is None:
            raise ToolNotFound(name)

        kwargs = validate_arguments(tool.arguments, arguments)

        try:
            result = await invoke(tool.handler, **kwargs)
        except ToolFailure as exc:
            logger.info("Tool %s reported failure: %s", name, exc)
            return ToolResult.error(str(exc))
        except RPCError:
            raise
        except Exception as exc:
            logger.exception("Tool %s failed", name)
            raise HandlerError(name, f"Tool {name!r} failed: {exc}") from exc

        logger.info("Tool %s called", name)
        return _format_result(result)

    def get(self, name: str) -> ToolDef | None:
        """Look up a tool by name. Returns ``None`` if not found."""
        return self._tools.get(name)

    def __len__(self) -> int:
        return len(self._tools)

    def __contains__(self, name: str) -> bool:
        return name in self._tools


def _format_result(result: Any) -> ToolResult:
    """Normalise a handler's return value into a ``ToolResult``."""
    if isinstance(result, ToolResult):
        return result
    if isinstance(result, str):
        return ToolResult(text=result)
    if isinstance(result, dict | list):
        return ToolResult.from_data(result)
    if result is None:
        return ToolResult(text="")
    return ToolResult(text=json.dumps(result, default=str))


def compile_tools(
    pending: Sequence[tuple[str, str, Callable[..., Any], Sequence[Argument] | None]],
) -> ToolRegistry:
    """Compile pending tool registrations into a frozen ToolRegistry.

    Each tuple is ``(name, description, handler, arguments)``. When
    *arguments* is ``None`` they are inferred from the handler signature.
    Schema problems surface here, at startup, not at call time.
    """
    tools: list[ToolDef] = []
    seen_names: set[str] = set()

    for name, description, handler, arguments in pending:
        if name in seen_names:
            msg = f"Duplicate tool name: {name!r}"
            raise ConfigurationError(msg)
        seen_names.add(name)

        declared = tuple(arguments) if arguments is not None else arguments_from_signature(handler)
        tools.append(
            ToolDef(
                name=name,
                description=description,
                handler=handler,
                arguments=declared,
            )
        )

    return ToolRegistry(tools)
