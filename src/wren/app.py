"""Wren application class.

Mutable during setup (resource, template, and tool registration).
Frozen at runtime when the first listing, read, or call arrives.
"""

import json
import logging
import threading
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from wren._internal.invoke import invoke
from wren.config import AppConfig
from wren.content import Content, ToolResult
from wren.errors import HandlerError, RPCError
from wren.routing.resource import Annotations, Resource, ResourceTemplate
from wren.routing.router import ResourceRouter
from wren.routing.template import UriTemplate
from wren.tools.registry import ToolDef, ToolRegistry, compile_tools
from wren.tools.schema import Argument

logger = logging.getLogger("wren.app")

Handler = Callable[..., Any]


@dataclass(slots=True)
class _PendingTool:
    """A tool waiting to be compiled."""

    name: str
    description: str
    handler: Handler
    arguments: Sequence[Argument] | None


class App:
    """The wren application.

    Mutable during setup (decorators at import time). Frozen at runtime on
    first use, after which the router and tool registry are read-only and
    shared by every request without locking.

    Thread safety:
        The freeze transition uses a Lock + double-check so exactly one
        thread compiles the app, even if a concurrent transport delivers
        the first requests in parallel.
    """

    __slots__ = (
        "_freeze_lock",
        "_frozen",
        "_pending_resources",
        "_pending_templates",
        "_pending_tools",
        # Compiled state (populated by _freeze)
        "_router",
        "_tool_registry",
        "config",
    )

    def __init__(self, config: AppConfig | None = None) -> None:
        self.config: AppConfig = config or AppConfig()
        self._pending_resources: list[Resource] = []
        self._pending_templates: list[ResourceTemplate] = []
        self._pending_tools: list[_PendingTool] = []
        self._frozen: bool = False
        self._freeze_lock: threading.Lock = threading.Lock()

        # Compiled state — set during _freeze()
        self._router: ResourceRouter | None = None
        self._tool_registry: ToolRegistry | None = None

    # -- Resource registration --

    def resource(
        self,
        uri: str,
        *,
        name: str,
        description: str = "",
        mime_type: str = "text/plain",
        annotations: Annotations | None = None,
    ) -> Callable[[Handler], Handler]:
        """Register a static resource handler via decorator.

        The handler is called as ``handler(uri)``::

            @app.resource("system://info", name="System Information",
                          mime_type="application/json")
            def info(uri: str) -> dict:
                return {"status": "running"}
        """

        def decorator(func: Handler) -> Handler:
            self._check_not_frozen()
            self._pending_resources.append(
                Resource(uri, name, func, description, mime_type, annotations)
            )
            return func

        return decorator

    def template(
        self,
        pattern: str,
        *,
        name: str,
        description: str = "",
        mime_type: str = "text/plain",
        annotations: Annotations | None = None,
    ) -> Callable[[Handler], Handler]:
        """Register a URI-template resource handler via decorator.

        Placeholders are passed as keyword arguments after the URI. Templates
        are tried in registration order; the first match wins::

            @app.template("users://{id:int}/profile", name="User Profile")
            def profile(uri: str, id: str) -> dict:
                ...

        The pattern is compiled immediately so mistakes fail at import time.
        """
        compiled = UriTemplate.compile(pattern)

        def decorator(func: Handler) -> Handler:
            self._check_not_frozen()
            self._pending_templates.append(
                ResourceTemplate(compiled, name, func, description, mime_type, annotations)
            )
            return func

        return decorator

    # -- Tool registration --

    def tool(
        self,
        name: str,
        *,
        description: str = "",
        arguments: Sequence[Argument] | None = None,
    ) -> Callable[[Handler], Handler]:
        """Register a function as an MCP tool via decorator.

        *arguments* declares the input schema. When omitted it is inferred
        from the handler's signature. The handler is only called once all
        arguments have validated.

        Usage::

            @app.tool("greet", description="Say hello")
            def greet(name: str) -> str:
                return f"Hello, {name}!"
        """

        def decorator(func: Handler) -> Handler:
            self._check_not_frozen()
            self._pending_tools.append(_PendingTool(name, description, func, arguments))
            return func

        return decorator

    # -- Runtime operations --

    def list_resources(self) -> tuple[Resource, ...]:
        return self._compiled_router().resources

    def list_templates(self) -> tuple[ResourceTemplate, ...]:
        return self._compiled_router().templates

    def list_tools(self) -> tuple[ToolDef, ...]:
        return self._compiled_tools().list_tools()

    async def read_resource(self, uri: str) -> list[Content]:
        """Resolve *uri* and return the handler's content items.

        Raises ``NotFound`` when nothing matches. Protocol errors raised by
        the handler propagate unchanged; anything else is wrapped in
        ``HandlerError`` carrying the URI.
        """
        match = self._compiled_router().resolve(uri)
        registration = match.resource

        try:
            result = await invoke(registration.handler, uri, **match.params)
        except RPCError:
            raise
        except Exception as exc:
            logger.exception("Resource handler failed for %s", uri)
            raise HandlerError(uri, f"Failed to read {uri}: {exc}") from exc

        return _to_contents(uri, registration.mime_type, result)

    async def call_tool(self, name: str, arguments: Mapping[str, Any] | None = None) -> ToolResult:
        """Validate *arguments* and dispatch to the named tool."""
        return await self._compiled_tools().call_tool(name, arguments or {})

    # -- Freeze --

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> None:
        """Compile registrations now rather than on first use."""
        self._ensure_frozen()

    def _compiled_router(self) -> ResourceRouter:
        self._ensure_frozen()
        assert self._router is not None
        return self._router

    def _compiled_tools(self) -> ToolRegistry:
        self._ensure_frozen()
        assert self._tool_registry is not None
        return self._tool_registry

    def _ensure_frozen(self) -> None:
        """Thread-safe freeze with double-check locking."""
        if self._frozen:
            return
        with self._freeze_lock:
            if self._frozen:
                return
            self._freeze()

    def _freeze(self) -> None:
        """Compile the app into its frozen runtime state.

        MUST only be called while holding _freeze_lock.
        """
        router = ResourceRouter()
        for resource in self._pending_resources:
            router.add_resource(resource)
        for template in self._pending_templates:
            router.add_template(template)
        router.compile()

        registry = compile_tools(
            [(t.name, t.description, t.handler, t.arguments) for t in self._pending_tools]
        )

        self._router = router
        self._tool_registry = registry
        self._frozen = True
        logger.debug(
            "Frozen with %d resources, %d templates, %d tools",
            len(router.resources),
            len(router.templates),
            len(registry),
        )

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = (
                "Cannot modify the app after it has started serving requests. "
                "Register resources, templates, and tools before serving."
            )
            raise RuntimeError(msg)


def _to_contents(uri: str, mime_type: str, result: Any) -> list[Content]:
    """Normalise a resource handler's return value into content items."""
    if isinstance(result, Content):
        return [result]
    if isinstance(result, str):
        return [Content(uri, mime_type, text=result)]
    if isinstance(result, bytes):
        return [Content(uri, mime_type, blob=result)]
    if isinstance(result, dict):
        return [Content(uri, mime_type, text=json.dumps(result, indent=2, default=str))]
    if isinstance(result, list | tuple) and all(isinstance(item, Content) for item in result):
        return list(result)
    if isinstance(result, list):
        return [Content(uri, mime_type, text=json.dumps(result, indent=2, default=str))]
    msg = f"Resource handler for {uri!r} returned unsupported type {type(result).__name__}"
    raise HandlerError(uri, msg)
