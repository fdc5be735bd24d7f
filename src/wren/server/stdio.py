"""MCP protocol adapter over stdio.

Mounts a wren ``App`` on the ``mcp`` SDK's low-level ``Server``. The SDK
owns JSON-RPC framing, request correlation, capability negotiation, and
the stdio transport; this module only translates between wren's domain
objects and ``mcp.types``.

Handled methods:
    - ``resources/list`` — static resources
    - ``resources/templates/list`` — URI templates
    - ``resources/read`` — resolve + invoke through the app's router
    - ``tools/list`` — registered tool schemas
    - ``tools/call`` — validated dispatch through the tool registry

``RPCError`` subclasses become JSON-RPC error responses via ``McpError``.
A ``ToolResult`` flagged ``is_error`` stays a normal response.
"""

import base64
import logging
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

import anyio
import mcp.types as types
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server
from mcp.shared.exceptions import McpError

from wren.app import App
from wren.content import Content, ToolResult
from wren.errors import RPCError
from wren.routing.resource import Annotations, Resource, ResourceTemplate
from wren.tools.registry import ToolDef

logger = logging.getLogger("wren.server")


def build_server(app: App) -> Server:
    """Create an SDK ``Server`` whose request handlers delegate to *app*.

    Freezes the app first so registration mistakes surface before the
    transport starts. Capabilities are derived by the SDK from the
    handlers registered here.
    """
    app.freeze()
    config = app.config
    server: Server = Server(config.name, version=config.version, instructions=config.instructions)

    async def list_resources(req: types.ListResourcesRequest) -> types.ServerResult:
        resources = [_resource_to_mcp(r) for r in app.list_resources()]
        return types.ServerResult(types.ListResourcesResult(resources=resources))

    async def list_templates(req: types.ListResourceTemplatesRequest) -> types.ServerResult:
        templates = [_template_to_mcp(t) for t in app.list_templates()]
        return types.ServerResult(types.ListResourceTemplatesResult(resourceTemplates=templates))

    async def read_resource(req: types.ReadResourceRequest) -> types.ServerResult:
        uri = str(req.params.uri)
        logger.debug("resources/read %s", uri)
        contents = await _translate_errors(app.read_resource(uri))
        return types.ServerResult(
            types.ReadResourceResult(contents=[_content_to_mcp(c) for c in contents])
        )

    async def list_tools(req: types.ListToolsRequest) -> types.ServerResult:
        tools = [_tool_to_mcp(t) for t in app.list_tools()]
        return types.ServerResult(types.ListToolsResult(tools=tools))

    async def call_tool(req: types.CallToolRequest) -> types.ServerResult:
        name = req.params.name
        logger.debug("tools/call %s", name)
        result = await _translate_errors(app.call_tool(name, req.params.arguments or {}))
        return types.ServerResult(_tool_result_to_mcp(result))

    handlers: dict[type, Callable[[Any], Awaitable[types.ServerResult]]] = {
        types.ListResourcesRequest: list_resources,
        types.ListResourceTemplatesRequest: list_templates,
        types.ReadResourceRequest: read_resource,
        types.ListToolsRequest: list_tools,
        types.CallToolRequest: call_tool,
    }
    server.request_handlers.update(handlers)
    return server


async def serve_stdio(app: App) -> None:
    """Serve *app* over stdin/stdout until the client disconnects."""
    server = build_server(app)
    logger.info(
        "Starting %s %s on stdio (%d resources, %d templates, %d tools)",
        app.config.name,
        app.config.version,
        len(app.list_resources()),
        len(app.list_templates()),
        len(app.list_tools()),
    )
    async with stdio_server() as (read_stream, write_stream):
        await server.run(read_stream, write_stream, server.create_initialization_options())


def run(app: App) -> None:
    """Blocking entry point: run ``serve_stdio`` on a fresh event loop."""
    anyio.run(serve_stdio, app)


# -- Error translation --


T = TypeVar("T")


async def _translate_errors(awaitable: Awaitable[T]) -> T:
    """Await *awaitable*, re-raising ``RPCError`` as the SDK's ``McpError``."""
    try:
        return await awaitable
    except RPCError as exc:
        logger.debug("Request failed: %s", exc)
        raise McpError(to_error_data(exc)) from exc


def to_error_data(exc: RPCError) -> types.ErrorData:
    return types.ErrorData(code=exc.code, message=exc.message, data=exc.data())


# -- Domain → mcp.types --


def _annotations_to_mcp(annotations: Annotations | None) -> types.Annotations | None:
    if annotations is None:
        return None
    return types.Annotations(
        audience=list(annotations.audience) or None,
        priority=annotations.priority,
    )


def _resource_to_mcp(resource: Resource) -> types.Resource:
    return types.Resource(
        uri=resource.uri,
        name=resource.name,
        description=resource.description or None,
        mimeType=resource.mime_type,
        annotations=_annotations_to_mcp(resource.annotations),
    )


def _template_to_mcp(template: ResourceTemplate) -> types.ResourceTemplate:
    return types.ResourceTemplate(
        uriTemplate=template.pattern,
        name=template.name,
        description=template.description or None,
        mimeType=template.mime_type,
        annotations=_annotations_to_mcp(template.annotations),
    )


def _content_to_mcp(content: Content) -> types.TextResourceContents | types.BlobResourceContents:
    if content.blob is not None:
        return types.BlobResourceContents(
            uri=content.uri,
            mimeType=content.mime_type,
            blob=base64.b64encode(content.blob).decode("ascii"),
        )
    return types.TextResourceContents(
        uri=content.uri,
        mimeType=content.mime_type,
        text=content.text or "",
    )


def _tool_to_mcp(tool: ToolDef) -> types.Tool:
    return types.Tool(
        name=tool.name,
        description=tool.description or None,
        inputSchema=tool.input_schema,
    )


def _tool_result_to_mcp(result: ToolResult) -> types.CallToolResult:
    return types.CallToolResult(
        content=[types.TextContent(type="text", text=result.text)],
        structuredContent=result.structured,
        isError=result.is_error,
    )
