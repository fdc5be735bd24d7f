"""``wren resources|tools|read|call`` — exercise an app without a transport.

Each command prints JSON to stdout. Protocol errors print the same error
object a client would receive and exit with status 1.
"""

import argparse
import base64
import json
import sys
from typing import Any, NoReturn

import anyio

from wren.cli._resolve import load_app
from wren.content import Content
from wren.errors import RPCError
from wren.routing.resource import Annotations


def run_resources(args: argparse.Namespace) -> None:
    app = load_app(args)
    _print({
        "resources": [
            {
                "uri": r.uri,
                "name": r.name,
                "description": r.description,
                "mimeType": r.mime_type,
                "annotations": _annotations(r.annotations),
            }
            for r in app.list_resources()
        ],
        "resourceTemplates": [
            {
                "uriTemplate": t.pattern,
                "name": t.name,
                "description": t.description,
                "mimeType": t.mime_type,
                "annotations": _annotations(t.annotations),
            }
            for t in app.list_templates()
        ],
    })


def run_tools(args: argparse.Namespace) -> None:
    app = load_app(args)
    _print({
        "tools": [
            {"name": t.name, "description": t.description, "inputSchema": t.input_schema}
            for t in app.list_tools()
        ],
    })


def run_read(args: argparse.Namespace) -> None:
    app = load_app(args)
    try:
        contents = anyio.run(app.read_resource, args.uri)
    except RPCError as exc:
        _fail(exc)
    _print({"contents": [_content(c) for c in contents]})


def run_call(args: argparse.Namespace) -> None:
    arguments = _parse_arguments(args.json, args.arg)
    app = load_app(args)
    try:
        result = anyio.run(app.call_tool, args.name, arguments)
    except RPCError as exc:
        _fail(exc)

    payload: dict[str, Any] = {
        "content": [{"type": "text", "text": result.text}],
        "isError": result.is_error,
    }
    if result.structured is not None:
        payload["structuredContent"] = result.structured
    _print(payload)


def _parse_arguments(raw_json: str | None, pairs: list[str]) -> dict[str, Any]:
    """Merge ``--json`` and ``--arg KEY=VALUE`` into one argument mapping."""
    arguments: dict[str, Any] = {}
    if raw_json is not None:
        try:
            decoded = json.loads(raw_json)
        except json.JSONDecodeError as exc:
            print(f"Error: --json is not valid JSON: {exc}", file=sys.stderr)
            raise SystemExit(2) from exc
        if not isinstance(decoded, dict):
            print("Error: --json must be a JSON object", file=sys.stderr)
            raise SystemExit(2)
        arguments.update(decoded)

    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            print(f"Error: --arg expects KEY=VALUE, got {pair!r}", file=sys.stderr)
            raise SystemExit(2)
        arguments[key] = value
    return arguments


def _annotations(annotations: Annotations | None) -> dict[str, Any] | None:
    if annotations is None:
        return None
    result: dict[str, Any] = {"audience": list(annotations.audience)}
    if annotations.priority is not None:
        result["priority"] = annotations.priority
    return result


def _content(content: Content) -> dict[str, Any]:
    item: dict[str, Any] = {"uri": content.uri, "mimeType": content.mime_type}
    if content.blob is not None:
        item["blob"] = base64.b64encode(content.blob).decode("ascii")
    else:
        item["text"] = content.text
    return item


def _fail(exc: RPCError) -> NoReturn:
    _print({"error": {"code": exc.code, "message": exc.message, "data": exc.data()}})
    raise SystemExit(1)


def _print(payload: dict[str, Any]) -> None:
    sys.stdout.write(json.dumps(payload, indent=2, default=str) + "\n")
    sys.stdout.flush()
