"""Outcome values produced by resource and tool handlers.

Both are frozen: once a handler has produced them they are safe to share
across threads and hand to the transport.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class Content:
    """One item of resource content.

    Exactly one of ``text`` or ``blob`` is set::

        Content("system://info", "application/json", text='{"ok": true}')
        Content("file:///logo.png", "image/png", blob=b"\\x89PNG...")
    """

    uri: str
    mime_type: str
    text: str | None = None
    blob: bytes | None = None

    def __post_init__(self) -> None:
        if (self.text is None) == (self.blob is None):
            msg = f"Content for {self.uri!r} needs exactly one of text or blob"
            raise ValueError(msg)

    @property
    def is_binary(self) -> bool:
        return self.blob is not None


@dataclass(frozen=True, slots=True)
class ToolResult:
    """The outcome of a tool call.

    ``is_error=True`` marks a caller-facing failure. It travels as a
    normal response, not as a protocol error.
    """

    text: str
    is_error: bool = False
    structured: dict[str, Any] | None = None

    @classmethod
    def error(cls, message: str) -> ToolResult:
        return cls(text=message, is_error=True)

    @classmethod
    def from_data(cls, data: dict[str, Any] | list[Any], *, prefix: str = "") -> ToolResult:
        """Render *data* as indented JSON text, keeping objects as structured content."""
        body = json.dumps(data, indent=2, default=str)
        structured = data if isinstance(data, dict) else {"result": data}
        return cls(text=f"{prefix}{body}", structured=structured)
