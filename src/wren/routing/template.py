"""URI template parsing and matching.

A template is a URI pattern with named placeholders::

    "users://{id}/profile"       -> literal "users://", param id, literal "/profile"
    "users://{id:int}"           -> literal "users://", int param id
    "file:///{path:path}"        -> literal "file:///", path param (may contain "/")

Each placeholder captures the text bounded by its surrounding literals.
Templates are compiled once at registration time into an anchored regex.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from wren.errors import ConfigurationError
from wren.routing.params import CONVERTERS

# Handlers receive the requested URI as their first argument
_RESERVED_NAMES = frozenset({"uri"})


@dataclass(frozen=True, slots=True)
class TemplateSegment:
    """A parsed piece of a URI template.

    Literal:  ``users://``   (is_param=False)
    Param:    ``{id}``       (is_param=True, param_name="id")
    Typed:    ``{id:int}``   (is_param=True, param_name="id", param_type="int")
    """

    value: str
    is_param: bool = False
    param_name: str | None = None
    param_type: str = "str"


def parse_template(pattern: str) -> tuple[TemplateSegment, ...]:
    """Parse a URI template string into literal and placeholder segments.

    Raises ``ConfigurationError`` for unbalanced braces, invalid or
    duplicate placeholder names, unknown placeholder kinds, and adjacent
    placeholders (which would make the capture boundary ambiguous).
    """
    segments: list[TemplateSegment] = []
    seen: set[str] = set()
    literal: list[str] = []
    i = 0

    while i < len(pattern):
        char = pattern[i]
        if char == "}":
            msg = f"Unbalanced '}}' at position {i} in template {pattern!r}"
            raise ConfigurationError(msg)
        if char != "{":
            literal.append(char)
            i += 1
            continue

        end = pattern.find("}", i + 1)
        if end == -1:
            msg = f"Unclosed '{{' at position {i} in template {pattern!r}"
            raise ConfigurationError(msg)
        inner = pattern[i + 1 : end]
        if "{" in inner:
            msg = f"Nested '{{' in template {pattern!r}"
            raise ConfigurationError(msg)

        if literal:
            segments.append(TemplateSegment("".join(literal)))
            literal = []
        elif segments and segments[-1].is_param:
            msg = (
                f"Adjacent placeholders in template {pattern!r}. "
                "Separate them with literal text."
            )
            raise ConfigurationError(msg)

        segments.append(_parse_placeholder(pattern, pattern[i : end + 1], inner, seen))
        i = end + 1

    if literal:
        segments.append(TemplateSegment("".join(literal)))
    return tuple(segments)


def _parse_placeholder(
    pattern: str,
    raw: str,
    inner: str,
    seen: set[str],
) -> TemplateSegment:
    """Parse the inside of a ``{...}`` placeholder."""
    if ":" in inner:
        name, kind = inner.split(":", 1)
    else:
        name, kind = inner, "str"

    if not name.isidentifier():
        msg = f"Invalid placeholder name {name!r} in template {pattern!r}"
        raise ConfigurationError(msg)
    if name in _RESERVED_NAMES:
        msg = f"Placeholder name {name!r} is reserved (template {pattern!r})"
        raise ConfigurationError(msg)
    if kind not in CONVERTERS:
        available = ", ".join(sorted(CONVERTERS))
        msg = f"Unknown placeholder kind {kind!r} in template {pattern!r}. Available: {available}"
        raise ConfigurationError(msg)
    if name in seen:
        msg = f"Duplicate placeholder {name!r} in template {pattern!r}"
        raise ConfigurationError(msg)
    seen.add(name)

    return TemplateSegment(raw, is_param=True, param_name=name, param_type=kind)


@dataclass(frozen=True, slots=True)
class UriTemplate:
    """A compiled URI template.

    Usage::

        template = UriTemplate.compile("users://{id}/profile")
        template.match("users://7/profile")   # {"id": "7"}
        template.match("users://7")           # None
        template.expand(id=7)                 # "users://7/profile"
    """

    pattern: str
    segments: tuple[TemplateSegment, ...]
    regex: re.Pattern[str]

    @classmethod
    def compile(cls, pattern: str) -> UriTemplate:
        """Parse and compile *pattern*.

        A pattern without placeholders is rejected: register it as a
        static resource instead.
        """
        segments = parse_template(pattern)
        if not any(seg.is_param for seg in segments):
            msg = (
                f"Template {pattern!r} has no placeholders. "
                "Register it as a static resource instead."
            )
            raise ConfigurationError(msg)

        parts: list[str] = []
        for seg in segments:
            if seg.is_param:
                parts.append(f"(?P<{seg.param_name}>{CONVERTERS[seg.param_type]})")
            else:
                parts.append(re.escape(seg.value))
        return cls(pattern=pattern, segments=segments, regex=re.compile("".join(parts)))

    @property
    def param_names(self) -> tuple[str, ...]:
        return tuple(seg.param_name for seg in self.segments if seg.param_name)

    def match(self, uri: str) -> dict[str, str] | None:
        """Match the whole of *uri*. Returns the placeholder binding or ``None``."""
        m = self.regex.fullmatch(uri)
        if m is None:
            return None
        return m.groupdict()

    def expand(self, **values: object) -> str:
        """Substitute *values* into the template.

        Raises ``KeyError`` if a placeholder has no value.
        """
        out: list[str] = []
        for seg in self.segments:
            if seg.is_param:
                out.append(str(values[seg.param_name or ""]))
            else:
                out.append(seg.value)
        return "".join(out)
