"""Tool argument schemas and validation.

Each tool declares its arguments as a tuple of ``Argument`` values. The
same declaration produces the JSON Schema published in ``tools/list`` and
drives ``validate_arguments()``, the one routine every tool call goes
through before its handler runs.

Tools that declare nothing get their arguments inferred from the handler
signature by ``arguments_from_signature()``.
"""

import inspect
import logging
import types
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Literal, Union, get_args, get_origin

from wren.errors import BadArgument, ConfigurationError

logger = logging.getLogger("wren.tools")

# Python type → JSON Schema type
_TYPE_MAP: dict[type, str] = {
    str: "string",
    int: "integer",
    float: "number",
    bool: "boolean",
}

_MISSING: Any = object()


@dataclass(frozen=True, slots=True)
class Argument:
    """A declared tool argument.

    ``enum`` restricts a string argument to a fixed set of values.
    ``default`` is applied when an optional argument is absent.
    """

    name: str
    type: str = "string"
    description: str = ""
    required: bool = False
    enum: tuple[str, ...] = ()
    default: Any = None

    def __post_init__(self) -> None:
        if self.type not in _CHECKS:
            msg = f"Unsupported argument type {self.type!r} for {self.name!r}"
            raise ConfigurationError(msg)
        if self.enum and self.type != "string":
            msg = f"Argument {self.name!r}: enum is only supported for string arguments"
            raise ConfigurationError(msg)

    @property
    def expected(self) -> str:
        """Human-readable expected type, used in ``BadArgument`` messages."""
        if self.enum:
            return "one of " + ", ".join(repr(v) for v in self.enum)
        return f"a {self.type}"

    def to_schema(self) -> dict[str, Any]:
        schema: dict[str, Any] = {"type": self.type}
        if self.description:
            schema["description"] = self.description
        if self.enum:
            schema["enum"] = list(self.enum)
        if self.default is not None:
            schema["default"] = self.default
        return schema


def _is_number(value: Any) -> bool:
    return isinstance(value, int | float) and not isinstance(value, bool)


def _is_integer(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


_CHECKS: dict[str, Callable[[Any], bool]] = {
    "string": lambda value: isinstance(value, str),
    "number": _is_number,
    "integer": _is_integer,
    "boolean": lambda value: isinstance(value, bool),
}


def to_json_schema(arguments: Sequence[Argument]) -> dict[str, Any]:
    """Build the MCP ``inputSchema`` object for a tool's arguments."""
    result: dict[str, Any] = {
        "type": "object",
        "properties": {arg.name: arg.to_schema() for arg in arguments},
    }
    required = [arg.name for arg in arguments if arg.required]
    if required:
        result["required"] = required
    return result


def validate_arguments(
    arguments: Sequence[Argument],
    values: Mapping[str, Any],
) -> dict[str, Any]:
    """Check *values* against the declared *arguments*.

    Stops at the first missing or mismatched argument and raises
    ``BadArgument`` naming it. Absent optional arguments are passed with
    their default, ``None`` included. Undeclared keys are dropped.

    Returns the validated keyword arguments for the handler.
    """
    validated: dict[str, Any] = {}

    for arg in arguments:
        value = values.get(arg.name, _MISSING)
        if value is _MISSING or value is None:
            if arg.required:
                raise BadArgument(arg.name, arg.expected, f"Missing required argument {arg.name!r}")
            validated[arg.name] = arg.default
            continue

        if not _CHECKS[arg.type](value):
            raise BadArgument(
                arg.name,
                arg.expected,
                f"Argument {arg.name!r} must be {arg.expected}, got {type(value).__name__}",
            )
        if arg.enum and value not in arg.enum:
            raise BadArgument(
                arg.name,
                arg.expected,
                f"Argument {arg.name!r} must be {arg.expected}, got {value!r}",
            )
        validated[arg.name] = value

    extra = set(values) - {arg.name for arg in arguments}
    if extra:
        logger.debug("Dropping undeclared arguments: %s", sorted(extra))

    return validated


def arguments_from_signature(func: Callable[..., Any]) -> tuple[Argument, ...]:
    """Infer ``Argument`` declarations from a handler's type annotations.

    Only parameters with defaults are optional. ``X | None`` unions are
    unwrapped to the base type but stay required without a default.
    ``Literal["a", "b"]`` becomes a string enum.

    Supports: ``str``, ``int``, ``float``, ``bool``, ``Literal[...]``,
    ``X | None``. Unannotated parameters default to string.
    """
    sig = inspect.signature(func)
    result: list[Argument] = []

    for name, param in sig.parameters.items():
        if param.kind in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD):
            continue

        annotation = param.annotation
        if annotation is inspect.Parameter.empty:
            annotation = str

        is_optional = _is_optional(annotation)
        if is_optional:
            annotation = _unwrap_optional(annotation)

        has_default = param.default is not inspect.Parameter.empty
        default = param.default if has_default else None
        required = not has_default

        if get_origin(annotation) is Literal:
            choices = tuple(str(choice) for choice in get_args(annotation))
            result.append(
                Argument(name, "string", required=required, enum=choices, default=default)
            )
            continue

        result.append(
            Argument(name, _TYPE_MAP.get(annotation, "string"), required=required, default=default)
        )

    return tuple(result)


def _is_optional(annotation: Any) -> bool:
    """Check if an annotation is X | None."""
    origin = get_origin(annotation)
    if origin is Union or origin is types.UnionType:
        return type(None) in get_args(annotation)
    return False


def _unwrap_optional(annotation: Any) -> Any:
    """Extract the non-None type from X | None."""
    non_none = [a for a in get_args(annotation) if a is not type(None)]
    if len(non_none) == 1:
        return non_none[0]
    # Multi-type union — fall back to string
    return str
