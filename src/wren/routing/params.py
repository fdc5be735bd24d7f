"""Placeholder kinds for URI templates.

Built-in converters for template placeholders like ``{id:int}``.
Captured values are always handed to handlers as strings; the kind only
narrows what a placeholder is allowed to capture.
"""


# Regex fragment each placeholder kind compiles to
CONVERTERS: dict[str, str] = {
    "str": r"[^/]+",
    "int": r"[0-9]+",
    "path": r".+",
}
