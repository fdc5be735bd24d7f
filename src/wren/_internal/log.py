"""Logging setup for the ``wren`` command.

Stdout carries JSON-RPC frames, so every record goes to stderr.
"""

import logging
import sys

_LEVELS = ("debug", "info", "warning", "error", "critical")


def configure_logging(level: str = "info", fmt: str | None = None) -> None:
    """Attach a single stderr handler to the ``wren`` logger hierarchy.

    Safe to call more than once; the previous handler is replaced.
    Raises ``ValueError`` for an unknown level name.
    """
    if level.lower() not in _LEVELS:
        msg = f"Unknown log level {level!r}. Use one of: {', '.join(_LEVELS)}"
        raise ValueError(msg)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(fmt or "%(levelname)s %(name)s: %(message)s"))
    handler.set_name("wren-stderr")

    root = logging.getLogger("wren")
    for existing in list(root.handlers):
        if existing.get_name() == "wren-stderr":
            root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(level.upper())
    root.propagate = False
