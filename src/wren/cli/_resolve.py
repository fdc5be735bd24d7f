"""App import resolution — resolves ``"module:attribute"`` strings to App instances.

Shared utility used by every ``wren`` subcommand to locate an App from a
user-supplied import string.
"""

import argparse
import dataclasses
import importlib
import sys

from wren._internal.log import configure_logging
from wren.app import App
from wren.config import AppConfig

DEFAULT_APP = "wren.demo:create_app"


def resolve_app(import_string: str, config: AppConfig | None = None) -> App:
    """Resolve an import string to a wren App instance.

    Accepts ``"module:attribute"`` format. When the attribute portion is
    omitted, defaults to ``"app"`` (e.g. ``"myapp"`` resolves to
    ``myapp.app``).

    Factory functions are supported: if the resolved object is callable and
    not an App instance, it is called with *config* (or with no arguments
    when *config* is ``None``).

    Raises:
        ModuleNotFoundError: If the module cannot be imported.
        AttributeError: If the attribute does not exist on the module.
        TypeError: If the resolved object is not a wren ``App`` or factory.
    """
    module_path, _, attr_name = import_string.partition(":")
    if not attr_name:
        attr_name = "app"

    module = importlib.import_module(module_path)
    obj = getattr(module, attr_name)

    if callable(obj) and not isinstance(obj, App):
        try:
            obj = obj(config) if config is not None else obj()
        except Exception as exc:
            msg = f"Factory function {import_string!r} raised an error: {exc}"
            raise TypeError(msg) from exc

    if not isinstance(obj, App):
        msg = f"{import_string!r} resolved to {type(obj).__name__}, not a wren.App instance"
        raise TypeError(msg)

    return obj


def load_app(args: argparse.Namespace) -> App:
    """Build the config from CLI flags, set up logging, and resolve the app.

    Exits with status 1 (after printing to stderr) if the app cannot be
    resolved.
    """
    overrides: dict[str, str] = {}
    if args.root is not None:
        overrides["root"] = args.root
    if args.log_level is not None:
        overrides["log_level"] = args.log_level
    config = dataclasses.replace(AppConfig(), **overrides)

    configure_logging(config.log_level, config.log_format)

    try:
        return resolve_app(args.app, config)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
