"""Application configuration.

AppConfig is a frozen dataclass — immutable after creation, IDE-autocompletable,
no string-key dict lookups.
"""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = AppConfig(root="./data", log_level="debug")
    """

    # Server identity (reported during MCP initialize)
    name: str = "Resource Demo Server"
    version: str = "1.0.0"
    instructions: str | None = None

    # Files
    root: str | Path = "."
    readme: str = "README.md"  # Relative to root, served as docs://readme
    max_file_size: int = 10 * 1024 * 1024  # 10 MB

    # Logging (always stderr — stdout carries JSON-RPC)
    log_level: str = "info"
    log_format: str = "%(asctime)s %(levelname)s %(name)s: %(message)s"
