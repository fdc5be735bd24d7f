"""Rooted, read-only file access for ``file:///`` resources.

Every path is resolved (symlinks included) and must stay inside the root.
Anything outside reports ``NotFound`` rather than revealing that the file
exists. Reads go through ``anyio.Path`` so they never block the event loop.
"""

import mimetypes
from pathlib import Path

import anyio

from wren.errors import NotFound

# Media types served as text even though they are not text/*
_TEXT_TYPES = frozenset({
    "application/json",
    "application/javascript",
    "application/toml",
    "application/xml",
    "application/x-sh",
    "application/yaml",
})


def guess_mime_type(path: str | Path) -> str:
    """Guess a media type from the file name. Falls back to octet-stream."""
    name = str(path)
    if name.endswith(".md"):
        return "text/markdown"
    mime_type, _ = mimetypes.guess_type(name)
    return mime_type or "application/octet-stream"


def is_text_type(mime_type: str) -> bool:
    return mime_type.startswith("text/") or mime_type in _TEXT_TYPES


class FileSystem:
    """Read files below a fixed root directory.

    Usage::

        files = FileSystem("./docs", max_size=1024 * 1024)
        data = await files.read_bytes("guide/intro.md")
    """

    __slots__ = ("_max_size", "_root")

    def __init__(self, root: str | Path, *, max_size: int = 10 * 1024 * 1024) -> None:
        self._root = Path(root).resolve()
        self._max_size = max_size

    @property
    def root(self) -> Path:
        return self._root

    def resolve(self, relative: str) -> Path:
        """Resolve *relative* against the root.

        Raises ``NotFound`` if the result escapes the root.
        """
        candidate = (self._root / relative.lstrip("/")).resolve()
        if not candidate.is_relative_to(self._root):
            raise NotFound(relative, f"file not found: {relative}")
        return candidate

    async def read_bytes(self, relative: str) -> bytes:
        """Read a whole file.

        Raises ``NotFound`` for missing files and non-files, and
        ``ValueError`` for files larger than the configured limit.
        """
        path = anyio.Path(self.resolve(relative))
        if not await path.is_file():
            raise NotFound(relative, f"file not found: {relative}")

        size = (await path.stat()).st_size
        if size > self._max_size:
            msg = f"{relative} is {size} bytes, over the {self._max_size} byte limit"
            raise ValueError(msg)
        return await path.read_bytes()

    async def read_text(self, relative: str, encoding: str = "utf-8") -> str:
        return (await self.read_bytes(relative)).decode(encoding)
