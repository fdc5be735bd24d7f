"""Tests for wren.files — rooted file access and media type guessing."""

from pathlib import Path

import pytest

from wren.errors import NotFound
from wren.files import FileSystem, guess_mime_type, is_text_type


class TestMimeTypes:
    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("README.md", "text/markdown"),
            ("notes.txt", "text/plain"),
            ("data.json", "application/json"),
            ("logo.png", "image/png"),
            ("blob", "application/octet-stream"),
        ],
    )
    def test_guess(self, name: str, expected: str) -> None:
        assert guess_mime_type(name) == expected

    def test_text_types(self) -> None:
        assert is_text_type("text/markdown")
        assert is_text_type("application/json")
        assert not is_text_type("image/png")
        assert not is_text_type("application/octet-stream")


class TestResolve:
    def test_inside_root(self, tmp_path: Path) -> None:
        files = FileSystem(tmp_path)
        assert files.resolve("docs/a.md") == tmp_path.resolve() / "docs" / "a.md"

    def test_leading_slash_is_relative(self, tmp_path: Path) -> None:
        files = FileSystem(tmp_path)
        assert files.resolve("/a.md") == tmp_path.resolve() / "a.md"

    def test_parent_escape_rejected(self, tmp_path: Path) -> None:
        files = FileSystem(tmp_path / "root")
        with pytest.raises(NotFound) as exc_info:
            files.resolve("../secret.txt")
        assert exc_info.value.identifier == "../secret.txt"

    def test_symlink_escape_rejected(self, tmp_path: Path) -> None:
        root = tmp_path / "root"
        root.mkdir()
        (tmp_path / "secret.txt").write_text("hidden")
        (root / "link.txt").symlink_to(tmp_path / "secret.txt")

        files = FileSystem(root)
        with pytest.raises(NotFound):
            files.resolve("link.txt")


class TestRead:
    @pytest.mark.asyncio
    async def test_read_bytes(self, tmp_path: Path) -> None:
        (tmp_path / "logo.bin").write_bytes(b"\x00\x01\x02")
        files = FileSystem(tmp_path)
        assert await files.read_bytes("logo.bin") == b"\x00\x01\x02"

    @pytest.mark.asyncio
    async def test_read_text_nested(self, tmp_path: Path) -> None:
        (tmp_path / "docs").mkdir()
        (tmp_path / "docs" / "intro.md").write_text("# Intro\n", encoding="utf-8")
        files = FileSystem(tmp_path)
        assert await files.read_text("docs/intro.md") == "# Intro\n"

    @pytest.mark.asyncio
    async def test_missing_file(self, tmp_path: Path) -> None:
        files = FileSystem(tmp_path)
        with pytest.raises(NotFound, match="file not found"):
            await files.read_bytes("nope.txt")

    @pytest.mark.asyncio
    async def test_directory_is_not_a_file(self, tmp_path: Path) -> None:
        (tmp_path / "docs").mkdir()
        files = FileSystem(tmp_path)
        with pytest.raises(NotFound):
            await files.read_bytes("docs")

    @pytest.mark.asyncio
    async def test_over_size_limit(self, tmp_path: Path) -> None:
        (tmp_path / "big.txt").write_text("x" * 100)
        files = FileSystem(tmp_path, max_size=10)
        with pytest.raises(ValueError, match="byte limit"):
            await files.read_bytes("big.txt")
