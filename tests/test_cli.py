"""Tests for wren.cli — CLI entrypoint, argument parsing, and inspection commands."""

import json
import logging
from collections.abc import Iterator
from pathlib import Path

import pytest

from wren import App
from wren.cli import main
from wren.cli._inspect import _parse_arguments
from wren.cli._resolve import resolve_app
from wren.config import AppConfig


@pytest.fixture(autouse=True)
def _reset_logging() -> Iterator[None]:
    yield
    logger = logging.getLogger("wren")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def root(tmp_path: Path) -> Path:
    (tmp_path / "README.md").write_text("# Demo\n", encoding="utf-8")
    return tmp_path


def _run(capsys: pytest.CaptureFixture[str], *argv: str) -> dict:
    main(list(argv))
    return json.loads(capsys.readouterr().out)


def _run_failing(capsys: pytest.CaptureFixture[str], *argv: str) -> tuple[int | str | None, dict]:
    with pytest.raises(SystemExit) as exc_info:
        main(list(argv))
    return exc_info.value.code, json.loads(capsys.readouterr().out)


class TestCLIHelp:
    def test_help_exits_zero(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["--help"])
        assert exc_info.value.code == 0

    @pytest.mark.parametrize("command", ["serve", "resources", "tools", "read", "call"])
    def test_subcommand_help_exits_zero(self, command: str) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main([command, "--help"])
        assert exc_info.value.code == 0


class TestCLIMissingArgs:
    def test_read_missing_uri(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["read"])
        assert exc_info.value.code == 2

    def test_call_missing_name(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["call"])
        assert exc_info.value.code == 2

    def test_bad_log_level(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["tools", "--log-level", "loud"])
        assert exc_info.value.code == 2


class TestCLINoCommand:
    def test_no_command_exits_zero(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main([])
        assert exc_info.value.code == 0
        captured = capsys.readouterr()
        assert "wren" in captured.out


class TestInspect:
    def test_resources(self, capsys: pytest.CaptureFixture[str], root: Path) -> None:
        out = _run(capsys, "resources", "--root", str(root))
        assert [r["uri"] for r in out["resources"]] == ["system://info", "docs://readme"]
        assert out["resourceTemplates"][-1]["uriTemplate"] == "file:///{path:path}"

    def test_tools(self, capsys: pytest.CaptureFixture[str], root: Path) -> None:
        out = _run(capsys, "tools", "--root", str(root))
        assert out["tools"][0]["name"] == "create_user"

    def test_read(self, capsys: pytest.CaptureFixture[str], root: Path) -> None:
        out = _run(capsys, "read", "users://2", "--root", str(root))
        (content,) = out["contents"]
        assert content["uri"] == "users://2"
        assert json.loads(content["text"])["name"] == "Bob Smith"

    def test_read_file(self, capsys: pytest.CaptureFixture[str], root: Path) -> None:
        out = _run(capsys, "read", "file:///README.md", "--root", str(root))
        assert out["contents"][0]["mimeType"] == "text/markdown"

    def test_read_not_found(self, capsys: pytest.CaptureFixture[str], root: Path) -> None:
        code, out = _run_failing(capsys, "read", "users://999", "--root", str(root))
        assert code == 1
        assert out["error"]["code"] == -32002
        assert out["error"]["data"]["uri"] == "users://999"

    def test_call(self, capsys: pytest.CaptureFixture[str], root: Path) -> None:
        out = _run(
            capsys,
            "call",
            "create_user",
            "--arg",
            "name=Ann",
            "--arg",
            "email=ann@x.com",
            "--root",
            str(root),
        )
        assert out["isError"] is False
        assert out["structuredContent"]["id"] == 4

    def test_call_json(self, capsys: pytest.CaptureFixture[str], root: Path) -> None:
        out = _run(
            capsys,
            "call",
            "create_user",
            "--json",
            '{"name": "Ann", "email": "ann@x.com", "role": "moderator"}',
            "--root",
            str(root),
        )
        assert out["structuredContent"]["role"] == "moderator"

    def test_call_missing_argument(self, capsys: pytest.CaptureFixture[str], root: Path) -> None:
        code, out = _run_failing(
            capsys, "call", "create_user", "--arg", "name=Ann", "--root", str(root)
        )
        assert code == 1
        assert out["error"]["code"] == -32602
        assert out["error"]["data"]["argument"] == "email"

    def test_unknown_app(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["tools", "--app", "no_such_module_xyz:app"])
        assert exc_info.value.code == 1
        assert "Error" in capsys.readouterr().err


class TestParseArguments:
    def test_pairs(self) -> None:
        assert _parse_arguments(None, ["a=1", "b=x=y"]) == {"a": "1", "b": "x=y"}

    def test_pairs_override_json(self) -> None:
        assert _parse_arguments('{"a": 1, "b": 2}', ["a=3"]) == {"a": "3", "b": 2}

    @pytest.mark.parametrize(
        ("raw", "pairs"),
        [("{not json", []), ("[1, 2]", []), (None, ["novalue"]), (None, ["=x"])],
    )
    def test_invalid(self, raw: str | None, pairs: list[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            _parse_arguments(raw, pairs)
        assert exc_info.value.code == 2


class TestResolveApp:
    def test_factory_receives_config(self, root: Path) -> None:
        config = AppConfig(root=root, name="Custom")
        app = resolve_app("wren.demo:create_app", config)
        assert isinstance(app, App)
        assert app.config is config

    def test_factory_without_config(self) -> None:
        app = resolve_app("wren.demo:create_app")
        assert app.config == AppConfig()

    def test_default_attribute_is_app(self) -> None:
        with pytest.raises(AttributeError):
            resolve_app("wren.demo")

    def test_not_an_app(self) -> None:
        with pytest.raises(TypeError, match="not a wren.App"):
            resolve_app("wren.data.models:ROLES")

    def test_callable_returning_non_app(self) -> None:
        with pytest.raises(TypeError, match="not a wren.App"):
            resolve_app("wren.config:AppConfig")
