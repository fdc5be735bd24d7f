"""Tests for wren.tools.registry — tool compilation and validated dispatch."""

from typing import Any

import pytest

from wren.content import ToolResult
from wren.errors import BadArgument, ConfigurationError, HandlerError, ToolFailure, ToolNotFound
from wren.tools.registry import ToolDef, ToolRegistry, compile_tools
from wren.tools.schema import Argument

# =============================================================================
# ToolDef tests
# =============================================================================


class TestToolDef:
    def test_frozen(self) -> None:
        def handler() -> str:
            return "ok"

        tool = ToolDef(name="test", description="A test", handler=handler)
        with pytest.raises(AttributeError):
            tool.name = "other"  # type: ignore[misc]

    def test_input_schema(self) -> None:
        def handler(query: str) -> str:
            return query

        tool = ToolDef(
            name="search",
            description="Search things",
            handler=handler,
            arguments=(Argument("query", required=True),),
        )
        assert tool.input_schema == {
            "type": "object",
            "properties": {"query": {"type": "string"}},
            "required": ["query"],
        }


# =============================================================================
# ToolRegistry tests
# =============================================================================


class TestToolRegistry:
    def _make_registry(
        self,
        tools: list[tuple[str, str, Any, Any]] | None = None,
    ) -> ToolRegistry:
        if tools is None:
            tools = [
                ("search", "Search items", self._search_handler, None),
                ("create", "Create item", self._create_handler, None),
            ]
        return compile_tools(tools)

    async def _search_handler(self, query: str) -> list[dict]:
        return [{"name": "item1", "query": query}]

    async def _create_handler(self, title: str, body: str = "") -> dict:
        return {"title": title, "body": body}

    def test_list_tools(self) -> None:
        registry = self._make_registry()
        assert [t.name for t in registry.list_tools()] == ["search", "create"]

    def test_inferred_schema(self) -> None:
        registry = self._make_registry()
        create = registry.get("create")
        assert create is not None
        assert create.input_schema["required"] == ["title"]

    def test_contains(self) -> None:
        registry = self._make_registry()
        assert "search" in registry
        assert "missing" not in registry

    def test_len(self) -> None:
        registry = self._make_registry()
        assert len(registry) == 2

    def test_get_missing(self) -> None:
        registry = self._make_registry()
        assert registry.get("nope") is None

    def test_duplicate_name_raises(self) -> None:
        def handler() -> str:
            return "ok"

        with pytest.raises(ConfigurationError, match="Duplicate tool name"):
            compile_tools([("test", "Test", handler, None), ("test", "Test 2", handler, None)])


class TestCallTool:
    @pytest.mark.asyncio
    async def test_async_handler(self) -> None:
        async def search(query: str) -> list[dict]:
            return [{"q": query}]

        registry = compile_tools([("search", "Search", search, None)])
        result = await registry.call_tool("search", {"query": "test"})
        assert result.structured == {"result": [{"q": "test"}]}
        assert '"q": "test"' in result.text
        assert result.is_error is False

    @pytest.mark.asyncio
    async def test_sync_handler(self) -> None:
        def greet(name: str) -> str:
            return f"Hello, {name}!"

        registry = compile_tools([("greet", "Greet", greet, None)])
        result = await registry.call_tool("greet", {"name": "World"})
        assert result == ToolResult(text="Hello, World!")

    @pytest.mark.asyncio
    async def test_tool_result_passes_through(self) -> None:
        expected = ToolResult(text="done", structured={"id": 1})

        def handler() -> ToolResult:
            return expected

        registry = compile_tools([("t", "", handler, ())])
        assert await registry.call_tool("t", {}) is expected

    @pytest.mark.asyncio
    async def test_not_found(self) -> None:
        registry = compile_tools([])
        with pytest.raises(ToolNotFound, match="Tool not found"):
            await registry.call_tool("missing", {})

    @pytest.mark.asyncio
    async def test_invoked_exactly_once(self) -> None:
        calls: list[dict[str, Any]] = []

        def record(name: str, email: str) -> str:
            calls.append({"name": name, "email": email})
            return "ok"

        args = (Argument("name", required=True), Argument("email", required=True))
        registry = compile_tools([("record", "", record, args)])
        await registry.call_tool("record", {"name": "Ann", "email": "ann@x.com"})
        assert calls == [{"name": "Ann", "email": "ann@x.com"}]

    @pytest.mark.asyncio
    async def test_bad_argument_never_invokes_handler(self) -> None:
        calls: list[str] = []

        def record(name: str, email: str) -> str:
            calls.append(name)
            return "ok"

        args = (Argument("name", required=True), Argument("email", required=True))
        registry = compile_tools([("record", "", record, args)])
        with pytest.raises(BadArgument) as exc_info:
            await registry.call_tool("record", {"name": "Ann"})
        assert exc_info.value.argument == "email"
        assert calls == []

    @pytest.mark.asyncio
    async def test_inferred_union_none_is_required(self) -> None:
        calls: list[str] = []

        def greet(name: str, title: str | None) -> str:
            calls.append(name)
            return f"Hello, {title} {name}"

        registry = compile_tools([("greet", "", greet, None)])
        with pytest.raises(BadArgument) as exc_info:
            await registry.call_tool("greet", {"name": "Ann"})
        assert exc_info.value.argument == "title"
        assert calls == []

    @pytest.mark.asyncio
    async def test_absent_optional_reaches_handler_as_default(self) -> None:
        def greet(name: str, title: str | None = None) -> str:
            return f"Hello, {title or 'friend'} {name}"

        registry = compile_tools([("greet", "", greet, None)])
        result = await registry.call_tool("greet", {"name": "Ann"})
        assert result.text == "Hello, friend Ann"

    @pytest.mark.asyncio
    async def test_declared_optional_without_default_is_passed(self) -> None:
        def greet(name: str, title: str | None) -> str:
            return f"{title}:{name}"

        args = (Argument("name", required=True), Argument("title"))
        registry = compile_tools([("greet", "", greet, args)])
        result = await registry.call_tool("greet", {"name": "Ann"})
        assert result.text == "None:Ann"

    @pytest.mark.asyncio
    async def test_tool_failure_is_caller_facing(self) -> None:
        def fail() -> str:
            raise ToolFailure("quota exceeded")

        registry = compile_tools([("fail", "", fail, ())])
        result = await registry.call_tool("fail", {})
        assert result.is_error is True
        assert result.text == "quota exceeded"

    @pytest.mark.asyncio
    async def test_unexpected_exception_wrapped(self) -> None:
        def boom() -> str:
            raise RuntimeError("disk on fire")

        registry = compile_tools([("boom", "", boom, ())])
        with pytest.raises(HandlerError) as exc_info:
            await registry.call_tool("boom", {})
        assert exc_info.value.identifier == "boom"
        assert isinstance(exc_info.value.__cause__, RuntimeError)

    @pytest.mark.asyncio
    async def test_rpc_error_propagates_unchanged(self) -> None:
        def nested() -> str:
            raise BadArgument("x", "a string")

        registry = compile_tools([("nested", "", nested, ())])
        with pytest.raises(BadArgument):
            await registry.call_tool("nested", {})
