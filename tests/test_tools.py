"""
Tests for tool definitions and the ToolRegistry.
"""

import asyncio

import pytest

from agentgraph.errors import InvalidArguments, ToolExecutionFailure
from agentgraph.tools import ToolRegistry, ToolSpec, add, divide, multiply, to_content, tool


class TestToolDecorator:

    def test_description_from_docstring(self):
        @tool()
        def shout(text: str) -> str:
            """Upper-case the text."""
            return text.upper()

        assert isinstance(shout, ToolSpec)
        assert shout.name == "shout"
        assert shout.description == "Upper-case the text."
        assert not shout.is_async

    def test_explicit_description_and_name(self):
        @tool("Say hello", name="greet")
        def hello(who: str = "world") -> str:
            return f"hello {who}"

        assert hello.name == "greet"
        assert hello.description == "Say hello"

    def test_missing_description_raises(self):
        with pytest.raises(ValueError):
            @tool()
            def nothing(x: int) -> int:
                return x

    def test_schema_lists_required_arguments(self):
        schema = add.to_schema()
        assert schema["name"] == "add"
        assert schema["description"] == "Add two numbers"
        params = schema["parameters"]
        assert set(params["properties"]) == {"a", "b"}
        assert sorted(params["required"]) == ["a", "b"]

    def test_optional_argument_not_required(self):
        @tool("Repeat text")
        def repeat(text: str, times: int = 2) -> str:
            return text * times

        assert repeat.to_schema()["parameters"]["required"] == ["text"]
        assert asyncio.run(repeat.invoke({"text": "ab"})) == "abab"


class TestToolInvocation:

    @pytest.mark.asyncio
    async def test_arithmetic(self):
        assert await add.invoke({"a": 3, "b": 4}) == 7
        assert await multiply.invoke({"a": 3, "b": 4}) == 12
        assert await divide.invoke({"a": 10, "b": 4}) == 2.5

    @pytest.mark.asyncio
    async def test_integer_results_render_without_fraction(self):
        assert to_content(await add.invoke({"a": 3, "b": 4})) == "7"
        assert to_content(await multiply.invoke({"a": 3, "b": 4})) == "12"
        assert to_content(await divide.invoke({"a": 6, "b": 3})) == "2"
        assert to_content(await add.invoke({"a": 1.5, "b": 2})) == "3.5"

    @pytest.mark.asyncio
    async def test_missing_argument(self):
        with pytest.raises(InvalidArguments) as exc:
            await add.invoke({"a": 3})
        assert exc.value.tool_name == "add"
        assert "b" in str(exc.value)

    @pytest.mark.asyncio
    async def test_wrong_type(self):
        with pytest.raises(InvalidArguments):
            await add.invoke({"a": "three", "b": 4})

    @pytest.mark.asyncio
    async def test_divide_by_zero_is_execution_failure(self):
        with pytest.raises(ToolExecutionFailure) as exc:
            await divide.invoke({"a": 10, "b": 0})
        assert isinstance(exc.value.cause, ZeroDivisionError)

    @pytest.mark.asyncio
    async def test_async_tool(self):
        @tool("Wait then echo")
        async def echo(text: str) -> str:
            await asyncio.sleep(0)
            return text

        assert echo.is_async
        assert await echo.invoke({"text": "hi"}) == "hi"


def test_to_content():
    assert to_content("plain") == "plain"
    assert to_content(7.0) == "7.0"
    assert to_content({"sum": 7}) == '{"sum": 7}'
    assert to_content([1, 2]) == "[1, 2]"


class TestToolRegistry:

    def test_registration_order_is_kept(self):
        registry = ToolRegistry()
        registry.register_many([divide, add, multiply])
        assert [t.name for t in registry.list_tools()] == ["divide", "add", "multiply"]
        assert registry.names() == ["divide", "add", "multiply"]
        assert len(registry) == 3

    def test_duplicate_name_rejected(self, registry):
        with pytest.raises(ValueError):
            registry.register(add)

    def test_non_toolspec_rejected(self):
        with pytest.raises(TypeError):
            ToolRegistry().register(lambda a, b: a + b)

    def test_lookup(self, registry):
        assert registry.lookup("add") is add
        assert registry.lookup("sqrt") is None
        assert "multiply" in registry
        assert "sqrt" not in registry

    def test_lookup_is_idempotent(self, registry):
        assert registry.lookup("divide") is registry.lookup("divide")
