"""
Tests for the router, the reasoning node and the tool execution node.
"""

import asyncio

import pytest

from agentgraph.core.context import DEFAULT_INSTRUCTIONS, SystemDirective
from agentgraph.core.models import ExecutionState, Message, Role, StateUpdate
from agentgraph.core.nodes import ReasoningNode, ToolExecutionNode
from agentgraph.core.router import Decision, should_continue
from agentgraph.errors import GatewayFailure
from agentgraph.llm.scripted import ScriptedGateway
from agentgraph.observe.hooks import HookManager
from agentgraph.tools import ToolRegistry, tool

from .helpers import ai_calls


def state_with(*messages: Message) -> ExecutionState:
    state = ExecutionState.from_request("seed")
    state.apply(StateUpdate(messages=list(messages)))
    return state


class TestRouter:

    def test_empty_state_halts(self):
        assert should_continue(ExecutionState()) == Decision.HALT

    def test_human_last_halts(self):
        assert should_continue(ExecutionState.from_request("hi")) == Decision.HALT

    def test_tool_calls_continue(self):
        state = state_with(ai_calls(("add", "c1", {"a": 1, "b": 2})))
        assert should_continue(state) == Decision.CONTINUE

    def test_plain_answer_halts(self):
        assert should_continue(state_with(Message.ai("7"))) == Decision.HALT

    def test_decision_is_deterministic(self):
        state = state_with(ai_calls(("add", "c1", {"a": 1, "b": 2})))
        outcomes = {should_continue(state) for _ in range(5)}
        assert outcomes == {Decision.CONTINUE}
        assert len(state.messages) == 2


class TestSystemDirective:

    def test_default_instructions(self):
        directive = SystemDirective()
        assert directive.text == DEFAULT_INSTRUCTIONS
        assert directive.message.role == Role.SYSTEM

    def test_instructions_file(self, tmp_path):
        path = tmp_path / "instructions.md"
        path.write_text("You only multiply.\n", encoding="utf-8")
        assert SystemDirective(instructions_file=str(path)).text == "You only multiply."

    def test_missing_instructions_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            SystemDirective(instructions_file=str(tmp_path / "missing.md"))

    def test_tool_listing(self, registry):
        text = SystemDirective("Be exact.", tools=registry.list_tools()).text
        assert text.startswith("Be exact.")
        assert "- add: Add two numbers" in text
        assert "- divide: Divide two numbers" in text

    def test_build_messages_prepends_directive(self):
        state = ExecutionState.from_request("hi")
        messages = SystemDirective("Be exact.").build_messages(state)
        assert [m.role for m in messages] == [Role.SYSTEM, Role.HUMAN]
        assert len(state.messages) == 1


class TestReasoningNode:

    @pytest.mark.asyncio
    async def test_appends_reply_and_counts(self, registry):
        gateway = ScriptedGateway([Message.ai("7")])
        node = ReasoningNode(gateway, registry, SystemDirective("Be exact."))
        state = ExecutionState(messages=[Message.human("Add 3 and 4.")], llm_calls=2)

        update = await node(state)

        assert [m.content for m in update.messages] == ["7"]
        assert update.llm_calls == 3
        assert state.llm_calls == 2
        assert len(state.messages) == 1

    @pytest.mark.asyncio
    async def test_sends_directive_history_and_tools(self, registry):
        gateway = ScriptedGateway([Message.ai("ok")])
        await ReasoningNode(gateway, registry, SystemDirective("Be exact."))(
            ExecutionState.from_request("hi")
        )

        request = gateway.requests[0]
        assert request.messages[0].role == Role.SYSTEM
        assert request.messages[0].content == "Be exact."
        assert request.messages[1].content == "hi"
        assert [t.name for t in request.tools] == ["add", "multiply", "divide"]

    @pytest.mark.asyncio
    async def test_gateway_failure_propagates(self, registry):
        node = ReasoningNode(ScriptedGateway([]), registry)
        with pytest.raises(GatewayFailure):
            await node(ExecutionState.from_request("hi"))

    @pytest.mark.asyncio
    async def test_non_ai_reply_rejected(self, registry):
        class HumanGateway:
            async def invoke(self, messages, tools):
                return Message.human("not a model reply")

        with pytest.raises(GatewayFailure):
            await ReasoningNode(HumanGateway(), registry)(ExecutionState.from_request("hi"))


class TestToolExecutionNode:

    @pytest.mark.asyncio
    async def test_noop_without_ai_message(self, registry):
        node = ToolExecutionNode(registry)
        assert (await node(ExecutionState())).is_empty
        assert (await node(ExecutionState.from_request("hi"))).is_empty

    @pytest.mark.asyncio
    async def test_results_follow_request_order(self, registry):
        state = state_with(ai_calls(
            ("multiply", "c1", {"a": 3, "b": 4}),
            ("add", "c2", {"a": 1, "b": 2}),
        ))
        update = await ToolExecutionNode(registry)(state)

        assert [m.tool_call_id for m in update.messages] == ["c1", "c2"]
        assert [m.content for m in update.messages] == ["12", "3"]
        assert all(m.role == Role.TOOL and m.status == "success" for m in update.messages)
        assert [m.name for m in update.messages] == ["multiply", "add"]

    @pytest.mark.asyncio
    async def test_identical_requests_are_not_deduplicated(self):
        calls = []

        @tool("Count invocations")
        def count(n: int) -> int:
            calls.append(n)
            return len(calls)

        state = state_with(ai_calls(("count", "c1", {"n": 1}), ("count", "c2", {"n": 1})))
        update = await ToolExecutionNode(ToolRegistry([count]))(state)

        assert calls == [1, 1]
        assert [m.content for m in update.messages] == ["1", "2"]

    @pytest.mark.asyncio
    async def test_unknown_tool_becomes_error_message(self, registry):
        state = state_with(ai_calls(("sqrt", "c1", {"x": 9}), ("add", "c2", {"a": 1, "b": 1})))
        update = await ToolExecutionNode(registry)(state)

        error, ok = update.messages
        assert error.status == "error"
        assert error.tool_call_id == "c1"
        assert "Unknown tool 'sqrt'" in error.content
        assert ok.status == "success"
        assert ok.content == "2"

    @pytest.mark.asyncio
    async def test_invalid_arguments_become_error_message(self, registry):
        state = state_with(ai_calls(("add", "c1", {"a": 1})))
        (message,) = (await ToolExecutionNode(registry)(state)).messages
        assert message.status == "error"
        assert "Invalid arguments for tool 'add'" in message.content

    @pytest.mark.asyncio
    async def test_tool_exception_becomes_error_message(self, registry):
        state = state_with(ai_calls(("divide", "c1", {"a": 10, "b": 0})))
        (message,) = (await ToolExecutionNode(registry)(state)).messages
        assert message.status == "error"
        assert "ZeroDivisionError" in message.content

    @pytest.mark.asyncio
    async def test_concurrent_mode_keeps_request_order(self):
        finished = []

        @tool("Sleep then return the label")
        async def slow(label: str, delay: float) -> str:
            await asyncio.sleep(delay)
            finished.append(label)
            return label

        state = state_with(ai_calls(
            ("slow", "c1", {"label": "first", "delay": 0.05}),
            ("slow", "c2", {"label": "second", "delay": 0.0}),
        ))
        update = await ToolExecutionNode(ToolRegistry([slow]), concurrent=True)(state)

        assert finished == ["second", "first"]
        assert [m.content for m in update.messages] == ["first", "second"]
        assert [m.tool_call_id for m in update.messages] == ["c1", "c2"]

    @pytest.mark.asyncio
    async def test_tool_called_hook(self, registry):
        hooks = HookManager()
        seen = []

        @hooks.on("tool_called")
        async def record(data):
            seen.append((data["tool"], data["status"]))

        state = state_with(ai_calls(("add", "c1", {"a": 1, "b": 2}), ("nope", "c2", {})))
        await ToolExecutionNode(registry, hooks=hooks)(state)
        assert seen == [("add", "success"), ("nope", "error")]
