# nodes.py - Agent Graph Nodes
#
# The two nodes of the agent graph:
#   - ReasoningNode:      one model call per visit, bumps llm_calls
#   - ToolExecutionNode:  runs the tool calls of the latest ai message
#
# Both are async callables: state in, StateUpdate out. Neither mutates
# the state it is given.

import asyncio
import logging
import time
from typing import TYPE_CHECKING, Optional

from ..errors import GatewayFailure, ToolError, UnknownTool
from ..observe.hooks import HookManager
from ..tools.base import to_content
from ..tools.registry import ToolRegistry
from .context import SystemDirective
from .models import ExecutionState, Message, StateUpdate, ToolCall

if TYPE_CHECKING:
    from ..llm.base import ModelGateway

logger = logging.getLogger(__name__)


class ReasoningNode:
    """
    Calls the model gateway with the directive, the transcript and the
    full tool listing, then appends the reply.
    """

    def __init__(
        self,
        gateway: "ModelGateway",
        registry: ToolRegistry,
        directive: Optional[SystemDirective] = None,
    ):
        self.gateway = gateway
        self.registry = registry
        self.directive = directive or SystemDirective()

    async def __call__(self, state: ExecutionState) -> StateUpdate:
        messages = self.directive.build_messages(state)
        reply = await self.gateway.invoke(messages, self.registry.list_tools())

        if not isinstance(reply, Message) or not reply.is_ai:
            raise GatewayFailure(f"Gateway returned a non-ai message: {reply!r}")

        logger.debug(
            "Model replied with %d tool call(s) after %d call(s)",
            len(reply.tool_calls), state.llm_calls + 1,
        )
        return StateUpdate(messages=[reply], llm_calls=state.llm_calls + 1)


class ToolExecutionNode:
    """
    Executes every tool call of the last ai message, in request order.

    Tool-level failures (UnknownTool, InvalidArguments, ToolExecutionFailure)
    never abort the run: each becomes a tool message with status="error"
    so the next reasoning step can react to it.

    Args:
        registry: where tool names are resolved
        concurrent: fan the calls out with asyncio.gather; results are
            still appended in request order
        hooks: optional HookManager receiving "tool_called" events
    """

    def __init__(
        self,
        registry: ToolRegistry,
        concurrent: bool = False,
        hooks: Optional[HookManager] = None,
    ):
        self.registry = registry
        self.concurrent = concurrent
        self.hooks = hooks

    async def _run_call(self, call: ToolCall) -> Message:
        start = time.time()
        spec = self.registry.lookup(call.name)
        try:
            if spec is None:
                raise UnknownTool(call.name, self.registry.names())
            result = await spec.invoke(call.args)
            message = Message.tool(to_content(result), tool_call_id=call.id, name=call.name)
        except ToolError as e:
            logger.warning("Tool call %s (%s) failed: %s", call.id, call.name, e)
            message = Message.tool(
                f"Error: {e}", tool_call_id=call.id, name=call.name, status="error"
            )

        if self.hooks:
            await self.hooks.emit("tool_called", {
                "tool": call.name,
                "args": call.args,
                "call_id": call.id,
                "status": message.status,
                "duration_ms": (time.time() - start) * 1000,
            })
        return message

    async def __call__(self, state: ExecutionState) -> StateUpdate:
        last = state.last_message
        if last is None or not last.is_ai:
            return StateUpdate()

        if self.concurrent:
            results = await asyncio.gather(*(self._run_call(c) for c in last.tool_calls))
        else:
            results = [await self._run_call(c) for c in last.tool_calls]
        return StateUpdate(messages=list(results))
