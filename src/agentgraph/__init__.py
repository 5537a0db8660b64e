# agentgraph - graph execution engine for tool-calling language-model agents
#
# A two-node state machine:
#   - reasoning node calls the model with the transcript and tool listing
#   - router inspects the reply: tool calls → tool node, otherwise stop
#   - tool node runs the requested tools and loops back to reasoning
#
# Quick Start:
#   from agentgraph import Agent, tool
#   from agentgraph.llm import OpenAIAdapter, LLMConfig
#
#   @tool()
#   def add(a: float, b: float) -> float:
#       """Add two numbers."""
#       return a + b
#
#   agent = Agent(
#       gateway=OpenAIAdapter(LLMConfig(model="gpt-4o-mini", api_key="...")),
#       tools=[add],
#   )
#   result = await agent.run("Add 3 and 4.")

from .agent import Agent, AgentResult, build_agent_graph
from .tools.base import tool, ToolSpec
from .tools.registry import ToolRegistry
from .core.models import Role, ToolCall, Message, StateUpdate, ExecutionState
from .core.router import Decision, should_continue
from .core.graph import START, END, StateGraph, CompiledGraph
from .core.executor import GraphExecutor, CancellationToken
from .errors import (
    AgentGraphError,
    GatewayFailure,
    UnknownTool,
    InvalidArguments,
    ToolExecutionFailure,
    GraphValidationError,
    InvalidStateUpdate,
    StepLimitExceeded,
    ExecutionCancelled,
)

__version__ = "0.1.0"

__all__ = [
    "Agent",
    "AgentResult",
    "build_agent_graph",
    "tool",
    "ToolSpec",
    "ToolRegistry",
    "Role",
    "ToolCall",
    "Message",
    "StateUpdate",
    "ExecutionState",
    "Decision",
    "should_continue",
    "START",
    "END",
    "StateGraph",
    "CompiledGraph",
    "GraphExecutor",
    "CancellationToken",
    "AgentGraphError",
    "GatewayFailure",
    "UnknownTool",
    "InvalidArguments",
    "ToolExecutionFailure",
    "GraphValidationError",
    "InvalidStateUpdate",
    "StepLimitExceeded",
    "ExecutionCancelled",
]
