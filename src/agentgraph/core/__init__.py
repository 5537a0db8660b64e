# __init__.py - Core package
from .models import Role, ToolCall, Message, StateUpdate, ExecutionState
from .router import Decision, should_continue
from .context import SystemDirective, DEFAULT_INSTRUCTIONS
from .nodes import ReasoningNode, ToolExecutionNode
from .graph import START, END, StateGraph, CompiledGraph, ConditionalEdge
from .executor import GraphExecutor, CancellationToken

__all__ = [
    "Role", "ToolCall", "Message", "StateUpdate", "ExecutionState",
    "Decision", "should_continue",
    "SystemDirective", "DEFAULT_INSTRUCTIONS",
    "ReasoningNode", "ToolExecutionNode",
    "START", "END", "StateGraph", "CompiledGraph", "ConditionalEdge",
    "GraphExecutor", "CancellationToken",
]
