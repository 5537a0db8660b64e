# agent.py - Agent Entry Point
#
# The developer-facing API for agentgraph.
# This is what users import and use:
#
#   from agentgraph import Agent, tool
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
#
#   result = await agent.run("Add 3 and 4.")

from dataclasses import dataclass
from typing import Optional, Sequence

from .core.context import DEFAULT_INSTRUCTIONS, SystemDirective
from .core.executor import CancellationToken, GraphExecutor
from .core.graph import END, START, CompiledGraph, StateGraph
from .core.models import ExecutionState, Message
from .core.nodes import ReasoningNode, ToolExecutionNode
from .core.router import Decision, should_continue
from .errors import ExecutionCancelled, StepLimitExceeded
from .llm.base import ModelGateway
from .observe.hooks import HookManager
from .observe.trace import ExecutionTrace
from .tools.base import ToolSpec
from .tools.registry import ToolRegistry

REASONING = "reasoning"
TOOLS = "tools"


@dataclass
class AgentResult:
    """Final result returned to the developer after a run."""
    status: str  # "completed", "max_steps", "aborted"
    state: ExecutionState
    trace: ExecutionTrace
    reason: str = ""

    @property
    def success(self) -> bool:
        return self.status == "completed"

    @property
    def steps(self) -> int:
        return self.trace.total_steps

    @property
    def llm_calls(self) -> int:
        return self.state.llm_calls

    @property
    def messages(self) -> list[Message]:
        return self.state.messages

    @property
    def final_message(self) -> Optional[Message]:
        last = self.state.last_message
        return last if last is not None and last.is_ai else None

    @property
    def output(self) -> str:
        final = self.final_message
        return final.content if final is not None else ""


def build_agent_graph(reasoning: ReasoningNode, tools: ToolExecutionNode) -> CompiledGraph:
    """START → reasoning → (tools → reasoning)* → END"""
    return (
        StateGraph()
        .add_node(REASONING, reasoning)
        .add_node(TOOLS, tools)
        .add_edge(START, REASONING)
        .add_conditional_edges(
            REASONING, should_continue,
            {Decision.CONTINUE: TOOLS, Decision.HALT: END},
        )
        .add_edge(TOOLS, REASONING)
        .compile()
    )


class Agent:
    """
    The agentgraph Agent - developer entry point.

    Each run() owns a fresh ExecutionState; the registry and compiled
    graph are built once and shared by every run.

    Args:
        gateway: Any ModelGateway (async invoke(messages, tools) -> ai Message)
        tools: ToolSpecs (from the @tool decorator)
        instructions: system directive text
        instructions_file: Path to a file containing the directive
        max_steps: Maximum node executions per run. None (default) keeps
            the engine unbounded: a model that always asks for tools
            never stops on its own.
        concurrent_tools: run the tool calls of one step concurrently
            (results still land in request order)
    """

    def __init__(
        self,
        gateway: ModelGateway,
        tools: Optional[Sequence[ToolSpec]] = None,
        instructions: str = DEFAULT_INSTRUCTIONS,
        instructions_file: Optional[str] = None,
        max_steps: Optional[int] = None,
        concurrent_tools: bool = False,
    ):
        if max_steps is not None and max_steps < 1:
            raise ValueError(f"max_steps must be at least 1, got {max_steps}")

        self.gateway = gateway
        self.max_steps = max_steps
        self.registry = ToolRegistry(tools)
        self.hooks = HookManager()
        self.directive = SystemDirective(instructions, instructions_file)

        self.graph = build_agent_graph(
            ReasoningNode(gateway, self.registry, self.directive),
            ToolExecutionNode(self.registry, concurrent=concurrent_tools, hooks=self.hooks),
        )
        self._active: dict[int, CancellationToken] = {}

    def on(self, event: str):
        """
        Decorator to register event hooks.

        Usage:
            @agent.on("tool_called")
            async def log_tool(data):
                print(f"{data['tool']}({data['args']}) -> {data['status']}")
        """
        return self.hooks.on(event)

    def abort(self, reason: str = "User aborted execution") -> None:
        """
        Abort every in-flight run of this agent at its next node boundary.

        A model or tool call already in flight finishes first. To stop a
        single run among several concurrent ones, pass it its own
        CancellationToken and cancel that instead.
        """
        for token in list(self._active.values()):
            token.cancel(reason)

    async def invoke(
        self, state: ExecutionState, cancel: Optional[CancellationToken] = None
    ) -> AgentResult:
        """
        Run the agent graph on a caller-built state.

        GatewayFailure and other fatal errors propagate; hitting
        max_steps or a cancellation is reported through AgentResult.status.
        """
        if not state.messages:
            raise ValueError("Initial state needs at least one seed message.")

        if cancel is None:
            cancel = CancellationToken()
        self._active[id(cancel)] = cancel
        executor = GraphExecutor(self.graph, hooks=self.hooks)
        try:
            await executor.run(state, max_steps=self.max_steps, cancel=cancel)
        except StepLimitExceeded as e:
            return AgentResult(
                status="max_steps", state=state, trace=executor.trace, reason=e.message
            )
        except ExecutionCancelled as e:
            return AgentResult(
                status="aborted", state=state, trace=executor.trace, reason=e.reason
            )
        finally:
            self._active.pop(id(cancel), None)

        return AgentResult(status="completed", state=state, trace=executor.trace)

    async def run(
        self, request: str, cancel: Optional[CancellationToken] = None
    ) -> AgentResult:
        """
        Run the agent on a user request.

        Raises:
            TypeError: If request is not a string.
            ValueError: If request is empty or whitespace-only.
            GatewayFailure: If the model gateway fails.
        """
        if not isinstance(request, str):
            raise TypeError(
                f"Request must be a string, got {type(request).__name__}."
            )
        if not request.strip():
            raise ValueError(
                "Request cannot be empty or whitespace-only."
            )
        return await self.invoke(ExecutionState.from_request(request.strip()), cancel)
