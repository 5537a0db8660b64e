# graph.py - Graph Topology
#
# Declares the nodes and transitions of an execution graph and checks
# them once, at compile time:
#   - StateGraph:     mutable builder (add_node / add_edge / add_conditional_edges)
#   - CompiledGraph:  frozen, validated topology shared by every run
#
# START and END are sentinels, never real nodes.

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING, Awaitable, Callable, Mapping, Optional

from ..errors import GraphValidationError
from .models import ExecutionState, StateUpdate
from .router import Decision

if TYPE_CHECKING:
    from ..observe.hooks import HookManager
    from .executor import CancellationToken

logger = logging.getLogger(__name__)

START = "__start__"
END = "__end__"

NodeFn = Callable[[ExecutionState], Awaitable[StateUpdate]]
DecisionFn = Callable[[ExecutionState], Decision]


@dataclass(frozen=True)
class ConditionalEdge:
    decide: DecisionFn
    routes: Mapping[Decision, str]


class StateGraph:
    """
    Builder for an execution graph.

    Usage:
        graph = (
            StateGraph()
            .add_node("reasoning", reasoning_node)
            .add_node("tools", tool_node)
            .add_edge(START, "reasoning")
            .add_conditional_edges(
                "reasoning", should_continue,
                {Decision.CONTINUE: "tools", Decision.HALT: END},
            )
            .add_edge("tools", "reasoning")
            .compile()
        )
    """

    def __init__(self):
        self._nodes: dict[str, NodeFn] = {}
        self._edges: dict[str, str] = {}
        self._conditional: dict[str, ConditionalEdge] = {}

    def add_node(self, name: str, fn: NodeFn) -> "StateGraph":
        if name in (START, END):
            raise GraphValidationError(f"'{name}' is a reserved sentinel name")
        if name in self._nodes:
            raise GraphValidationError(f"Node '{name}' is already declared")
        if not callable(fn):
            raise GraphValidationError(f"Node '{name}' is not callable")
        self._nodes[name] = fn
        return self

    def _check_free_source(self, source: str) -> None:
        if source == END:
            raise GraphValidationError("END cannot have outgoing edges")
        if source in self._edges or source in self._conditional:
            raise GraphValidationError(f"Node '{source}' already has an outgoing transition")

    def add_edge(self, source: str, destination: str) -> "StateGraph":
        self._check_free_source(source)
        self._edges[source] = destination
        return self

    def add_conditional_edges(
        self, source: str, decide: DecisionFn, routes: Mapping[Decision, str]
    ) -> "StateGraph":
        if source == START:
            raise GraphValidationError("The entry transition must be an unconditional edge")
        self._check_free_source(source)
        self._conditional[source] = ConditionalEdge(
            decide=decide, routes=MappingProxyType(dict(routes))
        )
        return self

    def compile(self) -> "CompiledGraph":
        """Validate the topology and freeze it."""
        declared = set(self._nodes)

        def check_destination(source: str, destination: str) -> None:
            if destination != END and destination not in declared:
                raise GraphValidationError(
                    f"Transition from '{source}' targets undeclared node '{destination}'"
                )

        for source, destination in self._edges.items():
            if source != START and source not in declared:
                raise GraphValidationError(f"Edge source '{source}' is not a declared node")
            check_destination(source, destination)

        for source, edge in self._conditional.items():
            if source not in declared:
                raise GraphValidationError(f"Edge source '{source}' is not a declared node")
            missing = [d.name for d in Decision if d not in edge.routes]
            if missing:
                raise GraphValidationError(
                    f"Conditional edge from '{source}' does not route: {', '.join(missing)}"
                )
            for destination in edge.routes.values():
                check_destination(source, destination)

        entry = self._edges.get(START)
        if entry is None:
            raise GraphValidationError("Graph has no entry edge from START")
        if entry == END:
            raise GraphValidationError("The entry edge must lead to a node, not END")

        for name in self._nodes:
            if name not in self._edges and name not in self._conditional:
                raise GraphValidationError(f"Node '{name}' has no outgoing transition")

        reachable = self._reachable_from(entry)
        for name in declared - reachable:
            logger.warning("Node '%s' is unreachable from START", name)

        return CompiledGraph(
            nodes=MappingProxyType(dict(self._nodes)),
            edges=MappingProxyType(dict(self._edges)),
            conditional=MappingProxyType(dict(self._conditional)),
            entry=entry,
        )

    def _reachable_from(self, entry: str) -> set[str]:
        seen: set[str] = set()
        pending = [entry]
        while pending:
            name = pending.pop()
            if name == END or name in seen:
                continue
            seen.add(name)
            if name in self._edges:
                pending.append(self._edges[name])
            elif name in self._conditional:
                pending.extend(self._conditional[name].routes.values())
        return seen


@dataclass(frozen=True)
class CompiledGraph:
    """
    Validated, read-only topology.

    Safe to share between concurrent runs: execution never writes to it.
    """
    nodes: Mapping[str, NodeFn]
    edges: Mapping[str, str]
    conditional: Mapping[str, ConditionalEdge]
    entry: str

    def resolve_next(self, current: str, state: ExecutionState) -> str:
        """Destination after `current`, evaluating its decision function if it has one."""
        if current in self.edges:
            return self.edges[current]
        edge = self.conditional[current]
        decision = edge.decide(state)
        try:
            return edge.routes[Decision(decision)]
        except (KeyError, ValueError) as e:
            raise GraphValidationError(
                f"Decision function for '{current}' returned unmapped outcome {decision!r}"
            ) from e

    async def invoke(
        self,
        state: ExecutionState,
        max_steps: Optional[int] = None,
        cancel: Optional["CancellationToken"] = None,
        hooks: Optional["HookManager"] = None,
    ) -> ExecutionState:
        """Run the graph on `state` until END. See GraphExecutor.run."""
        from .executor import GraphExecutor
        return await GraphExecutor(self, hooks=hooks).run(state, max_steps=max_steps, cancel=cancel)
