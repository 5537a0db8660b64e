# executor.py - Graph Executor
#
# Drives a CompiledGraph from START to END:
#   1. Check cancellation and the step bound (node boundary)
#   2. Run the current node → StateUpdate
#   3. Merge the update into the state (append messages, replace counter)
#   4. Resolve the next node (edge, or decision function + route table)
#   5. Emit hooks + record trace
#   6. Loop until END
#
# There is no built-in iteration bound. An agent whose model always asks
# for a tool runs until the caller passes max_steps or cancels.

import logging
import time
from dataclasses import dataclass
from typing import Optional

from ..errors import ExecutionCancelled, StepLimitExceeded
from ..observe.hooks import HookManager
from ..observe.trace import ExecutionTrace, StepTrace
from .graph import END, CompiledGraph
from .models import ExecutionState

logger = logging.getLogger(__name__)


@dataclass
class CancellationToken:
    """
    Cooperative cancellation flag, checked by the executor at every
    node boundary. A call already in flight is not interrupted.
    """
    cancelled: bool = False
    reason: str = ""

    def cancel(self, reason: str = "Execution cancelled by caller") -> None:
        self.cancelled = True
        self.reason = reason


class GraphExecutor:
    """
    Runs one execution of a compiled graph.

    The graph is shared and read-only; the state, trace and cancellation
    token belong to this run alone.
    """

    def __init__(self, graph: CompiledGraph, hooks: Optional[HookManager] = None):
        self.graph = graph
        self.hooks = hooks or HookManager()
        self.trace = ExecutionTrace()

    async def run(
        self,
        state: ExecutionState,
        max_steps: Optional[int] = None,
        cancel: Optional[CancellationToken] = None,
    ) -> ExecutionState:
        """
        Execute until END and return the (same, mutated) state.

        Args:
            state: initial state, mutated in place
            max_steps: maximum node executions; None means unbounded
            cancel: token checked before every node

        Raises:
            StepLimitExceeded: max_steps reached before END (partial state attached)
            ExecutionCancelled: cancel was set (partial state attached)
            GatewayFailure, InvalidStateUpdate, ...: propagated from nodes
        """
        if max_steps is not None and max_steps < 1:
            raise ValueError(f"max_steps must be at least 1, got {max_steps}")

        current = self.graph.entry
        step = 0

        try:
            while current != END:
                if cancel is not None and cancel.cancelled:
                    logger.info("Execution cancelled before '%s': %s", current, cancel.reason)
                    raise ExecutionCancelled(cancel.reason, state)
                if max_steps is not None and step >= max_steps:
                    logger.info("Step limit %d reached before '%s'", max_steps, current)
                    raise StepLimitExceeded(max_steps, state)

                step += 1
                step_start = time.time()
                await self.hooks.emit("node_start", {"step": step, "node": current})

                try:
                    update = await self.graph.nodes[current](state)
                    state.apply(update)
                    next_node = self.graph.resolve_next(current, state)
                except Exception as e:
                    self.trace.add_step(StepTrace(
                        step_number=step,
                        node=current,
                        llm_calls=state.llm_calls,
                        success=False,
                        error=f"{type(e).__name__}: {e}",
                        duration_ms=(time.time() - step_start) * 1000,
                    ))
                    logger.error("Node '%s' failed at step %d: %s", current, step, e)
                    await self.hooks.emit("error", {
                        "step": step,
                        "node": current,
                        "error": str(e),
                        "error_type": type(e).__name__,
                    })
                    raise

                step_duration = (time.time() - step_start) * 1000
                self.trace.add_step(StepTrace(
                    step_number=step,
                    node=current,
                    next_node=next_node,
                    messages_added=len(update.messages),
                    llm_calls=state.llm_calls,
                    duration_ms=step_duration,
                ))
                logger.debug("Step %d: %s -> %s (+%d messages)",
                             step, current, next_node, len(update.messages))
                await self.hooks.emit("node_end", {
                    "step": step,
                    "node": current,
                    "next": next_node,
                    "messages_added": len(update.messages),
                    "llm_calls": state.llm_calls,
                    "duration_ms": step_duration,
                })
                current = next_node
        finally:
            self.trace.finalize()

        await self.hooks.emit("complete", {
            "steps": step,
            "llm_calls": state.llm_calls,
            "messages": len(state.messages),
            "summary": self.trace.summary(),
        })
        return state
