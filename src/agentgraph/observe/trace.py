# trace.py - Execution Trace Collector
#
# Records every node step of an execution for debugging and
# performance analysis.

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional


@dataclass
class StepTrace:
    """One node step in the execution trace."""
    step_number: int
    node: str
    next_node: Optional[str] = None
    messages_added: int = 0
    llm_calls: int = 0
    success: bool = True
    error: Optional[str] = None
    timestamp: str = field(default_factory=lambda: datetime.now().isoformat())
    duration_ms: float = 0.0


@dataclass
class ExecutionTrace:
    """Complete trace of one execution."""
    steps: list[StepTrace] = field(default_factory=list)
    start_time: str = field(default_factory=lambda: datetime.now().isoformat())
    end_time: Optional[str] = None
    total_steps: int = 0
    errors: int = 0

    def add_step(self, step: StepTrace) -> None:
        self.steps.append(step)
        self.total_steps = len(self.steps)
        if not step.success:
            self.errors += 1

    def finalize(self) -> None:
        """Mark the execution as finished."""
        self.end_time = datetime.now().isoformat()

    def visits(self, node: str) -> int:
        return sum(1 for s in self.steps if s.node == node)

    def summary(self) -> dict:
        """Return a summary of the execution for logging/display."""
        return {
            "total_steps": self.total_steps,
            "nodes": {name: self.visits(name) for name in dict.fromkeys(s.node for s in self.steps)},
            "errors": self.errors,
            "start": self.start_time,
            "end": self.end_time,
        }
