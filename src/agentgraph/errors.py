# errors.py - Error hierarchy
#
# Every failure in agentgraph is one of these:
#   - GatewayFailure        (fatal, aborts the execution)
#   - UnknownTool           (recoverable, becomes an error tool message)
#   - InvalidArguments      (recoverable, becomes an error tool message)
#   - ToolExecutionFailure  (recoverable, becomes an error tool message)
#   - GraphValidationError  (topology rejected at compile time)
#   - InvalidStateUpdate    (node produced an update that breaks the transcript)
#   - StepLimitExceeded / ExecutionCancelled (carry the partial state)

from __future__ import annotations

from typing import Any, Optional


class AgentGraphError(Exception):
    """Root of all agentgraph errors."""

    def __init__(self, code: str, message: str, cause: Optional[Exception] = None) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.cause = cause


class GatewayFailure(AgentGraphError):
    """The model gateway failed: transport, HTTP status, or malformed response."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        cause: Optional[Exception] = None,
    ) -> None:
        super().__init__("GATEWAY_FAILURE", message, cause)
        self.status_code = status_code


class ToolError(AgentGraphError):
    def __init__(
        self, code: str, tool_name: str, message: str, cause: Optional[Exception] = None
    ) -> None:
        super().__init__(code, message, cause)
        self.tool_name = tool_name


class UnknownTool(ToolError):
    def __init__(self, tool_name: str, available: list[str]) -> None:
        listing = ", ".join(available) if available else "(none)"
        super().__init__(
            "UNKNOWN_TOOL",
            tool_name,
            f"Unknown tool '{tool_name}'. Available: {listing}",
        )
        self.available = available


class InvalidArguments(ToolError):
    def __init__(self, tool_name: str, detail: str, cause: Optional[Exception] = None) -> None:
        super().__init__(
            "INVALID_ARGUMENTS",
            tool_name,
            f"Invalid arguments for tool '{tool_name}': {detail}",
            cause,
        )


class ToolExecutionFailure(ToolError):
    def __init__(self, tool_name: str, cause: Exception) -> None:
        super().__init__(
            "TOOL_EXECUTION_FAILURE",
            tool_name,
            f"Tool '{tool_name}' failed: {type(cause).__name__}: {cause}",
            cause,
        )


class GraphValidationError(AgentGraphError):
    def __init__(self, message: str) -> None:
        super().__init__("GRAPH_INVALID", message)


class InvalidStateUpdate(AgentGraphError):
    def __init__(self, message: str) -> None:
        super().__init__("STATE_UPDATE_INVALID", message)


class StepLimitExceeded(AgentGraphError):
    """Raised when a run reaches its step bound before the terminal node."""

    def __init__(self, max_steps: int, state: Any) -> None:
        super().__init__(
            "STEP_LIMIT", f"Execution reached the step limit ({max_steps}) before terminating"
        )
        self.max_steps = max_steps
        self.state = state


class ExecutionCancelled(AgentGraphError):
    """Raised at a node boundary once cancellation was requested."""

    def __init__(self, reason: str, state: Any) -> None:
        super().__init__("CANCELLED", f"Execution cancelled: {reason}")
        self.reason = reason
        self.state = state
