# router.py - Router
#
# The only branching decision in the agent graph. Evaluated after
# every reasoning step; pure, so it is never cached.

from enum import Enum

from .models import ExecutionState


class Decision(str, Enum):
    CONTINUE = "continue"
    HALT = "halt"


def should_continue(state: ExecutionState) -> Decision:
    last = state.last_message
    if last is None or not last.is_ai:
        return Decision.HALT

    # The model asked for tools: go run them
    if last.tool_calls:
        return Decision.CONTINUE

    # Otherwise the model is answering the user
    return Decision.HALT
