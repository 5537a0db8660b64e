# models.py - All data structures for agentgraph
#
# Contains:
#   - Role            (system / human / ai / tool)
#   - ToolCall        (tool name + args + call id requested by the model)
#   - Message         (one entry of the conversation transcript)
#   - StateUpdate     (partial update returned by a node)
#   - ExecutionState  (the accumulated state of one execution)
#
# Merge rules for StateUpdate -> ExecutionState:
#   messages   append, in order, never reordered or deduplicated
#   llm_calls  replace (None means "unchanged")

import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field

from ..errors import InvalidStateUpdate


class Role(str, Enum):
    SYSTEM = "system"
    HUMAN = "human"
    AI = "ai"
    TOOL = "tool"


def _new_call_id() -> str:
    return f"call_{uuid.uuid4().hex[:12]}"


# ------ LLM INTERFACE STRUCTURES ------
class ToolCall(BaseModel):
    name: str
    args: dict[str, Any] = Field(default_factory=dict)
    id: str = Field(default_factory=_new_call_id)


# ------ TRANSCRIPT ------
@dataclass
class Message:
    role: Role
    content: str = ""
    tool_calls: list[ToolCall] = field(default_factory=list)
    tool_call_id: Optional[str] = None
    name: Optional[str] = None
    status: str = "success"

    @classmethod
    def system(cls, content: str) -> "Message":
        return cls(role=Role.SYSTEM, content=content)

    @classmethod
    def human(cls, content: str) -> "Message":
        return cls(role=Role.HUMAN, content=content)

    @classmethod
    def ai(cls, content: str = "", tool_calls: Optional[list[ToolCall]] = None) -> "Message":
        return cls(role=Role.AI, content=content, tool_calls=list(tool_calls or []))

    @classmethod
    def tool(
        cls, content: str, tool_call_id: str, name: Optional[str] = None, status: str = "success"
    ) -> "Message":
        return cls(
            role=Role.TOOL,
            content=content,
            tool_call_id=tool_call_id,
            name=name,
            status=status,
        )

    @property
    def is_ai(self) -> bool:
        return self.role == Role.AI


@dataclass
class StateUpdate:
    messages: list[Message] = field(default_factory=list)
    llm_calls: Optional[int] = None

    @property
    def is_empty(self) -> bool:
        return not self.messages and self.llm_calls is None


@dataclass
class ExecutionState:
    """
    State owned by a single in-flight execution.

    Nodes never mutate it directly: they return a StateUpdate and the
    executor merges it through apply().
    """
    messages: list[Message] = field(default_factory=list)
    llm_calls: int = 0

    @classmethod
    def from_request(cls, request: str) -> "ExecutionState":
        return cls(messages=[Message.human(request)])

    @property
    def last_message(self) -> Optional[Message]:
        return self.messages[-1] if self.messages else None

    def emitted_call_ids(self) -> set[str]:
        return {
            call.id
            for msg in self.messages
            if msg.is_ai
            for call in msg.tool_calls
        }

    def apply(self, update: StateUpdate) -> None:
        """
        Merge a partial update into this state.

        The whole update is checked before anything is written, so a
        rejected update leaves the state untouched.
        """
        if update.llm_calls is not None and update.llm_calls < 0:
            raise InvalidStateUpdate(f"llm_calls must be non-negative, got {update.llm_calls}")

        known_ids = self.emitted_call_ids()
        for msg in update.messages:
            if msg.is_ai:
                known_ids.update(call.id for call in msg.tool_calls)
            elif msg.role == Role.TOOL and msg.tool_call_id not in known_ids:
                raise InvalidStateUpdate(
                    f"Tool message answers unknown call id '{msg.tool_call_id}'"
                )

        self.messages.extend(update.messages)
        if update.llm_calls is not None:
            self.llm_calls = update.llm_calls
