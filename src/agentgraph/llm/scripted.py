# scripted.py - Scripted Model Gateway
#
# A deterministic, in-process ModelGateway. Replies are consumed in order;
# each one is either a ready Message or a callable that builds the reply
# from the request. Useful for tests, demos and offline runs.

from dataclasses import dataclass
from typing import Callable, Sequence, Union

from ..core.models import Message
from ..errors import GatewayFailure
from ..tools.base import ToolSpec

Responder = Callable[[Sequence[Message], Sequence[ToolSpec]], Message]
Reply = Union[Message, Responder]


@dataclass
class GatewayRequest:
    messages: list[Message]
    tools: list[ToolSpec]


class ScriptedGateway:
    """
    Gateway that replays a script of replies.

    Usage:
        gateway = ScriptedGateway([
            Message.ai(tool_calls=[ToolCall(name="add", args={"a": 3, "b": 4})]),
            lambda messages, tools: Message.ai(f"The answer is {messages[-1].content}"),
        ])

    Args:
        replies: replies in the order they are returned
        repeat_last: keep returning the last reply once the script runs out
            instead of failing
    """

    def __init__(self, replies: Sequence[Reply], repeat_last: bool = False):
        self._replies = list(replies)
        self._position = 0
        self.repeat_last = repeat_last
        self.requests: list[GatewayRequest] = []

    @property
    def calls(self) -> int:
        return len(self.requests)

    def _next_reply(self) -> Reply:
        if self._position < len(self._replies):
            reply = self._replies[self._position]
            self._position += 1
            return reply
        if self.repeat_last and self._replies:
            return self._replies[-1]
        raise GatewayFailure(f"Scripted gateway exhausted after {len(self._replies)} replies")

    async def invoke(self, messages: Sequence[Message], tools: Sequence[ToolSpec]) -> Message:
        self.requests.append(GatewayRequest(messages=list(messages), tools=list(tools)))
        reply = self._next_reply()
        if callable(reply):
            reply = reply(messages, tools)
        if not isinstance(reply, Message) or not reply.is_ai:
            raise GatewayFailure(f"Scripted reply is not an ai message: {reply!r}")
        return reply
