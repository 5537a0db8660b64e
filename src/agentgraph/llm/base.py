# base.py - Model Gateway Interface
#
# Defines the protocol (interface) that any model gateway must implement.
# agentgraph is provider-agnostic: anything that turns a message history
# plus tool declarations into one ai message will do.

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol, Sequence, runtime_checkable

from ..core.models import Message

if TYPE_CHECKING:
    from ..config import Settings
    from ..tools.base import ToolSpec


@runtime_checkable
class ModelGateway(Protocol):
    """
    Protocol that any gateway must implement.

    The entire contract is ONE method:
        messages + tools in → ai message out

    Usage:
        class MyGateway:
            async def invoke(self, messages, tools) -> Message:
                # Call your model
                return Message.ai("hello")

        agent = Agent(gateway=MyGateway(), tools=[...])
    """
    async def invoke(self, messages: Sequence[Message], tools: Sequence["ToolSpec"]) -> Message:
        """
        Send the history to the model and return its reply.

        Args:
            messages: full history, system directive first
            tools: tools the model may call

        Returns:
            An ai-role Message, with tool_calls when the model wants tools

        Raises:
            GatewayFailure: on transport errors or malformed responses
        """
        ...


@dataclass
class LLMConfig:
    """Configuration for gateway adapters."""
    model: str
    api_key: str = ""
    base_url: str = ""
    temperature: float = 0.0
    max_tokens: int = 4096
    timeout: float = 60.0
    extra: dict = field(default_factory=dict)

    @classmethod
    def from_settings(cls, settings: "Settings") -> "LLMConfig":
        return cls(
            model=settings.model,
            api_key=settings.openai_api_key,
            base_url=settings.openai_base_url,
            temperature=settings.temperature,
            timeout=settings.timeout,
        )
