# adapters.py - Model Gateway Adapters
#
# Concrete ModelGateway for OpenAI-compatible chat completion APIs
# (OpenAI, Together AI, Groq, OpenRouter, local vLLM, ...).
#
# Uses httpx for async HTTP calls. No SDK dependencies.

import json
import logging
from typing import Any, Optional, Sequence

import httpx
from pydantic import ValidationError

from ..core.models import Message, Role, ToolCall
from ..errors import GatewayFailure
from ..tools.base import ToolSpec
from .base import LLMConfig

logger = logging.getLogger(__name__)

_ROLE_MAP = {
    Role.SYSTEM: "system",
    Role.HUMAN: "user",
    Role.AI: "assistant",
    Role.TOOL: "tool",
}


class OpenAIAdapter:
    """
    Gateway for OpenAI-compatible chat completion endpoints.

    Usage:
        gateway = OpenAIAdapter(LLMConfig(
            model="gpt-4o-mini",
            api_key="sk-...",
        ))
        reply = await gateway.invoke(messages, registry.list_tools())

    Args:
        config: model, credentials and request options
        transport: optional httpx transport (tests pass httpx.MockTransport)
    """

    def __init__(self, config: LLMConfig, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.config = config
        self.base_url = (config.base_url or "https://api.openai.com/v1").rstrip("/")
        self._transport = transport

    # --- Request side ---
    def _to_openai_message(self, msg: Message) -> dict[str, Any]:
        out: dict[str, Any] = {"role": _ROLE_MAP[msg.role], "content": msg.content}
        if msg.role == Role.AI and msg.tool_calls:
            out["content"] = msg.content or None
            out["tool_calls"] = [
                {
                    "id": call.id,
                    "type": "function",
                    "function": {"name": call.name, "arguments": json.dumps(call.args)},
                }
                for call in msg.tool_calls
            ]
        elif msg.role == Role.TOOL:
            out["tool_call_id"] = msg.tool_call_id
        return out

    def _build_payload(self, messages: Sequence[Message], tools: Sequence[ToolSpec]) -> dict:
        payload: dict[str, Any] = {
            "model": self.config.model,
            "messages": [self._to_openai_message(m) for m in messages],
            "temperature": self.config.temperature,
            "max_tokens": self.config.max_tokens,
            **self.config.extra,
        }
        if tools:
            payload["tools"] = [
                {"type": "function", "function": spec.to_schema()} for spec in tools
            ]
        return payload

    # --- Response side ---
    def _parse_tool_call(self, raw: Any) -> ToolCall:
        function = raw.get("function") if isinstance(raw, dict) else None
        if not isinstance(function, dict):
            raise GatewayFailure(f"Malformed tool call: {raw!r}")
        name = function.get("name")
        if not name or not isinstance(name, str):
            raise GatewayFailure(f"Tool call without a function name: {raw!r}")

        arguments = function.get("arguments") or "{}"
        if isinstance(arguments, str):
            try:
                arguments = json.loads(arguments)
            except json.JSONDecodeError as e:
                raise GatewayFailure(
                    f"Tool call '{name}' has non-JSON arguments: {arguments!r}", cause=e
                ) from e
        if not isinstance(arguments, dict):
            raise GatewayFailure(f"Tool call '{name}' arguments must be an object")

        fields: dict[str, Any] = {"name": name, "args": arguments}
        if raw.get("id"):
            fields["id"] = raw["id"]
        try:
            return ToolCall(**fields)
        except ValidationError as e:
            raise GatewayFailure(f"Malformed tool call '{name}': {e}", cause=e) from e

    def _parse_response(self, data: Any) -> Message:
        try:
            message = data["choices"][0]["message"]
        except (KeyError, IndexError, TypeError) as e:
            raise GatewayFailure("Malformed response: no choices[0].message", cause=e) from e
        if not isinstance(message, dict):
            raise GatewayFailure(f"Malformed response: message is {type(message).__name__}")

        raw_calls = message.get("tool_calls") or []
        if not isinstance(raw_calls, list):
            raise GatewayFailure("Malformed response: tool_calls must be a list")
        content = message.get("content") or ""
        if not isinstance(content, str):
            raise GatewayFailure(
                f"Malformed response: content must be text, got {type(content).__name__}"
            )

        tool_calls = [self._parse_tool_call(raw) for raw in raw_calls]
        return Message.ai(content=content, tool_calls=tool_calls)

    async def invoke(self, messages: Sequence[Message], tools: Sequence[ToolSpec]) -> Message:
        payload = self._build_payload(messages, tools)
        logger.debug(
            "POST %s/chat/completions model=%s messages=%d tools=%d",
            self.base_url, self.config.model, len(messages), len(tools),
        )

        try:
            async with httpx.AsyncClient(
                timeout=self.config.timeout, transport=self._transport
            ) as client:
                response = await client.post(
                    f"{self.base_url}/chat/completions",
                    headers={
                        "Authorization": f"Bearer {self.config.api_key}",
                        "Content-Type": "application/json",
                    },
                    json=payload,
                )
        except httpx.TimeoutException as e:
            raise GatewayFailure(f"Request timed out after {self.config.timeout}s", cause=e) from e
        except httpx.HTTPError as e:
            raise GatewayFailure(f"Transport error: {e}", cause=e) from e

        if response.status_code == 429:
            raise GatewayFailure("Rate limited by model endpoint", status_code=429)
        if response.status_code != 200:
            raise GatewayFailure(
                f"Model API error {response.status_code}: {response.text}",
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise GatewayFailure("Response body is not JSON", cause=e) from e
        return self._parse_response(data)
