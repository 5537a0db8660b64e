# hooks.py - Event Hook System
#
# Allows developers to plug into execution lifecycle events.
# Events: node_start, node_end, tool_called, error, complete
#
# Usage:
#   agent = Agent(gateway=..., tools=[...])
#
#   @agent.on("node_end")
#   async def log_step(data):
#       print(f"Step {data['step']} finished: {data['node']} -> {data['next']}")

import asyncio
import logging
from typing import Any, Callable, Coroutine

logger = logging.getLogger(__name__)

# Type alias for hook callbacks
HookCallback = Callable[[dict[str, Any]], Coroutine[Any, Any, None]]


class HookManager:
    """
    Event system for execution lifecycle hooks.

    Supported events:
        - node_start:   Before a node runs
        - node_end:     After its update is merged and the next node resolved
        - tool_called:  After each tool call (success or error)
        - error:        When a run aborts with an exception
        - complete:     When the run reaches the terminal node
    """

    VALID_EVENTS = {"node_start", "node_end", "tool_called", "error", "complete"}

    def __init__(self):
        self._hooks: dict[str, list[HookCallback]] = {
            event: [] for event in self.VALID_EVENTS
        }

    def on(self, event: str) -> Callable:
        """
        Decorator to register an event hook.

        Usage:
            @hooks.on("node_end")
            async def my_handler(data):
                print(data)
        """
        def decorator(fn: HookCallback) -> HookCallback:
            self.register(event, fn)
            return fn

        return decorator

    def register(self, event: str, callback: HookCallback) -> None:
        """Register a hook callback programmatically."""
        if event not in self.VALID_EVENTS:
            raise ValueError(
                f"Unknown event '{event}'. "
                f"Valid events: {', '.join(sorted(self.VALID_EVENTS))}"
            )
        self._hooks[event].append(callback)

    async def emit(self, event: str, data: dict[str, Any]) -> None:
        """
        Emit an event, calling all registered hooks.
        Hooks are called concurrently. Errors in hooks are logged
        and do NOT crash the execution.
        """
        callbacks = self._hooks.get(event)
        if not callbacks:
            return

        results = await asyncio.gather(
            *(cb(data) for cb in callbacks),
            return_exceptions=True
        )

        for result in results:
            if isinstance(result, Exception):
                logger.warning(
                    "Hook error on '%s': %s: %s", event, type(result).__name__, result
                )
