# registry.py - Tool Registry
#
# Collects tools, rejects duplicate names, and resolves tool calls
# to their ToolSpec. Populated at setup time, read-only while running.

from typing import Iterable, Optional

from .base import ToolSpec


class ToolRegistry:
    """
    Central registry for all tools available to the agent.

    Usage:
        registry = ToolRegistry()
        registry.register(add)            # ToolSpec from @tool
        registry.register_many([multiply, divide])

        spec = registry.lookup("add")     # None if unknown
        specs = registry.list_tools()     # registration order
    """

    def __init__(self, tools: Optional[Iterable[ToolSpec]] = None):
        self._tools: dict[str, ToolSpec] = {}
        if tools:
            self.register_many(tools)

    def register(self, spec: ToolSpec) -> None:
        """Register a tool. Raises if name already taken."""
        if not isinstance(spec, ToolSpec):
            raise TypeError(
                f"Expected ToolSpec, got {type(spec).__name__}. "
                f"Did you forget to use the @tool decorator?"
            )
        if spec.name in self._tools:
            raise ValueError(
                f"Tool '{spec.name}' is already registered. "
                f"Each tool must have a unique name."
            )
        self._tools[spec.name] = spec

    def register_many(self, tools: Iterable[ToolSpec]) -> None:
        for t in tools:
            self.register(t)

    def lookup(self, name: str) -> Optional[ToolSpec]:
        """Get a tool by name. Returns None if not found."""
        return self._tools.get(name)

    def list_tools(self) -> list[ToolSpec]:
        """All registered tools, in registration order."""
        return list(self._tools.values())

    def names(self) -> list[str]:
        return list(self._tools.keys())

    def __contains__(self, name: str) -> bool:
        return name in self._tools

    def __len__(self) -> int:
        return len(self._tools)
