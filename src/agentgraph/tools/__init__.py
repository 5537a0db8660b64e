# __init__.py - Tools package
from .base import tool, ToolSpec, to_content
from .registry import ToolRegistry
from .arithmetic import add, multiply, divide, ARITHMETIC_TOOLS

__all__ = [
    "tool", "ToolSpec", "to_content", "ToolRegistry",
    "add", "multiply", "divide", "ARITHMETIC_TOOLS",
]
