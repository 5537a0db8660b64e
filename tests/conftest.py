"""
Pytest configuration and shared fixtures.
"""

import pytest

from agentgraph.tools import ARITHMETIC_TOOLS, ToolRegistry


@pytest.fixture
def registry() -> ToolRegistry:
    """A fresh registry holding add, multiply and divide."""
    return ToolRegistry(ARITHMETIC_TOOLS)
