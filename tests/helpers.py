"""
Message builders shared by the test modules.
"""

from agentgraph.core.models import Message, ToolCall


def ai_calls(*calls: tuple) -> Message:
    """Build an ai message from (name, call_id, args) tuples."""
    return Message.ai(tool_calls=[
        ToolCall(name=name, id=call_id, args=args) for name, call_id, args in calls
    ])
