# __init__.py - Observe package
from .trace import StepTrace, ExecutionTrace
from .hooks import HookManager

__all__ = ["StepTrace", "ExecutionTrace", "HookManager"]
