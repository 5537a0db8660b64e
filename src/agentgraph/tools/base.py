# base.py - Tool Definition System
#
# Provides:
#   - ToolSpec: uniform internal representation (name, description,
#     pydantic argument schema, callable)
#   - @tool decorator: wraps plain functions into ToolSpec
#   - to_content: converts a tool's return value into message content

import inspect
import json
from dataclasses import dataclass
from typing import Any, Callable, Optional

from pydantic import BaseModel, ValidationError, create_model

from ..errors import InvalidArguments, ToolExecutionFailure


def to_content(value: Any) -> str:
    """Convert a tool result into message content."""
    if isinstance(value, str):
        return value
    if isinstance(value, (dict, list)):
        return json.dumps(value, ensure_ascii=False, default=str)
    return str(value)


@dataclass
class ToolSpec:
    """
    A registered tool.

    args_schema is the structural contract for the tool's arguments; every
    call is validated against it before fn is invoked.
    """
    name: str
    description: str
    args_schema: type[BaseModel]
    fn: Callable[..., Any]
    is_async: bool = False

    def validate(self, args: dict[str, Any]) -> dict[str, Any]:
        """Validate raw arguments. Raises InvalidArguments on mismatch."""
        try:
            model = self.args_schema.model_validate(args)
        except ValidationError as e:
            details = "; ".join(
                f"{'.'.join(str(p) for p in err['loc']) or '(root)'}: {err['msg']}"
                for err in e.errors()
            )
            raise InvalidArguments(self.name, details, e) from e
        return {key: getattr(model, key) for key in type(model).model_fields}

    async def invoke(self, args: dict[str, Any]) -> Any:
        """Validate then call the tool. Failures inside fn become ToolExecutionFailure."""
        validated = self.validate(args)
        try:
            if self.is_async:
                return await self.fn(**validated)
            return self.fn(**validated)
        except Exception as e:
            raise ToolExecutionFailure(self.name, e) from e

    def to_schema(self) -> dict[str, Any]:
        """Tool declaration advertised to the model gateway."""
        parameters = self.args_schema.model_json_schema()
        parameters.pop("title", None)
        return {
            "name": self.name,
            "description": self.description,
            "parameters": parameters,
        }


def _build_args_schema(fn: Callable, name: str) -> type[BaseModel]:
    """Derive a pydantic model from a function's signature and type hints."""
    sig = inspect.signature(fn)
    fields: dict[str, Any] = {}
    for param_name, param in sig.parameters.items():
        if param_name == "self":
            continue
        if param.kind in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD):
            raise TypeError(f"Tool '{name}' cannot take *args or **kwargs.")
        annotation = Any if param.annotation is inspect.Parameter.empty else param.annotation
        default = ... if param.default is inspect.Parameter.empty else param.default
        fields[param_name] = (annotation, default)

    model_name = "".join(part.capitalize() for part in name.split("_")) + "Args"
    return create_model(model_name, **fields)


def tool(description: str = "", name: Optional[str] = None):
    """
    Decorator that wraps a plain function into a ToolSpec.

    Description priority:
        1. Explicit description parameter (if provided)
        2. Function's docstring
        3. Raises ValueError (no description = model can't understand the tool)

    Usage:
        @tool()
        def add(a: float, b: float) -> float:
            \"\"\"Add two numbers.\"\"\"
            return a + b
    """
    def decorator(fn: Callable) -> ToolSpec:
        tool_name = name or fn.__name__
        resolved = description or inspect.getdoc(fn) or ""
        if not resolved:
            raise ValueError(
                f"Tool '{tool_name}' has no description. "
                f"Add a docstring or pass description to @tool()."
            )

        return ToolSpec(
            name=tool_name,
            description=resolved,
            args_schema=_build_args_schema(fn, tool_name),
            fn=fn,
            is_async=inspect.iscoroutinefunction(fn),
        )

    return decorator
