# arithmetic.py - Bundled arithmetic tools
#
# The three tools of the reference arithmetic agent. Integer inputs stay
# integers, so add(3, 4) reports "7". divide raises ZeroDivisionError for
# b == 0; the tool node records it as an error tool message.

from typing import Union

from .base import tool

Number = Union[int, float]


def _plain(value: float) -> Number:
    """6 / 3 reports 2, not 2.0."""
    return int(value) if value.is_integer() else value


@tool("Add two numbers")
def add(a: Number, b: Number) -> Number:
    return a + b


@tool("Multiply two numbers")
def multiply(a: Number, b: Number) -> Number:
    return a * b


@tool("Divide two numbers")
def divide(a: Number, b: Number) -> Number:
    return _plain(a / b)


ARITHMETIC_TOOLS = [add, multiply, divide]
