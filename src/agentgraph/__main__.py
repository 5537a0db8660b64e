# __main__.py - Console entry point
#
#   python -m agentgraph "Add 3 and 4."
#
# Runs the arithmetic agent against the OpenAI-compatible endpoint
# configured through the environment (see agentgraph.config) and prints
# the transcript.

import argparse
import asyncio
import sys

from pydantic import ValidationError

from .agent import Agent
from .config import configure_logging, get_settings
from .errors import AgentGraphError
from .llm.adapters import OpenAIAdapter
from .llm.base import LLMConfig
from .tools.arithmetic import ARITHMETIC_TOOLS


def _positive_int(raw: str) -> int:
    try:
        value = int(raw)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an integer: {raw!r}") from None
    if value < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {value}")
    return value


def _parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="agentgraph", description="Run the arithmetic tool-calling agent."
    )
    parser.add_argument("request", nargs="?", default="Add 3 and 4.")
    parser.add_argument("--max-steps", type=_positive_int, default=None,
                        help="bound on node executions (default: unbounded)")
    return parser.parse_args(argv)


async def _main(argv=None) -> int:
    args = _parse_args(argv)
    try:
        settings = get_settings()
    except ValidationError as e:
        print(f"error: invalid settings: {e}", file=sys.stderr)
        return 1
    configure_logging(settings.log_level)

    agent = Agent(
        gateway=OpenAIAdapter(LLMConfig.from_settings(settings)),
        tools=ARITHMETIC_TOOLS,
        max_steps=args.max_steps if args.max_steps is not None else settings.max_steps,
    )

    try:
        result = await agent.run(args.request)
    except AgentGraphError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    for message in result.messages:
        print(f"[{message.role.value}]: {message.content}")
    if not result.success:
        print(f"stopped: {result.reason}", file=sys.stderr)
        return 2
    return 0


def main(argv=None) -> int:
    return asyncio.run(_main(argv))


if __name__ == "__main__":
    sys.exit(main())
