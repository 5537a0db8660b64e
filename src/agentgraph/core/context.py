# context.py - System Directive
#
# Renders the fixed system directive that the reasoning node puts in
# front of every model call. The directive is rendered once, at
# construction, from the internal Jinja2 template.

from pathlib import Path
from typing import Optional, Sequence

from jinja2 import Template

from ..tools.base import ToolSpec
from .models import ExecutionState, Message

DEFAULT_INSTRUCTIONS = (
    "You are a helpful assistant tasked with performing arithmetic on a set of inputs."
)


class SystemDirective:
    """
    Fixed system message for the reasoning node.

    Args:
        instructions: instruction text
        instructions_file: path to a file with the instructions; takes
            priority over the string
        tools: when given, the rendered directive also lists these tools
    """

    def __init__(
        self,
        instructions: str = DEFAULT_INSTRUCTIONS,
        instructions_file: Optional[str] = None,
        tools: Optional[Sequence[ToolSpec]] = None,
    ):
        if instructions_file:
            path = Path(instructions_file)
            if not path.exists():
                raise FileNotFoundError(f"Instructions file not found: {instructions_file}")
            instructions = path.read_text(encoding="utf-8")

        template_path = Path(__file__).parent.parent / "prompts" / "templates" / "system.j2"
        template = Template(template_path.read_text(encoding="utf-8"))
        self.text = template.render(instructions=instructions.strip(), tools=list(tools or []))
        self.message = Message.system(self.text)

    def build_messages(self, state: ExecutionState) -> list[Message]:
        """[system directive] + the state's transcript."""
        return [self.message, *state.messages]
