import io

from rich.console import Console
from rich.markdown import Markdown

from openrouter_chat.app.config import DEFAULT_RENDER_WIDTH
from openrouter_chat.infrastructure.data_models import Message


def render_markdown(
    text: str, width: int = DEFAULT_RENDER_WIDTH, color: bool | None = None
) -> str:
    """
    Render markdown (headings, emphasis, lists, code) as terminal text.

    Args:
        text: Markdown source from the model.
        width: Column width to wrap at.
        color: Force ANSI styling on (True) or off (False). None lets rich decide
            from the environment (NO_COLOR, FORCE_COLOR).

    Returns:
        The rendered text with trailing padding and trailing blank lines removed,
        so plain text with no markup comes back unchanged apart from wrapping.
    """
    buffer = io.StringIO()
    console = Console(
        file=buffer,
        width=width,
        force_terminal=color,
        color_system="standard" if color else "auto",
        no_color=True if color is False else None,
        highlight=False,
        soft_wrap=False,
    )
    console.print(Markdown(text))

    lines = [line.rstrip() for line in buffer.getvalue().splitlines()]
    # Lists and code blocks render with a blank line above them
    while lines and not lines[0]:
        lines.pop(0)
    return "\n".join(lines).rstrip("\n")


def format_reply(
    message: Message, width: int = DEFAULT_RENDER_WIDTH, color: bool | None = None
) -> str:
    """Format a reply as "<role>:\\n\\n <rendered content>"."""
    return f"{message.role}:\n\n {render_markdown(message.content, width=width, color=color)}"
