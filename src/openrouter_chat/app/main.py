import argparse
import logging
import sys
from dataclasses import replace
from typing import TextIO

from openrouter_chat.app.config import ChatSettings, load_settings
from openrouter_chat.infrastructure.exceptions import ChatClientError, InputError
from openrouter_chat.infrastructure.openrouter_client import OpenRouterChat, Transport
from openrouter_chat.infrastructure.platform_manager import create_logger
from openrouter_chat.services.llm_service import fetch_reply
from openrouter_chat.services.renderer_service import format_reply

PROMPT_LABEL = "User: "


def read_prompt(stdin: TextIO) -> str:
    """
    Read one line from stdin and return it without its line terminator.

    Raises:
        InputError: If stdin cannot be read or is at end of stream.
    """
    try:
        line = stdin.readline()
    except (OSError, UnicodeDecodeError) as e:
        raise InputError(f"error reading input: {e}") from e
    if not line:
        raise InputError("EOF")
    return line.rstrip("\r\n")


def chat(
    settings: ChatSettings,
    transport: Transport,
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
    logger: logging.Logger | None = None,
) -> None:
    """Run one prompt/response cycle, printing any error instead of raising it."""
    if stdin is None:
        stdin = sys.stdin
    if stdout is None:
        stdout = sys.stdout

    stdout.write(PROMPT_LABEL)
    stdout.flush()

    try:
        prompt = read_prompt(stdin)
        reply = fetch_reply(prompt, settings, transport, logger=logger)
    except ChatClientError as e:
        if logger is not None:
            logger.info(f"Request failed with {type(e).__name__}: {e}")
        print(e, file=stdout)
        return

    color = True if stdout.isatty() else None
    print(format_reply(reply, width=settings.render_width, color=color), file=stdout)


def _positive_int(value: str) -> int:
    width = int(value)
    if width < 1:
        raise argparse.ArgumentTypeError(f"must be positive: {width}")
    return width


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Send one line from stdin to an OpenRouter model and print the reply"
    )
    parser.add_argument("--model", help="Model identifier (default: OPENROUTER_MODEL or built-in)")
    parser.add_argument("--system-prompt", help="System instruction sent before the prompt")
    parser.add_argument("--width", type=_positive_int, help="Column width for rendered output")
    parser.add_argument("--env-file", help="Path to a .env file (default: ./.env)")
    parser.add_argument("--log-level", help="Logging level (default: LOG_LEVEL or WARNING)")
    parser.add_argument("--logs-dir", help="Also write logs to a file in this directory")
    return parser.parse_args(argv)


def apply_overrides(settings: ChatSettings, args: argparse.Namespace) -> ChatSettings:
    """Return settings with any command-line overrides applied."""
    overrides = {
        "model": args.model,
        "system_prompt": args.system_prompt,
        "render_width": args.width,
        "log_level": args.log_level,
    }
    return replace(settings, **{k: v for k, v in overrides.items() if v is not None})


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)

    try:
        settings = apply_overrides(load_settings(args.env_file), args)
    except ChatClientError as e:
        print(e)
        return

    logger = create_logger(log_level=settings.log_level, logs_dir=args.logs_dir)
    logger.info(f"Starting chat with model {settings.model}")

    chat(settings, OpenRouterChat(settings, logger=logger), logger=logger)
