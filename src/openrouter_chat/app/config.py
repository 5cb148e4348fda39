from dataclasses import dataclass, field
from pathlib import Path

from openrouter_chat.infrastructure.exceptions import ConfigurationError
from openrouter_chat.infrastructure.platform_manager import get_parameters, load_local_env

# Constants that don't change
DEFAULT_API_URL = "https://openrouter.ai/api/v1/chat/completions"
DEFAULT_MODEL = "anthropic/claude-3-haiku"
DEFAULT_SYSTEM_PROMPT = "You are a helpful assistant"
DEFAULT_RENDER_WIDTH = 120
DEFAULT_LOG_LEVEL = "WARNING"


@dataclass(frozen=True)
class ChatSettings:
    """Client configuration, built once at process start and passed by parameter."""

    # Credential
    api_key: str = field(repr=False)

    # Request settings
    api_url: str = DEFAULT_API_URL
    model: str = DEFAULT_MODEL
    system_prompt: str = DEFAULT_SYSTEM_PROMPT
    timeout: float | None = None

    # Optional OpenRouter attribution headers
    app_url: str | None = None
    app_title: str | None = None

    # Output settings
    render_width: int = DEFAULT_RENDER_WIDTH
    log_level: str = DEFAULT_LOG_LEVEL


def _parse_width(value: str | None) -> int:
    if not value:
        return DEFAULT_RENDER_WIDTH
    try:
        width = int(value)
    except ValueError as e:
        raise ConfigurationError(f"OPENROUTER_RENDER_WIDTH is not an integer: {value!r}") from e
    if width < 1:
        raise ConfigurationError(f"OPENROUTER_RENDER_WIDTH must be positive: {width}")
    return width


def _check_header_value(name: str, value: str | None) -> None:
    if not value:
        return
    try:
        value.encode("latin-1")
    except UnicodeEncodeError as e:
        raise ConfigurationError(
            f"{name.upper()} contains a character that cannot be sent in an HTTP header "
            f"(position {e.start})"
        ) from e


def load_settings(env_file: str | Path | None = None) -> ChatSettings:
    """
    Load settings from the environment, after seeding it from a local .env file.

    Raises:
        ConfigurationError: If API_KEY is unset or empty, or an override is invalid.
    """
    load_local_env(env_file)

    params = get_parameters(
        [
            "api_key",
            "openrouter_api_url",
            "openrouter_model",
            "openrouter_system_prompt",
            "openrouter_render_width",
            "openrouter_app_url",
            "openrouter_app_title",
            "log_level",
        ]
    )

    api_key = (params["api_key"] or "").strip()
    if not api_key:
        raise ConfigurationError("API_KEY is not set")

    # Header values must be latin-1 encodable
    for name in ("api_key", "openrouter_app_url", "openrouter_app_title"):
        _check_header_value(name, params[name])

    return ChatSettings(
        api_key=api_key,
        api_url=params["openrouter_api_url"] or DEFAULT_API_URL,
        model=params["openrouter_model"] or DEFAULT_MODEL,
        system_prompt=params["openrouter_system_prompt"] or DEFAULT_SYSTEM_PROMPT,
        app_url=params["openrouter_app_url"] or None,
        app_title=params["openrouter_app_title"] or None,
        render_width=_parse_width(params["openrouter_render_width"]),
        log_level=params["log_level"] or DEFAULT_LOG_LEVEL,
    )
