import json
import logging
from typing import Any, cast

from openrouter_chat.app.config import DEFAULT_MODEL, DEFAULT_SYSTEM_PROMPT, ChatSettings
from openrouter_chat.app.logging import log_chat_response
from openrouter_chat.infrastructure.data_models import (
    ROLE_SYSTEM,
    ROLE_USER,
    ChatRequest,
    ChatResponse,
    Choice,
    Message,
    TransportResponse,
)
from openrouter_chat.infrastructure.exceptions import ApiError, EmptyResultError, ParseError
from openrouter_chat.infrastructure.openrouter_client import Transport


def build_chat_request(
    prompt: str, model: str = DEFAULT_MODEL, system_prompt: str = DEFAULT_SYSTEM_PROMPT
) -> ChatRequest:
    """Build a single-turn request: the system instruction, then the prompt as-is."""
    return ChatRequest(
        model=model,
        messages=(
            Message(role=ROLE_SYSTEM, content=system_prompt),
            Message(role=ROLE_USER, content=prompt),
        ),
    )


def _load_json(body: bytes) -> Any:
    try:
        return json.loads(body.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise ParseError(f"error unmarshaling response: {e}") from e


def _error_from_envelope(data: Any) -> tuple[str, str | None] | None:
    """
    Return (message, code) from an OpenRouter error envelope, if there is one.

    The envelope looks like {"error": {"code": 401, "message": "..."}}.
    """
    if not isinstance(data, dict):
        return None
    error = cast(dict[str, Any], data).get("error")
    if isinstance(error, dict):
        message = error.get("message") or "unknown API error"
        code = error.get("code")
        return str(message), None if code is None else str(code)
    if isinstance(error, str) and error:
        return error, None
    return None


def _parse_message(raw: Any) -> Message:
    if not isinstance(raw, dict):
        raise ParseError("error unmarshaling response: choice has no message object")
    raw_message = cast(dict[str, Any], raw)
    role = raw_message.get("role")
    content = raw_message.get("content")
    if not isinstance(role, str):
        raise ParseError("error unmarshaling response: message role is not a string")
    if content is None:
        content = ""
    if not isinstance(content, str):
        raise ParseError("error unmarshaling response: message content is not a string")
    return Message(role=role, content=content)


def decode_chat_response(body: bytes) -> ChatResponse:
    """
    Deserialize a chat-completions response body.

    Raises:
        ParseError: If the body is not JSON of the expected shape
        ApiError: If the body is an error envelope instead of a completion
    """
    data = _load_json(body)
    if not isinstance(data, dict):
        raise ParseError("error unmarshaling response: expected a JSON object")
    data = cast(dict[str, Any], data)

    # A body without "choices" is a shape error, not an empty result
    if "choices" not in data:
        envelope = _error_from_envelope(data)
        if envelope is not None:
            message, code = envelope
            raise ApiError(f"API error: {message}", code=code)
        raise ParseError("error unmarshaling response: missing 'choices'")

    raw_choices = data["choices"]
    if not isinstance(raw_choices, list):
        raise ParseError("error unmarshaling response: 'choices' is not a list")

    choices = []
    for raw_choice in cast(list[Any], raw_choices):
        if not isinstance(raw_choice, dict):
            raise ParseError("error unmarshaling response: choice is not an object")
        choices.append(Choice(message=_parse_message(raw_choice.get("message"))))

    usage = data.get("usage")
    model = data.get("model")
    return ChatResponse(
        choices=tuple(choices),
        model=model if isinstance(model, str) else None,
        usage=cast(dict[str, Any], usage) if isinstance(usage, dict) else {},
    )


def parse_chat_response(body: bytes) -> Message:
    """
    Return the first completion's message from a response body.

    Raises:
        ParseError: If the body is malformed
        EmptyResultError: If the response carries no choices
    """
    return _first_message(decode_chat_response(body))


def _first_message(response: ChatResponse) -> Message:
    if not response.choices:
        raise EmptyResultError("no choices in API response")
    return response.choices[0].message


def check_status(response: TransportResponse) -> None:
    """
    Raise ApiError for a non-2xx response.

    The API's own error message is used when the body carries one, otherwise the
    HTTP reason phrase.
    """
    if response.ok:
        return

    message: str | None = None
    code: str | None = None
    try:
        envelope = _error_from_envelope(json.loads(response.body.decode("utf-8")))
    except (UnicodeDecodeError, json.JSONDecodeError):
        envelope = None
    if envelope is not None:
        message, code = envelope

    detail = message or response.reason or "request failed"
    raise ApiError(
        f"API error (HTTP {response.status_code}): {detail}",
        status_code=response.status_code,
        code=code,
    )


def fetch_reply(
    prompt: str,
    settings: ChatSettings,
    transport: Transport,
    logger: logging.Logger | None = None,
) -> Message:
    """Build the request, send it once, and return the model's reply."""
    request = build_chat_request(prompt, model=settings.model, system_prompt=settings.system_prompt)
    response = transport.post(request)
    check_status(response)

    chat_response = decode_chat_response(response.body)
    if logger is not None:
        log_chat_response(chat_response, logger)
    return _first_message(chat_response)
