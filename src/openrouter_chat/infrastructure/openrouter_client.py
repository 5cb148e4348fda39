import json
import logging
from typing import Protocol

import requests

from openrouter_chat.app.config import ChatSettings
from openrouter_chat.infrastructure.data_models import ChatRequest, TransportResponse
from openrouter_chat.infrastructure.exceptions import NetworkError, SerializationError
from openrouter_chat.services.requests_helpers import session_with_bearer


class Transport(Protocol):
    def post(self, request: ChatRequest) -> TransportResponse: ...


def serialize_request(request: ChatRequest) -> bytes:
    """
    Encode a chat request as a UTF-8 JSON body.

    Raises:
        SerializationError: If the request cannot be encoded
    """
    try:
        return json.dumps(request.to_payload(), ensure_ascii=False).encode("utf-8")
    except (TypeError, ValueError) as e:
        raise SerializationError(f"error marshaling request body: {e}") from e


class OpenRouterChat:
    """
    A client for the OpenRouter chat-completions endpoint.

    Performs exactly one POST per call. There is no retry and the HTTP status
    is not inspected here: the caller gets the status and the raw body back.
    """

    def __init__(self, settings: ChatSettings, logger: logging.Logger | None = None) -> None:
        """
        Initialize the OpenRouter chat client.

        Args:
            settings: Client settings (the API key is taken from here, never from
                the environment)
            logger: Logger for request metadata; defaults to the module logger
        """
        self.settings = settings
        self.logger = logger or logging.getLogger(__name__)

    def post(self, request: ChatRequest) -> TransportResponse:
        """
        Send the request and return the status code and full response body.

        Args:
            request: The chat request to send

        Returns:
            TransportResponse with the status code, reason and body bytes

        Raises:
            SerializationError: If the request cannot be encoded
            NetworkError: If the connection fails or the body cannot be read
        """
        body = serialize_request(request)
        url = self.settings.api_url

        self.logger.info(f"POST {url} model={request.model} ({len(body)} bytes)")
        try:
            with session_with_bearer(self.settings) as session:
                with session.post(url, data=body, timeout=self.settings.timeout) as resp:
                    content = resp.content
                    status_code = resp.status_code
                    reason = resp.reason or ""
        except requests.RequestException as e:
            raise NetworkError(f"error making request: {e}") from e

        self.logger.info(f"Response status={status_code} ({len(content)} bytes)")
        return TransportResponse(status_code=status_code, body=content, reason=reason)
