import json
import os

import pytest

from openrouter_chat.app.config import ChatSettings
from openrouter_chat.infrastructure.data_models import ChatRequest, TransportResponse

ENV_VARS = [
    "API_KEY",
    "OPENROUTER_API_URL",
    "OPENROUTER_MODEL",
    "OPENROUTER_SYSTEM_PROMPT",
    "OPENROUTER_RENDER_WIDTH",
    "OPENROUTER_APP_URL",
    "OPENROUTER_APP_TITLE",
    "LOG_LEVEL",
    "FORCE_COLOR",
    "NO_COLOR",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """Run each test in an empty directory with none of our variables set."""
    saved = os.environ.copy()
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    yield
    # load_dotenv writes to os.environ directly, so restore it wholesale
    os.environ.clear()
    os.environ.update(saved)


@pytest.fixture
def settings():
    return ChatSettings(api_key="test-key")


def completion_body(content="4", role="assistant"):
    return json.dumps({"choices": [{"message": {"role": role, "content": content}}]}).encode()


class StubTransport:
    """Transport that records requests and returns a fixed response."""

    def __init__(self, body=None, status_code=200, reason="OK"):
        self.body = completion_body() if body is None else body
        self.status_code = status_code
        self.reason = reason
        self.requests: list[ChatRequest] = []

    def post(self, request):
        self.requests.append(request)
        return TransportResponse(status_code=self.status_code, body=self.body, reason=self.reason)


@pytest.fixture
def stub_transport():
    return StubTransport()
