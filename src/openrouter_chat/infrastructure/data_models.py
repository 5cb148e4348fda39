"""
Shared data models.
"""

from dataclasses import asdict, dataclass, field
from typing import Any

ROLE_SYSTEM = "system"
ROLE_USER = "user"
ROLE_ASSISTANT = "assistant"


@dataclass(frozen=True)
class Message:
    role: str  # "system" | "user" | "assistant"
    content: str


@dataclass(frozen=True)
class ChatRequest:
    model: str
    messages: tuple[Message, ...]

    def to_payload(self) -> dict[str, Any]:
        """Return the JSON-ready request body."""
        return {
            "model": self.model,
            "messages": [asdict(m) for m in self.messages],
        }


@dataclass(frozen=True)
class Choice:
    message: Message


@dataclass(frozen=True)
class ChatResponse:
    choices: tuple[Choice, ...]
    model: str | None = None
    usage: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class TransportResponse:
    status_code: int
    body: bytes
    reason: str = ""

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300
