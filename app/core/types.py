from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any

DEFAULT_MAX_TOKENS = 4096
DEFAULT_TEMPERATURE = 0.7
DEFAULT_TOP_P = 1.0


@dataclass(slots=True)
class ChatMessage:
    role: str
    content: str


@dataclass(slots=True)
class ChatCompletionPayload:
    messages: list[ChatMessage] = field(default_factory=list)
    max_tokens: Any = DEFAULT_MAX_TOKENS
    temperature: Any = DEFAULT_TEMPERATURE
    top_p: Any = DEFAULT_TOP_P
    stream: bool = False
    model: str | None = None

    def to_payload(self) -> dict[str, Any]:
        payload = asdict(self)
        if payload["model"] is None:
            del payload["model"]
        return payload
