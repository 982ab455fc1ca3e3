from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict


class ChatCompletionRequest(BaseModel):
    """Near chat-completion body; forwarded with only the fields the caller sent."""

    model: Any = None
    messages: Any = None

    model_config = ConfigDict(extra="allow")

    def to_forward_body(self) -> dict[str, Any]:
        return self.model_dump(exclude_unset=True)
