"""Translation between Gemini ``generateContent`` payloads and chat completions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from app.core.types import (
    DEFAULT_MAX_TOKENS,
    DEFAULT_TEMPERATURE,
    DEFAULT_TOP_P,
    ChatCompletionPayload,
    ChatMessage,
)

from .schemas import Content, GenerateContentRequest, GenerationConfig, Part, SystemInstruction

IMAGE_PLACEHOLDER = "[Image data]"
FILE_PLACEHOLDER = "[File data]"

TRANSLATION_FAILED_ERROR = {
    "error": {
        "code": 500,
        "message": "Failed to translate response",
        "status": "INTERNAL_ERROR",
    }
}


@dataclass(frozen=True, slots=True)
class ChatCompletionShape:
    body: dict[str, Any]
    choice: dict[str, Any]


@dataclass(frozen=True, slots=True)
class RawTextShape:
    text: str


@dataclass(frozen=True, slots=True)
class UnknownShape:
    body: Any


ResponseShape = ChatCompletionShape | RawTextShape | UnknownShape


def translate_request(request: GenerateContentRequest) -> ChatCompletionPayload:
    messages: list[ChatMessage] = []

    if request.system_instruction:
        messages.append(
            ChatMessage(
                role="system",
                content=_system_text(request.system_instruction),
            )
        )

    for content in request.contents or []:
        text = _content_text(content)
        if not text.strip():
            continue
        role = "user" if content.role == "user" else "assistant"
        messages.append(ChatMessage(role=role, content=text))

    config = request.generation_config or GenerationConfig()

    return ChatCompletionPayload(
        messages=messages,
        max_tokens=_default(config.max_output_tokens, DEFAULT_MAX_TOKENS),
        temperature=_default(config.temperature, DEFAULT_TEMPERATURE),
        top_p=_default(config.top_p, DEFAULT_TOP_P),
        stream=False,
    )


def classify_response(body: Any) -> ResponseShape:
    if isinstance(body, dict):
        choices = body.get("choices")
        first = choices[0] if isinstance(choices, list) and choices else None
        # An empty object still counts as a choice; null, false, 0 and "" do not.
        if isinstance(first, (dict, list)) or first:
            return ChatCompletionShape(body=body, choice=_mapping(first))

    if isinstance(body, str):
        return RawTextShape(text=body)

    return UnknownShape(body=body)


def translate_response(body: Any) -> dict[str, Any]:
    match classify_response(body):
        case ChatCompletionShape(body=completion, choice=choice):
            message = _mapping(choice.get("message"))
            delta = _mapping(choice.get("delta"))
            text = message.get("content") or delta.get("content") or ""
            finish_reason = "STOP" if choice.get("finish_reason") == "stop" else "OTHER"
            usage = _mapping(completion.get("usage"))

            return {
                "candidates": [_candidate(text, finish_reason)],
                "usageMetadata": {
                    "promptTokenCount": usage.get("prompt_tokens") or 0,
                    "candidatesTokenCount": usage.get("completion_tokens") or 0,
                    "totalTokenCount": usage.get("total_tokens") or 0,
                },
            }

        case RawTextShape(text=text):
            return {"candidates": [_candidate(text, "STOP")]}

        case UnknownShape():
            return {"error": dict(TRANSLATION_FAILED_ERROR["error"])}


def translate_stream_chunk(chunk: Any) -> dict[str, Any] | None:
    """Translate one streamed chat-completion chunk.

    Returns ``None`` when the chunk carries no text; the caller skips it.
    """

    if not isinstance(chunk, dict):
        return None

    choices = chunk.get("choices")
    if not isinstance(choices, list) or not choices or not isinstance(choices[0], dict):
        return None

    text = _mapping(choices[0].get("delta")).get("content")
    if not text:
        return None

    return {
        "candidates": [
            {
                "content": {
                    "parts": [{"text": text}],
                    "role": "model",
                },
                "index": 0,
            }
        ]
    }


def is_terminal_chunk(chunk: Any) -> bool:
    if not isinstance(chunk, dict):
        return False

    choices = chunk.get("choices")
    if not isinstance(choices, list) or not choices or not isinstance(choices[0], dict):
        return False

    return choices[0].get("finish_reason") is not None


def _candidate(text: str, finish_reason: str) -> dict[str, Any]:
    return {
        "content": {
            "parts": [{"text": text}],
            "role": "model",
        },
        "finishReason": finish_reason,
        "index": 0,
        "safetyRatings": [],
    }


def _system_text(instruction: str | SystemInstruction) -> str:
    if isinstance(instruction, str):
        return instruction

    return "".join(_text_or_empty(part.text) for part in instruction.parts or [])


def _content_text(content: Content) -> str:
    return "".join(_part_text(part) for part in content.parts or [])


def _part_text(part: Part) -> str:
    if part.text:
        return str(part.text)
    if part.inline_data:
        return IMAGE_PLACEHOLDER
    if part.file_data:
        return FILE_PLACEHOLDER
    return ""


def _mapping(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _text_or_empty(value: Any) -> str:
    return "" if value is None else str(value)


def _default(value: Any, fallback: Any) -> Any:
    return fallback if value is None else value
