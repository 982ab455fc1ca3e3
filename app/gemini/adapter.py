from __future__ import annotations

import json
import logging
from typing import Any, AsyncIterator

import httpx

from app.config import RelayConfig
from app.core.relay import open_chat_stream, post_chat
from app.core.types import ChatCompletionPayload

from .errors import map_gemini_error
from .schemas import GenerateContentRequest
from .translator import (
    is_terminal_chunk,
    translate_request,
    translate_response,
    translate_stream_chunk,
)

logger = logging.getLogger(__name__)


def prepare_generate_request(
    model: str,
    request: GenerateContentRequest,
    config: RelayConfig,
) -> ChatCompletionPayload:
    logger.debug("Received request for model: %s", model)

    payload = translate_request(request)
    # The path model is never forwarded; the provider's configured model wins.
    payload.model = config.provider.model
    return payload


async def create_generate_content(
    model: str,
    request: GenerateContentRequest,
    config: RelayConfig,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> dict[str, Any]:
    payload = prepare_generate_request(model, request, config)

    try:
        reply = await post_chat(config, payload.to_payload(), transport=transport)
    except Exception as exc:
        raise map_gemini_error(exc) from exc

    try:
        body: Any = reply.json()
    except ValueError:
        body = reply.text

    translated = translate_response(body)
    if config.debug:
        logger.debug("Gemini response: %s", json.dumps(translated, ensure_ascii=False))
    return translated


async def create_generate_content_stream(
    model: str,
    request: GenerateContentRequest,
    config: RelayConfig,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> AsyncIterator[bytes]:
    payload = prepare_generate_request(model, request, config)
    payload.stream = True

    try:
        chunks = await open_chat_stream(config, payload.to_payload(), transport=transport)
    except Exception as exc:
        raise map_gemini_error(exc) from exc

    async def _iterator() -> AsyncIterator[bytes]:
        try:
            async for chunk in chunks:
                if is_terminal_chunk(chunk):
                    fragment = translate_response(chunk)
                else:
                    fragment = translate_stream_chunk(chunk)

                if fragment is None:
                    continue

                yield _sse_data(fragment)
        finally:
            await chunks.aclose()

    return _iterator()


def _sse_data(payload: dict[str, Any]) -> bytes:
    return f"data: {json.dumps(payload, ensure_ascii=False)}\n\n".encode("utf-8")
