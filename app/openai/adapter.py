from __future__ import annotations

import logging
from typing import Any

import httpx

from app.config import RelayConfig
from app.core.errors import GatewayError
from app.core.relay import post_chat

from .errors import map_openai_error
from .schemas import ChatCompletionRequest

logger = logging.getLogger(__name__)


def prepare_passthrough_body(
    request: ChatCompletionRequest,
    config: RelayConfig,
) -> dict[str, Any]:
    body = request.to_forward_body()
    if not body.get("model"):
        body["model"] = config.provider.model
    return body


async def relay_chat_completion(
    request: ChatCompletionRequest,
    config: RelayConfig,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> Any:
    logger.debug("Received chat-completion passthrough request")
    body = prepare_passthrough_body(request, config)

    try:
        reply = await post_chat(config, body, transport=transport)
        try:
            return reply.json()
        except ValueError as exc:
            raise GatewayError(status_code=500, message=str(exc)) from exc
    except Exception as exc:
        raise map_openai_error(exc) from exc
