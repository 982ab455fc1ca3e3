"""Outbound calls to the configured chat-completion provider."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, AsyncGenerator

import httpx

from app.config import RelayConfig
from app.providers.auth import redact_headers

from .errors import GatewayError, ProviderError

logger = logging.getLogger(__name__)

SSE_DATA_PREFIX = "data:"
SSE_DONE = "[DONE]"


@dataclass(slots=True)
class ProviderReply:
    status_code: int
    text: str

    def json(self) -> Any:
        return json.loads(self.text)


async def post_chat(
    config: RelayConfig,
    body: dict[str, Any],
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> ProviderReply:
    """Send one chat-completion request and return the fully read reply.

    Raises ``ProviderError`` for non-2xx replies and ``GatewayError`` for
    transport failures. Nothing is retried.
    """

    url = config.provider.chat_url
    headers = config.outbound_headers()
    _log_outbound(config, url, headers, body)

    try:
        async with httpx.AsyncClient(timeout=config.timeout, transport=transport) as client:
            response = await client.post(url, headers=headers, json=body)
    except httpx.HTTPError as exc:
        logger.error("Request to %s failed: %s", url, exc)
        raise GatewayError(status_code=500, message=str(exc)) from exc

    if response.is_error:
        logger.error("Provider error (%s): %s", response.status_code, response.text)
        raise ProviderError(status_code=response.status_code, body=response.text)

    if config.debug:
        logger.debug("Provider response: %s", response.text)

    return ProviderReply(status_code=response.status_code, text=response.text)


async def open_chat_stream(
    config: RelayConfig,
    body: dict[str, Any],
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> AsyncGenerator[dict[str, Any], None]:
    """Start a streamed chat completion and return an iterator of parsed chunks.

    The provider status is checked before this returns, so provider and
    transport errors surface as exceptions rather than mid-stream.
    """

    url = config.provider.chat_url
    headers = config.outbound_headers()
    _log_outbound(config, url, headers, body)

    client = httpx.AsyncClient(timeout=config.timeout, transport=transport)
    try:
        request = client.build_request("POST", url, headers=headers, json=body)
        response = await client.send(request, stream=True)
    except httpx.HTTPError as exc:
        await client.aclose()
        logger.error("Streaming request to %s failed: %s", url, exc)
        raise GatewayError(status_code=500, message=str(exc)) from exc

    if response.is_error:
        try:
            await response.aread()
        finally:
            await response.aclose()
            await client.aclose()
        logger.error("Provider error (%s): %s", response.status_code, response.text)
        raise ProviderError(status_code=response.status_code, body=response.text)

    return _iter_chunks(client, response)


async def _iter_chunks(
    client: httpx.AsyncClient,
    response: httpx.Response,
) -> AsyncGenerator[dict[str, Any], None]:
    try:
        async for line in response.aiter_lines():
            if not line.startswith(SSE_DATA_PREFIX):
                continue

            data = line[len(SSE_DATA_PREFIX) :].strip()
            if not data:
                continue
            if data == SSE_DONE:
                break

            try:
                chunk = json.loads(data)
            except ValueError:
                logger.warning("Skipping malformed stream chunk: %s", data)
                continue

            yield chunk

    except httpx.HTTPError as exc:
        # Emission stops here; the caller sees a truncated stream.
        logger.error("Provider stream interrupted: %s", exc)

    finally:
        await response.aclose()
        await client.aclose()


def _log_outbound(
    config: RelayConfig,
    url: str,
    headers: dict[str, str],
    body: dict[str, Any],
) -> None:
    if not config.debug:
        return

    logger.debug("Making request to: %s", url)
    logger.debug("Headers: %s", redact_headers(headers))
    logger.debug("Body: %s", json.dumps(body, ensure_ascii=False))
