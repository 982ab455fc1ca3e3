from __future__ import annotations

import httpx
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from app.config import RelayConfig
from app.dependencies import get_relay_config, get_transport
from app.openai.adapter import relay_chat_completion
from app.openai.schemas import ChatCompletionRequest

router = APIRouter(tags=["openai"])


@router.post("/chat/completions")
async def chat_completions(
    payload: ChatCompletionRequest,
    config: RelayConfig = Depends(get_relay_config),
    transport: httpx.AsyncBaseTransport | None = Depends(get_transport),
):
    response_payload = await relay_chat_completion(payload, config, transport=transport)
    return JSONResponse(content=response_payload)
