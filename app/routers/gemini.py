from __future__ import annotations

import httpx
from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, StreamingResponse

from app.config import RelayConfig
from app.dependencies import get_relay_config, get_transport
from app.gemini.adapter import create_generate_content, create_generate_content_stream
from app.gemini.errors import GeminiCompatError
from app.gemini.schemas import GenerateContentRequest

router = APIRouter(prefix="/v1beta", tags=["gemini"])


@router.post("/models/{model}:generateContent")
@router.post("/models/{model}/generateContent")
async def generate_content(
    model: str,
    payload: GenerateContentRequest,
    config: RelayConfig = Depends(get_relay_config),
    transport: httpx.AsyncBaseTransport | None = Depends(get_transport),
):
    response_payload = await create_generate_content(
        model,
        payload,
        config,
        transport=transport,
    )
    return JSONResponse(content=response_payload)


@router.post("/models/{model}:streamGenerateContent")
@router.post("/models/{model}/streamGenerateContent")
async def stream_generate_content(
    model: str,
    payload: GenerateContentRequest,
    config: RelayConfig = Depends(get_relay_config),
    transport: httpx.AsyncBaseTransport | None = Depends(get_transport),
):
    iterator = await create_generate_content_stream(
        model,
        payload,
        config,
        transport=transport,
    )
    return StreamingResponse(
        iterator,
        media_type="text/event-stream",
        headers={"Cache-Control": "no-cache"},
    )


@router.api_route(
    "/{path:path}",
    methods=["GET", "POST", "PUT", "PATCH", "DELETE"],
    include_in_schema=False,
)
async def unsupported_endpoint(request: Request):
    raise GeminiCompatError(
        status_code=404,
        message=f"Endpoint not supported: {request.url.path}",
        status="NOT_FOUND",
    )
