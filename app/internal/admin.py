from __future__ import annotations

from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from app.config import SERVICE_NAME, SERVICE_VERSION, RelayConfig
from app.dependencies import get_relay_config

router = APIRouter(tags=["internal"])


@router.get("/health")
async def health(config: RelayConfig = Depends(get_relay_config)) -> dict[str, str]:
    return {
        "status": "ok",
        "service": SERVICE_NAME,
        "provider": config.provider_name,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@router.get("/config")
async def relay_config(config: RelayConfig = Depends(get_relay_config)) -> dict[str, str]:
    return {
        "provider": config.provider_name,
        "model": config.provider.model,
        "version": SERVICE_VERSION,
    }
