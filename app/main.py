from __future__ import annotations

import logging

import httpx
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from app.config import (
    SERVICE_NAME,
    SERVICE_VERSION,
    RelayConfig,
    build_relay_config,
    configure_logging,
    get_settings,
)
from app.dependencies import register_exception_handlers
from app.internal import admin
from app.routers import chat, gemini

logger = logging.getLogger(__name__)

CORS_ALLOWED_HEADERS = ["Content-Type", "Authorization", "x-goog-api-key"]


def create_app(
    config: RelayConfig | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    if config is None:
        settings = get_settings()
        configure_logging(settings.log_level, settings.debug)
        config = build_relay_config(settings)

    app = FastAPI(
        title=SERVICE_NAME,
        version=SERVICE_VERSION,
        docs_url="/docs",
        redoc_url=None,
    )
    app.state.relay_config = config
    app.state.transport = transport

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=CORS_ALLOWED_HEADERS,
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        logger.debug("%s %s", request.method, request.url.path)
        return await call_next(request)

    register_exception_handlers(app)

    app.include_router(gemini.router)
    app.include_router(chat.router)
    app.include_router(admin.router)

    logger.info(
        "Routing Gemini requests to %s (%s) at %s",
        config.provider_name,
        config.provider.model,
        config.provider.chat_url,
    )

    return app


app = create_app()
