from __future__ import annotations

import httpx
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.config import RelayConfig
from app.gemini.errors import GeminiCompatError
from app.openai.errors import OpenAICompatError

GEMINI_PATH_PREFIX = "/v1beta"


def get_relay_config(request: Request) -> RelayConfig:
    return request.app.state.relay_config


def get_transport(request: Request) -> httpx.AsyncBaseTransport | None:
    return request.app.state.transport


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(OpenAICompatError)
    async def handle_openai_error(
        _request: Request,
        exc: OpenAICompatError,
    ) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.to_error()},
        )

    @app.exception_handler(GeminiCompatError)
    async def handle_gemini_error(
        _request: Request,
        exc: GeminiCompatError,
    ) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.to_error()},
        )

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        first_error = exc.errors()[0]["msg"] if exc.errors() else "Invalid request"

        if request.url.path.startswith(GEMINI_PATH_PREFIX):
            compat_error: GeminiCompatError | OpenAICompatError = GeminiCompatError(
                status_code=400,
                message=first_error,
                status="INVALID_ARGUMENT",
            )
        else:
            compat_error = OpenAICompatError(
                status_code=400,
                message=first_error,
                error_type="invalid_request_error",
            )

        return JSONResponse(
            status_code=compat_error.status_code,
            content={"error": compat_error.to_error()},
        )
