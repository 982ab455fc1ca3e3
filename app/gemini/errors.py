from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from app.core.errors import GatewayError, ProviderError


@dataclass
class GeminiCompatError(Exception):
    """Gemini-style error envelope with HTTP metadata."""

    status_code: int
    message: str
    status: str = "INTERNAL_ERROR"

    def to_error(self) -> dict[str, Any]:
        return {
            "code": self.status_code,
            "message": self.message,
            "status": self.status,
        }


def map_gemini_error(exc: Exception) -> GeminiCompatError:
    if isinstance(exc, GeminiCompatError):
        return exc

    if isinstance(exc, ProviderError):
        return GeminiCompatError(
            status_code=exc.status_code,
            message=exc.message,
            status="PROVIDER_ERROR",
        )

    if isinstance(exc, GatewayError):
        return GeminiCompatError(
            status_code=exc.status_code,
            message=exc.message,
            status="INTERNAL_ERROR",
        )

    return GeminiCompatError(status_code=500, message=str(exc), status="INTERNAL_ERROR")
