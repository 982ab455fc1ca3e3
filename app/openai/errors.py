from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from app.core.errors import GatewayError, ProviderError


@dataclass
class OpenAICompatError(Exception):
    """OpenAI-style error wrapper with HTTP metadata."""

    status_code: int
    message: str
    error_type: str = "internal_error"

    def to_error(self) -> dict[str, Any]:
        return {
            "message": self.message,
            "type": self.error_type,
            "code": self.status_code,
        }


def map_openai_error(exc: Exception) -> OpenAICompatError:
    """Map relay failures to OpenAI-style API errors."""

    if isinstance(exc, OpenAICompatError):
        return exc

    if isinstance(exc, ProviderError):
        return OpenAICompatError(
            status_code=exc.status_code,
            message=exc.message,
            error_type="provider_error",
        )

    if isinstance(exc, GatewayError):
        return OpenAICompatError(
            status_code=exc.status_code,
            message=exc.message,
            error_type="internal_error",
        )

    return OpenAICompatError(status_code=500, message=str(exc), error_type="internal_error")
