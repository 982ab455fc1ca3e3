from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

ANTHROPIC_API_VERSION = "2023-06-01"


class AuthStrategy(Protocol):
    def compute_headers(self, api_key: str) -> dict[str, str]: ...


@dataclass(frozen=True, slots=True)
class BearerAuth:
    def compute_headers(self, api_key: str) -> dict[str, str]:
        return {"Authorization": f"Bearer {api_key}"}


@dataclass(frozen=True, slots=True)
class AnthropicKeyAuth:
    """API-key header scheme used by the Anthropic messages API."""

    version: str = ANTHROPIC_API_VERSION

    def compute_headers(self, api_key: str) -> dict[str, str]:
        return {
            "x-api-key": api_key,
            "anthropic-version": self.version,
        }


def redact_headers(headers: dict[str, str]) -> dict[str, str]:
    secret_names = {"authorization", "x-api-key"}
    return {
        name: "[REDACTED]" if name.lower() in secret_names else value
        for name, value in headers.items()
    }
