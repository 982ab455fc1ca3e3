from __future__ import annotations

from dataclasses import dataclass


@dataclass
class GatewayError(Exception):
    status_code: int
    message: str

    def __str__(self) -> str:
        return self.message


@dataclass
class ProviderError(Exception):
    """Non-2xx response from the upstream provider."""

    status_code: int
    body: str

    @property
    def message(self) -> str:
        return f"Provider error: {self.body}"

    def __str__(self) -> str:
        return self.message
