from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

from app.providers.registry import (
    DEFAULT_CHAT_ENDPOINT,
    ProviderDescriptor,
    ProviderRegistry,
    custom_descriptor,
)

SERVICE_NAME = "gemini-relay"
SERVICE_VERSION = "1.0.0"

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Service settings read from ``GCR_*`` environment variables."""

    host: str = "localhost"
    port: int = 3458

    provider: str = "shuaihong"
    base_url: str | None = None
    target_api_key: str = ""
    model: str | None = None

    custom_base_url: str = ""
    custom_endpoint: str = DEFAULT_CHAT_ENDPOINT
    custom_model: str = "custom-model"

    timeout: float = 120.0
    debug: bool = False
    log_level: str = "info"

    model_config = SettingsConfigDict(env_prefix="GCR_", case_sensitive=False)


@dataclass(frozen=True, slots=True)
class RelayConfig:
    provider_name: str
    provider: ProviderDescriptor
    api_key: str = ""
    debug: bool = False
    timeout: float = 120.0

    def outbound_headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        headers.update(self.provider.auth.compute_headers(self.api_key))
        return headers


@lru_cache()
def get_settings() -> Settings:
    return Settings()


def build_registry(settings: Settings) -> ProviderRegistry:
    return ProviderRegistry(
        custom=custom_descriptor(
            base_url=settings.custom_base_url,
            chat_endpoint=settings.custom_endpoint,
            model=settings.custom_model,
        )
    )


def build_relay_config(settings: Settings | None = None) -> RelayConfig:
    settings = settings or get_settings()
    registry = build_registry(settings)
    descriptor = registry.resolve(settings.provider)

    overrides: dict[str, str] = {}
    if settings.base_url:
        overrides["base_url"] = settings.base_url
    if settings.model:
        overrides["model"] = settings.model
    if overrides:
        descriptor = dataclasses.replace(descriptor, **overrides)

    if descriptor.name != settings.provider:
        logger.info(
            "Unknown provider '%s' (known: %s), using the %s descriptor",
            settings.provider,
            ", ".join(registry.names),
            descriptor.name,
        )

    return RelayConfig(
        provider_name=settings.provider,
        provider=descriptor,
        api_key=settings.target_api_key,
        debug=settings.debug,
        timeout=settings.timeout,
    )


def configure_logging(level: str = "info", debug: bool = False) -> None:
    resolved = logging.DEBUG if debug else getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=resolved,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
