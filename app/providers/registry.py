from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

from .auth import AnthropicKeyAuth, AuthStrategy, BearerAuth

CUSTOM_PROVIDER = "custom"
DEFAULT_CHAT_ENDPOINT = "/chat/completions"


@dataclass(frozen=True, slots=True)
class ProviderDescriptor:
    name: str
    base_url: str
    chat_endpoint: str
    model: str
    auth: AuthStrategy = field(default_factory=BearerAuth)

    @property
    def chat_url(self) -> str:
        return f"{self.base_url}{self.chat_endpoint}"


BUILTIN_PROVIDERS: tuple[ProviderDescriptor, ...] = (
    ProviderDescriptor(
        name="shuaihong",
        base_url="https://ai.shuaihong.fun/v1",
        chat_endpoint=DEFAULT_CHAT_ENDPOINT,
        model="gpt-4o",
    ),
    ProviderDescriptor(
        name="deepseek",
        base_url="https://api.deepseek.com/v1",
        chat_endpoint=DEFAULT_CHAT_ENDPOINT,
        model="deepseek-chat",
    ),
    ProviderDescriptor(
        name="openai",
        base_url="https://api.openai.com/v1",
        chat_endpoint=DEFAULT_CHAT_ENDPOINT,
        model="gpt-4",
    ),
    ProviderDescriptor(
        name="claude",
        base_url="https://api.anthropic.com/v1",
        chat_endpoint="/messages",
        model="claude-3-sonnet-20240229",
        auth=AnthropicKeyAuth(),
    ),
)


class ProviderRegistry:
    """Read-only lookup from provider name to descriptor.

    Unknown names resolve to the ``custom`` descriptor, which is supplied by
    the caller so its target can come from configuration.
    """

    def __init__(
        self,
        custom: ProviderDescriptor,
        providers: tuple[ProviderDescriptor, ...] = BUILTIN_PROVIDERS,
    ) -> None:
        table = {descriptor.name: descriptor for descriptor in providers}
        table[CUSTOM_PROVIDER] = custom
        self._providers: Mapping[str, ProviderDescriptor] = MappingProxyType(table)

    @property
    def names(self) -> list[str]:
        return list(self._providers)

    def resolve(self, name: str) -> ProviderDescriptor:
        return self._providers.get(name, self._providers[CUSTOM_PROVIDER])


def custom_descriptor(
    base_url: str = "",
    chat_endpoint: str = DEFAULT_CHAT_ENDPOINT,
    model: str = "custom-model",
) -> ProviderDescriptor:
    return ProviderDescriptor(
        name=CUSTOM_PROVIDER,
        base_url=base_url,
        chat_endpoint=chat_endpoint,
        model=model,
    )
