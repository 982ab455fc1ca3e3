from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _objects_only(value: Any) -> list[dict[str, Any]] | None:
    # Wrong-shaped lists and entries contribute nothing rather than failing.
    if not isinstance(value, list):
        return None
    return [item for item in value if isinstance(item, dict)]


class Part(BaseModel):
    text: Any = None
    inline_data: Any = Field(default=None, alias="inlineData")
    file_data: Any = Field(default=None, alias="fileData")

    model_config = ConfigDict(extra="allow", populate_by_name=True)


class Content(BaseModel):
    role: Any = None
    parts: list[Part] | None = None

    model_config = ConfigDict(extra="allow")

    @field_validator("parts", mode="before")
    @classmethod
    def _lenient_parts(cls, value: Any) -> list[dict[str, Any]] | None:
        return _objects_only(value)


class SystemInstruction(BaseModel):
    parts: list[Part] | None = None

    model_config = ConfigDict(extra="allow")

    @field_validator("parts", mode="before")
    @classmethod
    def _lenient_parts(cls, value: Any) -> list[dict[str, Any]] | None:
        return _objects_only(value)


class GenerationConfig(BaseModel):
    # Forwarded as received, no coercion.
    max_output_tokens: Any = Field(default=None, alias="maxOutputTokens")
    temperature: Any = None
    top_p: Any = Field(default=None, alias="topP")

    model_config = ConfigDict(extra="allow", populate_by_name=True)


class GenerateContentRequest(BaseModel):
    contents: list[Content] | None = None
    system_instruction: str | SystemInstruction | None = Field(
        default=None,
        alias="systemInstruction",
    )
    generation_config: GenerationConfig | None = Field(
        default=None,
        alias="generationConfig",
    )

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    @field_validator("contents", mode="before")
    @classmethod
    def _lenient_contents(cls, value: Any) -> list[dict[str, Any]] | None:
        return _objects_only(value)

    @field_validator("system_instruction", mode="before")
    @classmethod
    def _lenient_system_instruction(cls, value: Any) -> Any:
        if not value:
            return None
        if isinstance(value, (str, dict)):
            return value
        # Any other truthy value still yields an (empty) system message.
        return {}

    @field_validator("generation_config", mode="before")
    @classmethod
    def _lenient_generation_config(cls, value: Any) -> Any:
        return value if isinstance(value, dict) else None
