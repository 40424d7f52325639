"""Provider configuration and option schemas."""

from typing import Any

from pydantic import BaseModel, Field

from prd_creator.schemas.base import CamelModel


class ProviderConfig(BaseModel):
    id: str
    api_key: str | None = None
    base_url: str | None = None
    model: str | None = None
    extra: dict[str, Any] = {}  # provider-specific settings


class ProviderOptions(BaseModel):
    temperature: float = 0.7
    max_tokens: int = 4000
    model: str | None = None
    extra: dict[str, Any] = {}

    @classmethod
    def from_mapping(cls, options: dict[str, Any] | None) -> "ProviderOptions":
        """Split caller options into known fields and the extra bucket."""
        options = dict(options or {})
        known: dict[str, Any] = {}
        for key, field in (("temperature", "temperature"), ("maxTokens", "max_tokens"),
                           ("max_tokens", "max_tokens"), ("model", "model")):
            if key in options:
                known[field] = options.pop(key)
        return cls(**known, extra=options)


class ProviderInfo(CamelModel):
    id: str
    name: str
    available: bool


class ProviderConfigUpdate(CamelModel):
    provider_id: str = Field(..., min_length=1)
    api_key: str | None = None
    base_url: str | None = None
    model: str | None = None
