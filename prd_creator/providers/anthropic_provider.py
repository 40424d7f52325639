"""Anthropic Claude messages provider."""

from __future__ import annotations

from anthropic import AsyncAnthropic

from prd_creator.providers.base import ProviderKind, RemoteProvider
from prd_creator.schemas.provider import ProviderOptions

DEFAULT_MODEL = "claude-3-opus-20240229"


class AnthropicProvider(RemoteProvider):
    id = "anthropic"
    name = "Anthropic Claude"
    kind = ProviderKind.FIRST_PARTY_API

    _client: AsyncAnthropic | None = None

    async def is_available(self) -> bool:
        return bool(self.config.api_key)

    def _get_client(self) -> AsyncAnthropic:
        if self._client is None:
            self._client = AsyncAnthropic(api_key=self.config.api_key, base_url=self.config.base_url, max_retries=0)
        return self._client

    async def _complete(self, system_prompt: str, user_prompt: str, options: ProviderOptions) -> str | None:
        response = await self._get_client().messages.create(
            model=self._model(options, DEFAULT_MODEL),
            system=system_prompt,
            messages=[{"role": "user", "content": user_prompt}],
            temperature=options.temperature,
            max_tokens=options.max_tokens,
            **self._extra(options),
        )
        return "".join(block.text for block in response.content if getattr(block, "type", None) == "text")

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.close()
            self._client = None
