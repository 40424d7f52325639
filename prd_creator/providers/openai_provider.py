"""OpenAI chat-completions provider."""

from __future__ import annotations

from openai import AsyncOpenAI

from prd_creator.providers.base import ProviderKind, RemoteProvider
from prd_creator.schemas.provider import ProviderOptions

DEFAULT_MODEL = "gpt-4"


class OpenAIProvider(RemoteProvider):
    id = "openai"
    name = "OpenAI"
    kind = ProviderKind.FIRST_PARTY_API

    _client: AsyncOpenAI | None = None

    async def is_available(self) -> bool:
        return bool(self.config.api_key)

    def _get_client(self) -> AsyncOpenAI:
        if self._client is None:
            self._client = AsyncOpenAI(api_key=self.config.api_key, base_url=self.config.base_url, max_retries=0)
        return self._client

    async def _complete(self, system_prompt: str, user_prompt: str, options: ProviderOptions) -> str | None:
        response = await self._get_client().chat.completions.create(
            model=self._model(options, DEFAULT_MODEL),
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            temperature=options.temperature,
            max_tokens=options.max_tokens,
            **self._extra(options),
        )
        if not response.choices:
            return None
        return response.choices[0].message.content

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.close()
            self._client = None
