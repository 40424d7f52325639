"""Google Gemini provider (google-generativeai SDK)."""

from __future__ import annotations

import asyncio

from prd_creator.providers.base import ProviderKind, RemoteProvider
from prd_creator.schemas.provider import ProviderOptions

DEFAULT_MODEL = "gemini-2.5-flash"


class GeminiProvider(RemoteProvider):
    id = "gemini"
    name = "Google Gemini"
    kind = ProviderKind.FIRST_PARTY_API

    async def is_available(self) -> bool:
        return bool(self.config.api_key)

    async def _complete(self, system_prompt: str, user_prompt: str, options: ProviderOptions) -> str | None:
        import google.generativeai as genai

        genai.configure(api_key=self.config.api_key)
        model = genai.GenerativeModel(self._model(options, DEFAULT_MODEL), system_instruction=system_prompt)
        generation_config = genai.types.GenerationConfig(
            max_output_tokens=options.max_tokens,
            temperature=options.temperature,
            **self._extra(options),
        )

        # SDK is synchronous
        response = await asyncio.to_thread(model.generate_content, user_prompt, generation_config=generation_config)
        return response.text
