"""Self-hosted model provider (Ollama, LM Studio, vLLM ...).

Talks to any OpenAI-compatible ``/chat/completions`` endpoint, e.g.
``LOCAL_MODEL_API_URL=http://localhost:11434/v1``.
"""

from __future__ import annotations

from typing import Any

import httpx

from prd_creator.providers.base import ProviderKind, RemoteProvider
from prd_creator.schemas.provider import ProviderOptions

DEFAULT_MODEL = "llama3"


class LocalModelProvider(RemoteProvider):
    id = "local"
    name = "Local Model"
    kind = ProviderKind.SELF_HOSTED_ENDPOINT

    async def is_available(self) -> bool:
        return bool(self.config.base_url)

    def _not_configured_message(self) -> str:
        return "Local model API endpoint not configured. Check your configuration."

    async def _complete(self, system_prompt: str, user_prompt: str, options: ProviderOptions) -> str | None:
        payload: dict[str, Any] = {
            "model": self._model(options, DEFAULT_MODEL),
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            "temperature": options.temperature,
            "max_tokens": options.max_tokens,
            "stream": False,
            **self._extra(options),
        }
        headers = {"Authorization": f"Bearer {self.config.api_key}"} if self.config.api_key else {}
        url = f"{self.config.base_url.rstrip('/')}/chat/completions"

        async with httpx.AsyncClient(timeout=None) as client:
            resp = await client.post(url, json=payload, headers=headers)
            resp.raise_for_status()
            data = resp.json()

        choices = data.get("choices") or []
        if not choices:
            return None
        return (choices[0].get("message") or {}).get("content")
