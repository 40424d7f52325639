"""Abstract base class for PRD generation providers.

Add a backend by subclassing ``AIProvider`` (or ``RemoteProvider`` for
anything that turns a prompt into text over the network) and wiring it into
``manager.create_provider``.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any
from enum import StrEnum

from prd_creator.exceptions import PrdCreatorError, ProviderError
from prd_creator.providers.prompts import SYSTEM_PROMPT, build_user_prompt
from prd_creator.schemas.prd import PrdGenerationInput
from prd_creator.schemas.provider import ProviderConfig, ProviderOptions

logger = logging.getLogger(__name__)


class ProviderKind(StrEnum):
    FIRST_PARTY_API = "first_party_api"
    SELF_HOSTED_ENDPOINT = "self_hosted_endpoint"
    DETERMINISTIC_TEMPLATE = "deterministic_template"


class ProviderId(StrEnum):
    OPENAI = "openai"
    ANTHROPIC = "anthropic"
    GEMINI = "gemini"
    LOCAL = "local"
    TEMPLATE = "template"


class AIProvider(ABC):
    """Contract that every PRD provider must satisfy."""

    id: str
    name: str
    kind: ProviderKind

    def __init__(self, config: ProviderConfig):
        self.config = config

    @abstractmethod
    async def is_available(self) -> bool:
        """Configuration check only. Does not call the backend and does not raise."""

    @abstractmethod
    async def generate_prd(self, data: PrdGenerationInput, options: ProviderOptions | None = None) -> str:
        """Return PRD markdown or raise ``ProviderError``."""

    async def aclose(self) -> None:
        """Release network clients, if any."""


class RemoteProvider(AIProvider):
    """Prompt-in, text-out backend. Subclasses implement ``_complete``."""

    @abstractmethod
    async def _complete(self, system_prompt: str, user_prompt: str, options: ProviderOptions) -> str | None:
        """Run one generation call and return the raw text."""

    def _not_configured_message(self) -> str:
        return f"{self.name} API key not configured. Check your configuration."

    def _extra(self, options: ProviderOptions) -> dict[str, Any]:
        """Stored provider settings, overridden by per-call options."""
        return {**self.config.extra, **options.extra}

    def _model(self, options: ProviderOptions, fallback: str) -> str:
        return options.model or self.config.model or fallback

    async def generate_prd(self, data: PrdGenerationInput, options: ProviderOptions | None = None) -> str:
        if not await self.is_available():
            raise ProviderError(self._not_configured_message(), provider_id=self.id)

        options = options or ProviderOptions()
        logger.info("Generating PRD with %s for product: %s", self.name, data.product_name)
        try:
            content = await self._complete(SYSTEM_PROMPT, build_user_prompt(data), options)
            if not content or not content.strip():
                raise ProviderError(f"Empty response from {self.name}", provider_id=self.id)
        except PrdCreatorError as exc:
            logger.error("Error generating PRD with %s: %s", self.name, exc)
            raise
        except Exception as exc:
            logger.error("Error generating PRD with %s: %s", self.name, exc)
            raise ProviderError(f"Failed to generate PRD with {self.name}: {exc}", provider_id=self.id) from exc

        logger.info('PRD generated successfully for "%s" using %s', data.product_name, self.name)
        return content
