"""Provider manager — builds, caches and selects PRD providers."""

from __future__ import annotations

import logging

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from prd_creator.exceptions import FatalProviderError
from prd_creator.providers.anthropic_provider import AnthropicProvider
from prd_creator.providers.base import AIProvider, ProviderId
from prd_creator.providers.gemini_provider import GeminiProvider
from prd_creator.providers.local_provider import LocalModelProvider
from prd_creator.providers.openai_provider import OpenAIProvider
from prd_creator.providers.template_provider import TemplateProvider
from prd_creator.schemas.provider import ProviderConfig, ProviderInfo

logger = logging.getLogger(__name__)

# Listing order
REGISTERED: tuple[ProviderId, ...] = (
    ProviderId.OPENAI,
    ProviderId.GEMINI,
    ProviderId.ANTHROPIC,
    ProviderId.LOCAL,
    ProviderId.TEMPLATE,
)

# Auto-selection order; the template provider is the last resort, not listed here
PRIORITY: tuple[ProviderId, ...] = (
    ProviderId.OPENAI,
    ProviderId.ANTHROPIC,
    ProviderId.GEMINI,
    ProviderId.LOCAL,
)


def create_provider(
    provider_id: ProviderId,
    config: ProviderConfig,
    session_factory: async_sessionmaker[AsyncSession],
) -> AIProvider:
    match provider_id:
        case ProviderId.OPENAI:
            return OpenAIProvider(config)
        case ProviderId.ANTHROPIC:
            return AnthropicProvider(config)
        case ProviderId.GEMINI:
            return GeminiProvider(config)
        case ProviderId.LOCAL:
            return LocalModelProvider(config)
        case ProviderId.TEMPLATE:
            return TemplateProvider(config, session_factory)
    raise ValueError(f"Unhandled provider: {provider_id}")


class ProviderManager:
    """One instance per provider id, built on first use.

    Configuration is captured here; build a new manager to pick up changes.
    """

    def __init__(
        self,
        configs: dict[str, ProviderConfig],
        session_factory: async_sessionmaker[AsyncSession],
    ):
        self._configs = configs
        self._session_factory = session_factory
        self._instances: dict[ProviderId, AIProvider] = {}

    def get_provider(self, provider_id: str) -> AIProvider | None:
        try:
            pid = ProviderId(provider_id)
        except ValueError:
            logger.warning("Unknown provider: %s", provider_id)
            return None

        if pid in self._instances:
            return self._instances[pid]

        try:
            config = self._configs.get(pid.value) or ProviderConfig(id=pid.value)
            provider = create_provider(pid, config, self._session_factory)
        except Exception as exc:
            logger.error("Error creating provider %s: %s", pid.value, exc)
            return None

        self._instances[pid] = provider
        return provider

    async def _check_available(self, provider: AIProvider) -> bool:
        try:
            return await provider.is_available()
        except Exception as exc:
            logger.warning("Error checking availability for provider %s: %s", provider.id, exc)
            return False

    async def list_available_providers(self) -> list[ProviderInfo]:
        result: list[ProviderInfo] = []
        for pid in REGISTERED:
            provider = self.get_provider(pid.value)
            if provider is None:
                continue
            available = await self._check_available(provider)
            result.append(ProviderInfo(id=provider.id, name=provider.name, available=available))
        return result

    async def select_provider(self, preferred_id: str | None = None) -> AIProvider:
        if preferred_id:
            provider = self.get_provider(preferred_id)
            if provider is not None:
                if await self._check_available(provider):
                    logger.info("Using preferred provider: %s", provider.name)
                    return provider
                logger.warning("Preferred provider %s is not available. Will try fallback.", provider.name)

        for pid in PRIORITY:
            provider = self.get_provider(pid.value)
            if provider is not None and await self._check_available(provider):
                logger.info("Selected provider: %s", provider.name)
                return provider

        logger.info("No AI providers available. Using template-based fallback.")
        fallback = self.get_provider(ProviderId.TEMPLATE.value)
        if fallback is None:
            logger.critical("Even the template fallback provider could not be created")
            raise FatalProviderError("Critical error: Even fallback provider is unavailable")
        return fallback

    async def aclose(self) -> None:
        for provider in self._instances.values():
            await provider.aclose()
        self._instances.clear()
