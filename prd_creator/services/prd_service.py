"""PRD service — provider selection, generation, rendering and health."""

from __future__ import annotations

import logging

from prd_creator.config import Settings
from prd_creator.database import Database
from prd_creator.exceptions import PrdCreatorError
from prd_creator.providers import ProviderId, ProviderManager
from prd_creator.providers.template_provider import TemplateProvider
from prd_creator.schemas.prd import GeneratePrdRequest, RenderTemplateRequest
from prd_creator.schemas.provider import ProviderConfig, ProviderInfo, ProviderOptions
from prd_creator.schemas.system import HealthReport
from prd_creator.services import metrics_service
from prd_creator.services.provider_config_service import get_provider_configs

logger = logging.getLogger(__name__)


def build_provider_manager(database: Database, settings: Settings) -> ProviderManager:
    """Fresh manager with the current env + stored provider configuration."""
    return ProviderManager(get_provider_configs(settings), database.session_factory)


async def generate_prd(database: Database, settings: Settings, request: GeneratePrdRequest) -> tuple[str, str]:
    """Generate a PRD. Returns (markdown, provider_id)."""
    template_name = request.template_name or "standard"
    logger.info('Generating PRD for "%s" using template: %s', request.product_name, template_name)

    data = request.model_copy(update={"template_name": template_name})
    options = ProviderOptions.from_mapping(request.provider_options)
    manager = build_provider_manager(database, settings)
    try:
        provider = await manager.select_provider(request.provider_id or settings.default_ai_provider)

        async with database.session() as db:
            if provider.id == ProviderId.TEMPLATE:
                await metrics_service.increment_metric(db, metrics_service.FALLBACKS)
            else:
                await metrics_service.increment_metric(db, metrics_service.AI_CALLS)

        content = await provider.generate_prd(data, options)

        async with database.session() as db:
            await metrics_service.increment_metric(db, metrics_service.PRD_GENERATED)
    except PrdCreatorError as exc:
        logger.error("Error generating PRD: %s", exc.message)
        raise
    finally:
        await manager.aclose()

    logger.info('PRD generated successfully for "%s" using %s', request.product_name, provider.name)
    return content, provider.id


async def render_template(database: Database, request: RenderTemplateRequest) -> str:
    """Placeholder substitution only; no backend call, no metrics."""
    provider = TemplateProvider(ProviderConfig(id=ProviderId.TEMPLATE.value), database.session_factory)
    return await provider.generate_prd(request)


async def list_ai_providers(database: Database, settings: Settings) -> list[ProviderInfo]:
    manager = build_provider_manager(database, settings)
    try:
        return await manager.list_available_providers()
    finally:
        await manager.aclose()


async def health_check(database: Database, settings: Settings) -> HealthReport:
    """Database connectivity plus provider availability. Never raises."""
    report = HealthReport()
    try:
        await database.ping()
        report.db = True
        report.providers = await list_ai_providers(database, settings)
    except Exception as exc:
        logger.error("Health check error: %s", exc)
        report.error = str(exc)
    return report
