"""Deterministic template-substitution provider — the always-available fallback."""

from __future__ import annotations

import logging
from datetime import date

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from prd_creator.exceptions import PrdCreatorError, ProviderError
from prd_creator.providers.base import AIProvider, ProviderKind
from prd_creator.schemas.prd import ProductBrief
from prd_creator.schemas.provider import ProviderConfig, ProviderOptions
from prd_creator.services import template_service
from prd_creator.utils.markdown import bullet_list, substitute_placeholders

logger = logging.getLogger(__name__)

DEFAULT_TEMPLATE = "standard"
NO_CONSTRAINTS = "No specific constraints identified."
DATE_FORMAT = "%m/%d/%Y"


def render_prd(content: str, data: ProductBrief, today: date | None = None) -> str:
    """Fill the PRD placeholders in ``content``; unknown tokens stay as-is."""
    today = today or date.today()
    return substitute_placeholders(
        content,
        {
            "PRODUCT_NAME": data.product_name,
            "PRODUCT_DESCRIPTION": data.product_description,
            "TARGET_AUDIENCE": data.target_audience,
            "CORE_FEATURES": bullet_list(data.core_features),
            "CONSTRAINTS": bullet_list(data.constraints) if data.constraints else NO_CONSTRAINTS,
            "DATE": today.strftime(DATE_FORMAT),
        },
    )


class TemplateProvider(AIProvider):
    id = "template"
    name = "Template-based (No AI)"
    kind = ProviderKind.DETERMINISTIC_TEMPLATE

    def __init__(self, config: ProviderConfig, session_factory: async_sessionmaker[AsyncSession]):
        super().__init__(config)
        self._session_factory = session_factory

    async def is_available(self) -> bool:
        return True

    async def generate_prd(self, data: ProductBrief, options: ProviderOptions | None = None) -> str:
        template_name = data.template_name or DEFAULT_TEMPLATE
        logger.info('Generating PRD for "%s" using template fallback (%s)', data.product_name, template_name)
        try:
            async with self._session_factory() as db:
                template = await template_service.get_template(db, template_name)
            content = render_prd(template.content, data)
        except PrdCreatorError:
            raise
        except Exception as exc:
            logger.error("Error generating PRD with template: %s", exc)
            raise ProviderError(f"Failed to generate PRD with template: {exc}", provider_id=self.id) from exc

        logger.info('PRD generated successfully for "%s" using template fallback', data.product_name)
        return content
