"""PRD generation schemas."""

from typing import Any

from pydantic import Field

from prd_creator.schemas.base import CamelModel


class ProductBrief(CamelModel):
    product_name: str = Field(..., min_length=1)
    product_description: str = Field(..., min_length=1)
    target_audience: str = Field(..., min_length=1)
    core_features: list[str] = Field(..., min_length=1)
    constraints: list[str] | None = None
    template_name: str | None = None


class PrdGenerationInput(ProductBrief):
    additional_context: str | None = None


class GeneratePrdRequest(PrdGenerationInput):
    provider_id: str | None = None
    provider_options: dict[str, Any] | None = None


class RenderTemplateRequest(ProductBrief):
    """Placeholder substitution only — never reaches a backend."""
