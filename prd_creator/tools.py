"""Tool registry — the operations callable through ``POST /api/tools/{name}``.

Each tool pairs a pydantic input model with an async handler. Handlers
return either plain text (PRD markdown, log tails) or data that is
JSON-encoded into the tool result.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

import pydantic
from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError

from prd_creator.config import Settings
from prd_creator.database import Database
from prd_creator.exceptions import FatalProviderError, PrdCreatorError, StoreError, ValidationError
from prd_creator.schemas.prd import GeneratePrdRequest, RenderTemplateRequest
from prd_creator.schemas.provider import ProviderConfigUpdate
from prd_creator.schemas.system import EmptyArgs, LogsRequest, MetricResponse, SuccessResponse
from prd_creator.schemas.template import (
    TemplateCreate,
    TemplateFileRequest,
    TemplateIdRequest,
    TemplateLookup,
    TemplateResponse,
    TemplateSummary,
    TemplateUpdate,
    TemplateUpdateRequest,
)
from prd_creator.schemas.tool import ToolInfo, ToolResult
from prd_creator.schemas.validation import (
    ValidatePrdRequest,
    ValidationRuleCreate,
    ValidationRuleDelete,
    ValidationRuleUpdate,
)
from prd_creator.services import (
    logs_service,
    metrics_service,
    prd_service,
    provider_config_service,
    template_service,
    validation_rule_service,
    validation_service,
)

logger = logging.getLogger(__name__)


@dataclass
class ToolContext:
    database: Database
    settings: Settings


Handler = Callable[[ToolContext, Any], Awaitable[Any]]


@dataclass(frozen=True)
class Tool:
    name: str
    description: str
    input_model: type[BaseModel]
    handler: Handler

    def info(self) -> ToolInfo:
        return ToolInfo(
            name=self.name,
            description=self.description,
            input_schema=self.input_model.model_json_schema(by_alias=True),
        )


TOOLS: dict[str, Tool] = {}


def tool(name: str, description: str, input_model: type[BaseModel] = EmptyArgs):
    def register(handler: Handler) -> Handler:
        TOOLS[name] = Tool(name, description, input_model, handler)
        return handler

    return register


# ── Serialization ──────────────────────────────────────────────────


def _to_jsonable(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True)
    if isinstance(value, list):
        return [_to_jsonable(v) for v in value]
    if isinstance(value, dict):
        return {k: _to_jsonable(v) for k, v in value.items()}
    return value


def _to_text(value: Any) -> str:
    if isinstance(value, str):
        return value
    return json.dumps(_to_jsonable(value), indent=2)


# ── Dispatch ───────────────────────────────────────────────────────


async def call_tool(ctx: ToolContext, name: str, arguments: dict[str, Any] | None) -> ToolResult:
    """Run one tool. Every failure except a broken install becomes an error result."""
    entry = TOOLS.get(name)
    if entry is None:
        logger.error("Unknown tool requested: %s", name)
        return ToolResult.text(f"Unknown tool: {name}", is_error=True)

    try:
        try:
            params = entry.input_model.model_validate(arguments or {})
        except pydantic.ValidationError as exc:
            raise ValidationError(str(exc)) from exc
        try:
            value = await entry.handler(ctx, params)
        except pydantic.ValidationError as exc:
            raise ValidationError(str(exc)) from exc
        except SQLAlchemyError as exc:
            raise StoreError(f"Store error: {exc}") from exc
    except FatalProviderError:
        logger.critical("Tool %s hit an unrecoverable provider error", name)
        raise
    except ValidationError as exc:
        logger.warning("Invalid input for tool %s: %s", name, exc.message)
        return ToolResult.text(f"Error in {name}: {exc.message}", is_error=True)
    except PrdCreatorError as exc:
        logger.error("Error in tool %s: %s", name, exc.message)
        return ToolResult.text(f"Error in {name}: {exc.message}", is_error=True)
    except Exception as exc:
        logger.exception("Unexpected error in tool %s", name)
        return ToolResult.text(f"Error in {name}: {exc}", is_error=True)

    return ToolResult.text(_to_text(value))


def list_tools() -> list[ToolInfo]:
    return [t.info() for t in TOOLS.values()]


# ── PRD generation & validation ────────────────────────────────────


@tool("generate_prd", "Generate a Product Requirements Document with an AI provider or the template fallback",
      GeneratePrdRequest)
async def _generate_prd(ctx: ToolContext, params: GeneratePrdRequest) -> str:
    content, _ = await prd_service.generate_prd(ctx.database, ctx.settings, params)
    return content


@tool("render_template", "Render a PRD template by placeholder substitution only (no AI)", RenderTemplateRequest)
async def _render_template(ctx: ToolContext, params: RenderTemplateRequest) -> str:
    return await prd_service.render_template(ctx.database, params)


@tool("validate_prd", "Validate a PRD against built-in and custom rules", ValidatePrdRequest)
async def _validate_prd(ctx: ToolContext, params: ValidatePrdRequest):
    async with ctx.database.session() as db:
        return await validation_service.validate_prd(db, params.prd_content, params.validation_rules)


@tool("list_validation_rules", "List the built-in validation rules")
async def _list_validation_rules(ctx: ToolContext, params: EmptyArgs):
    return validation_service.list_builtin_rules()


@tool("list_all_rules", "List all validation rules (built-in and custom)")
async def _list_all_rules(ctx: ToolContext, params: EmptyArgs):
    async with ctx.database.session() as db:
        return await validation_service.list_all_rules(db)


@tool("list_ai_providers", "List all AI providers and their availability status")
async def _list_ai_providers(ctx: ToolContext, params: EmptyArgs):
    return await prd_service.list_ai_providers(ctx.database, ctx.settings)


# ── Templates ──────────────────────────────────────────────────────


@tool("create_template", "Create a new PRD template", TemplateCreate)
async def _create_template(ctx: ToolContext, params: TemplateCreate):
    async with ctx.database.session() as db:
        return TemplateResponse.model_validate(await template_service.create_template(db, params))


@tool("list_templates", "List all templates (without content)")
async def _list_templates(ctx: ToolContext, params: EmptyArgs):
    async with ctx.database.session() as db:
        return [TemplateSummary.model_validate(t) for t in await template_service.list_templates(db)]


@tool("get_template", "Get a template by id or name", TemplateLookup)
async def _get_template(ctx: ToolContext, params: TemplateLookup):
    async with ctx.database.session() as db:
        return TemplateResponse.model_validate(await template_service.get_template(db, params.id_or_name))


@tool("update_template", "Update a template, keeping the previous version in history", TemplateUpdateRequest)
async def _update_template(ctx: ToolContext, params: TemplateUpdateRequest):
    patch = TemplateUpdate.model_validate(params.model_dump(exclude={"id"}))
    async with ctx.database.session() as db:
        return TemplateResponse.model_validate(await template_service.update_template(db, params.id, patch))


@tool("delete_template", "Soft-delete a template", TemplateIdRequest)
async def _delete_template(ctx: ToolContext, params: TemplateIdRequest):
    async with ctx.database.session() as db:
        await template_service.delete_template(db, params.id)
    return SuccessResponse()


@tool("export_templates", "Export all templates to a JSON file", TemplateFileRequest)
async def _export_templates(ctx: ToolContext, params: TemplateFileRequest):
    async with ctx.database.session() as db:
        await template_service.export_templates(db, params.file_path)
    return SuccessResponse(file_path=params.file_path)


@tool("import_templates", "Import templates from a JSON file (upsert by name)", TemplateFileRequest)
async def _import_templates(ctx: ToolContext, params: TemplateFileRequest):
    async with ctx.database.session() as db:
        await template_service.import_templates(db, params.file_path)
    return SuccessResponse(file_path=params.file_path)


# ── Custom validation rules ────────────────────────────────────────


@tool("add_validation_rule", "Add a custom pattern-based validation rule", ValidationRuleCreate)
async def _add_validation_rule(ctx: ToolContext, params: ValidationRuleCreate):
    if any(r.id == params.id for r in validation_service.list_builtin_rules()):
        raise ValidationError(f"'{params.id}' is a built-in rule id")
    async with ctx.database.session() as db:
        await validation_rule_service.add_rule(db, params)
    return SuccessResponse()


@tool("update_validation_rule", "Update a custom validation rule", ValidationRuleUpdate)
async def _update_validation_rule(ctx: ToolContext, params: ValidationRuleUpdate):
    async with ctx.database.session() as db:
        await validation_rule_service.update_rule(db, params)
    return SuccessResponse()


@tool("delete_validation_rule", "Delete a custom validation rule", ValidationRuleDelete)
async def _delete_validation_rule(ctx: ToolContext, params: ValidationRuleDelete):
    async with ctx.database.session() as db:
        await validation_rule_service.delete_rule(db, params.id)
    return SuccessResponse()


# ── System ─────────────────────────────────────────────────────────


@tool("stats", "Show usage metrics")
async def _stats(ctx: ToolContext, params: EmptyArgs):
    async with ctx.database.session() as db:
        return [MetricResponse.model_validate(m) for m in await metrics_service.get_metrics(db)]


@tool("get_provider_config", "Show stored AI provider configuration overrides")
async def _get_provider_config(ctx: ToolContext, params: EmptyArgs):
    return provider_config_service.get_stored_provider_config(ctx.settings.provider_config_path)


@tool("update_provider_config", "Store configuration overrides for an AI provider", ProviderConfigUpdate)
async def _update_provider_config(ctx: ToolContext, params: ProviderConfigUpdate):
    provider_config_service.update_stored_provider_config(
        ctx.settings.provider_config_path,
        params.provider_id,
        params.model_dump(by_alias=True, exclude={"provider_id"}),
    )
    return SuccessResponse()


@tool("health_check", "Check database connectivity and AI provider availability")
async def _health_check(ctx: ToolContext, params: EmptyArgs):
    return await prd_service.health_check(ctx.database, ctx.settings)


@tool("get_logs", "Return the last lines of a server log file", LogsRequest)
async def _get_logs(ctx: ToolContext, params: LogsRequest) -> str:
    return logs_service.get_logs(ctx.settings.logs_dir, params.file_name, params.lines)
