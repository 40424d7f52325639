"""FastAPI application entrypoint."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request

from prd_creator.config import Settings, settings as default_settings
from prd_creator.database import Database
from prd_creator.exceptions import FatalProviderError
from prd_creator.logging_config import configure_logging
from prd_creator.providers import ProviderId, create_provider
from prd_creator.routers import templates, tools
from prd_creator.schemas.provider import ProviderConfig
from prd_creator.schemas.system import HealthReport
from prd_creator.services import prd_service, template_service

logger = logging.getLogger(__name__)


def create_app(app_settings: Settings | None = None) -> FastAPI:
    app_settings = app_settings or default_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Startup
        configure_logging(app_settings)
        logger.info("Starting PRD Creator server ...")
        db = Database(app_settings.resolved_database_url, echo=app_settings.echo_sql)
        await db.init()
        app.state.db = db
        app.state.settings = app_settings

        try:
            # The fallback provider must always be constructible
            try:
                create_provider(ProviderId.TEMPLATE, ProviderConfig(id="template"), db.session_factory)
            except Exception as exc:
                logger.critical("Template fallback provider cannot be created: %s", exc)
                raise FatalProviderError(f"Broken install: {exc}") from exc

            async with db.session() as session:
                added = await template_service.initialize_defaults(session, app_settings.seed_templates_dir)
                if added:
                    logger.info("Seeded %d default templates: %s", len(added), added)

            logger.info("PRD Creator server ready")
            yield
        finally:
            # Shutdown
            await db.dispose()

    app = FastAPI(
        title="PRD Creator",
        description="Generate, validate and manage Product Requirements Documents",
        version="0.1.0",
        lifespan=lifespan,
    )

    # Mount routers
    app.include_router(tools.router, prefix="/api/tools", tags=["tools"])
    app.include_router(templates.router, prefix="/api/templates", tags=["templates"])

    @app.get("/health", response_model=HealthReport)
    async def health(request: Request):
        return await prd_service.health_check(request.app.state.db, request.app.state.settings)

    return app


app = create_app()
