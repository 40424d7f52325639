"""Shared fixtures: a throwaway SQLite store per test and an in-process client."""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from prd_creator.config import Settings
from prd_creator.database import Database
from prd_creator.main import create_app
from prd_creator.tools import ToolContext

PROVIDER_ENV = (
    "OPENAI_API_KEY", "OPENAI_API_BASE_URL", "OPENAI_MODEL",
    "ANTHROPIC_API_KEY", "ANTHROPIC_API_BASE_URL", "ANTHROPIC_MODEL",
    "GEMINI_API_KEY", "GEMINI_MODEL",
    "LOCAL_MODEL_API_URL", "LOCAL_MODEL_NAME",
    "DEFAULT_AI_PROVIDER", "DB_PATH",
)


@pytest.fixture
def settings(tmp_path, monkeypatch) -> Settings:
    for var in PROVIDER_ENV:
        monkeypatch.delenv(var, raising=False)
    return Settings(
        _env_file=None,
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        data_dir=tmp_path / "data",
        logs_dir=tmp_path / "logs",
    )


@pytest_asyncio.fixture
async def database(settings):
    db = Database(settings.resolved_database_url)
    await db.init()
    yield db
    await db.dispose()


@pytest_asyncio.fixture
async def session(database):
    async with database.session() as s:
        yield s


@pytest.fixture
def ctx(database, settings) -> ToolContext:
    return ToolContext(database=database, settings=settings)


@pytest_asyncio.fixture
async def client(settings):
    app = create_app(settings)
    async with app.router.lifespan_context(app):
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
            yield ac
