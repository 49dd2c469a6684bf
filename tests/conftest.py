"""
테스트 공통 fixture
- SQL 저장소: 메모리 SQLite (aiosqlite), TEST_DATABASE_URL 이 있으면 PostgreSQL 도 함께 실행
- HTTP: httpx AsyncClient + ASGITransport
"""
import os
from contextlib import asynccontextmanager

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.engine import make_url

from common.config import Settings
from common.database.base_postgres import PostgresBase
from common.database.postgres_recipe import create_recipe_engine, create_session_factory, init_recipe_schema
from gateway.main import create_app
from services.recipe.crud.recipe_crud import SqlRecipeRepository
from services.recipe.crud.recipe_memory_crud import InMemoryRecipeRepository

SQLITE_URL = "sqlite+aiosqlite://"
TEST_DATABASE_URL = os.getenv("TEST_DATABASE_URL")
DATABASE_URLS = [SQLITE_URL] + ([TEST_DATABASE_URL] if TEST_DATABASE_URL else [])


def make_settings(database_url: str = SQLITE_URL, **overrides) -> Settings:
    return Settings(database_url=database_url, _env_file=None, **overrides)


def backend_id(url: str) -> str:
    return make_url(url).get_backend_name()


@asynccontextmanager
async def open_sql_engine(database_url: str):
    engine = create_recipe_engine(make_settings(database_url))
    await init_recipe_schema(engine)
    try:
        yield engine
    finally:
        async with engine.begin() as conn:
            await conn.run_sync(PostgresBase.metadata.drop_all)
        await engine.dispose()


@pytest_asyncio.fixture(params=DATABASE_URLS, ids=backend_id)
async def engine(request):
    async with open_sql_engine(request.param) as engine:
        yield engine


@pytest.fixture
def session_factory(engine):
    return create_session_factory(engine)


@pytest.fixture
def sql_repository(session_factory):
    return SqlRecipeRepository(session_factory)


@pytest_asyncio.fixture(params=["memory", "sql"])
async def repository(request):
    """계약 테스트용: 메모리 저장소와 SQL 저장소 양쪽에서 실행"""
    if request.param == "memory":
        yield InMemoryRecipeRepository()
        return
    async with open_sql_engine(SQLITE_URL) as engine:
        yield SqlRecipeRepository(create_session_factory(engine))


@pytest_asyncio.fixture
async def client(repository):
    app = create_app(make_settings(), repository=repository)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
