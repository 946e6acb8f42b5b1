"""Shared fixtures: a throwaway SQLite database per test."""

from collections.abc import AsyncIterator, Callable
from pathlib import Path

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine

from blog.config import Settings
from blog.infrastructure.database import Base, build_engine, build_session_factory
from blog.infrastructure.database.repositories import SQLAlchemyArticleRepository
from blog.main import create_app

CREDENTIALS = ("admin", "s3cret")


def _sqlite_url(tmp_path: Path) -> str:
    return f"sqlite:///{tmp_path / 'blog.db'}"


@pytest.fixture
def make_settings(tmp_path: Path) -> Callable[..., Settings]:
    def _make(**overrides) -> Settings:
        values = {
            "database_url": _sqlite_url(tmp_path),
            "basic_username": CREDENTIALS[0],
            "basic_password": CREDENTIALS[1],
            "log_level": "WARNING",
        }
        values.update(overrides)
        return Settings(_env_file=None, **values)

    return _make


@pytest_asyncio.fixture
async def engine(tmp_path: Path) -> AsyncIterator[AsyncEngine]:
    engine = build_engine(_sqlite_url(tmp_path))
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def repository(engine: AsyncEngine) -> SQLAlchemyArticleRepository:
    return SQLAlchemyArticleRepository(build_session_factory(engine))


@pytest.fixture
def app(make_settings) -> FastAPI:
    return create_app(make_settings())


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncIterator[AsyncClient]:
    # ASGITransport does not send lifespan events; run the lifespan by hand.
    async with app.router.lifespan_context(app):
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as c:
            yield c
