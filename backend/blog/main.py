"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.staticfiles import StaticFiles
from sqlalchemy import text

from blog.config import Settings, get_settings
from blog.infrastructure.database import Base, build_engine, build_session_factory
from blog.infrastructure.database.repositories import SQLAlchemyArticleRepository
from blog.infrastructure.logging.log_config import setup_logging
from blog.presentation.api.router import router as api_router
from blog.presentation.web.router import STATIC_DIR, router as pages_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan: check the database, create tables, dispose the pool."""
    settings: Settings = app.state.settings
    engine = app.state.engine
    setup_logging(settings)

    # An unreachable database aborts startup.
    async with engine.begin() as conn:
        await conn.execute(text("SELECT 1"))
        if settings.create_tables:
            await conn.run_sync(Base.metadata.create_all)
    logger.info("Database connection succeeded")

    yield

    await engine.dispose()


def create_app(settings: Settings | None = None) -> FastAPI:
    """Factory function that builds and configures the FastAPI application."""
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_title,
        version=settings.app_version,
        lifespan=lifespan,
    )

    # One engine (and pool) per process, shared by every request.
    engine = build_engine(settings.database_url)
    app.state.settings = settings
    app.state.engine = engine
    app.state.article_repository = SQLAlchemyArticleRepository(build_session_factory(engine))

    app.add_middleware(GZipMiddleware, minimum_size=1000)

    app.mount("/css", StaticFiles(directory=STATIC_DIR / "css"), name="css")
    app.mount("/js", StaticFiles(directory=STATIC_DIR / "js"), name="js")

    app.include_router(api_router)
    app.include_router(pages_router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "blog.main:app",
        host="0.0.0.0",
        port=8080,
        reload=True,
    )
