"""Concrete repository implementation backed by SQLAlchemy.

Each call opens its own session from the shared session factory. Writes
run in a transaction that is committed on success and rolled back on any
failure; nothing is held open between calls.
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from blog.application.interfaces import PAGE_SIZE, ArticleRepository
from blog.domain.entities import Article, ArticleDraft
from blog.domain.exceptions import StorageError
from blog.infrastructure.database.models import MAX_ARTICLE_ID, ArticleModel

logger = logging.getLogger(__name__)


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes even for timezone-aware columns.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _is_storable_id(article_id: int) -> bool:
    return 0 < article_id <= MAX_ARTICLE_ID


class SQLAlchemyArticleRepository(ArticleRepository):
    """Implements the ArticleRepository port using SQLAlchemy async sessions."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    def _to_entity(self, model: ArticleModel) -> Article:
        """Map ORM model → domain entity."""
        return Article(
            id=model.id,
            title=model.title,
            body=model.body,
            created=_as_utc(model.created),
            updated=_as_utc(model.updated),
        )

    @asynccontextmanager
    async def _transaction(self, operation: str) -> AsyncIterator[AsyncSession]:
        async with self._session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception as exc:
                await session.rollback()
                if isinstance(exc, SQLAlchemyError):
                    logger.exception("Article %s failed, transaction rolled back", operation)
                    raise StorageError(operation) from exc
                raise

    @asynccontextmanager
    async def _read(self, operation: str) -> AsyncIterator[AsyncSession]:
        async with self._session_factory() as session:
            try:
                yield session
            except SQLAlchemyError as exc:
                logger.exception("Article %s failed", operation)
                raise StorageError(operation) from exc

    async def create(self, draft: ArticleDraft) -> Article:
        now = datetime.now(timezone.utc)
        model = ArticleModel(title=draft.title, body=draft.body, created=now, updated=now)
        async with self._transaction("create") as session:
            session.add(model)
            await session.flush()
            article = self._to_entity(model)
        return article

    async def list_by_cursor(self, cursor: int = 0) -> list[Article]:
        stmt = select(ArticleModel).order_by(ArticleModel.id.desc()).limit(PAGE_SIZE)
        # cursor <= 0, or one above every possible id, means "from the newest"
        if _is_storable_id(cursor):
            stmt = stmt.where(ArticleModel.id < cursor)
        async with self._read("list") as session:
            result = await session.execute(stmt)
            return [self._to_entity(row) for row in result.scalars().all()]

    async def get_by_id(self, article_id: int) -> Article | None:
        if not _is_storable_id(article_id):
            return None
        async with self._read("get") as session:
            model = await session.get(ArticleModel, article_id)
            return self._to_entity(model) if model else None

    async def update(self, article_id: int, draft: ArticleDraft) -> Article | None:
        if not _is_storable_id(article_id):
            return None
        async with self._transaction("update") as session:
            model = await session.get(ArticleModel, article_id)
            if model is None:
                return None
            model.title = draft.title
            model.body = draft.body
            model.updated = datetime.now(timezone.utc)
            await session.flush()
            article = self._to_entity(model)
        return article

    async def delete(self, article_id: int) -> None:
        if not _is_storable_id(article_id):
            return None
        async with self._transaction("delete") as session:
            result = await session.execute(
                delete(ArticleModel).where(ArticleModel.id == article_id)
            )
            logger.debug("Delete of article %d affected %d row(s)", article_id, result.rowcount)
