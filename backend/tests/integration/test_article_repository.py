"""Integration tests for SQLAlchemyArticleRepository against SQLite."""

from pathlib import Path

import pytest
from sqlalchemy.dialects import mysql
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.schema import CreateTable

from blog.application.interfaces import PAGE_SIZE
from blog.domain.entities import ArticleDraft
from blog.domain.exceptions import StorageError
from blog.infrastructure.database import MAX_ARTICLE_ID, ArticleModel, build_engine, build_session_factory
from blog.infrastructure.database.repositories import SQLAlchemyArticleRepository


async def _seed(repository, count: int) -> list[int]:
    ids = []
    for n in range(count):
        article = await repository.create(ArticleDraft(title=f"Title {n}", body=f"Body {n}"))
        ids.append(article.id)
    return ids


@pytest.mark.asyncio
async def test_create_assigns_id_and_equal_timestamps(repository):
    article = await repository.create(ArticleDraft(title="Hello", body="World"))

    assert article.id is not None
    assert article.created == article.updated

    stored = await repository.get_by_id(article.id)
    assert stored is not None
    assert (stored.title, stored.body) == ("Hello", "World")
    assert stored.created == stored.updated


@pytest.mark.asyncio
async def test_get_by_id_missing_returns_none(repository):
    assert await repository.get_by_id(42) is None
    assert await repository.get_by_id(0) is None
    assert await repository.get_by_id(-1) is None
    assert await repository.get_by_id(MAX_ARTICLE_ID + 1) is None


@pytest.mark.asyncio
async def test_list_from_beginning_returns_newest_page(repository):
    ids = await _seed(repository, 25)
    newest = sorted(ids, reverse=True)[:PAGE_SIZE]

    for cursor in (0, -1, -100, MAX_ARTICLE_ID + 1, 2**40):
        page = await repository.list_by_cursor(cursor)
        assert [a.id for a in page] == newest


@pytest.mark.asyncio
async def test_list_by_cursor_bounds_and_order(repository):
    ids = await _seed(repository, 25)

    for cursor in range(1, max(ids) + 3):
        page = [a.id for a in await repository.list_by_cursor(cursor)]
        below = [i for i in ids if i < cursor]
        assert all(i < cursor for i in page)
        assert page == sorted(page, reverse=True)
        assert len(set(page)) == len(page)
        assert len(page) == min(PAGE_SIZE, len(below))


@pytest.mark.asyncio
async def test_following_cursors_walks_every_article_once(repository):
    ids = await _seed(repository, 23)

    seen: list[int] = []
    cursor = 0
    while True:
        page = await repository.list_by_cursor(cursor)
        if not page:
            break
        seen.extend(a.id for a in page)
        cursor = page[-1].id

    assert seen == sorted(ids, reverse=True)


@pytest.mark.asyncio
async def test_list_empty_table(repository):
    assert await repository.list_by_cursor(0) == []


@pytest.mark.asyncio
async def test_update_refreshes_updated_only(repository):
    created = await repository.create(ArticleDraft(title="Old", body="Old body"))

    updated = await repository.update(created.id, ArticleDraft(title="New", body="New body"))
    assert updated is not None

    stored = await repository.get_by_id(created.id)
    assert (stored.title, stored.body) == ("New", "New body")
    assert stored.created == created.created
    assert stored.updated > stored.created


@pytest.mark.asyncio
async def test_update_missing_returns_none(repository):
    assert await repository.update(7, ArticleDraft(title="T", body="B")) is None
    assert await repository.update(-7, ArticleDraft(title="T", body="B")) is None


@pytest.mark.asyncio
async def test_delete_is_idempotent(repository):
    article = await repository.create(ArticleDraft(title="Bye", body="..."))

    await repository.delete(article.id)
    await repository.delete(article.id)

    assert await repository.get_by_id(article.id) is None


@pytest.mark.asyncio
async def test_deleted_ids_are_not_reused(repository):
    first = await repository.create(ArticleDraft(title="One", body="1"))
    await repository.delete(first.id)

    second = await repository.create(ArticleDraft(title="Two", body="2"))

    assert second.id > first.id


@pytest.mark.asyncio
async def test_two_article_scenario(repository):
    hello = await repository.create(ArticleDraft(title="Hello", body="World"))
    assert [a.title for a in await repository.list_by_cursor(0)] == ["Hello"]

    second = await repository.create(ArticleDraft(title="Second", body="Post"))

    assert [a.title for a in await repository.list_by_cursor(0)] == ["Second", "Hello"]
    assert [a.id for a in await repository.list_by_cursor(second.id)] == [hello.id]


@pytest.mark.asyncio
async def test_store_failures_raise_storage_error(tmp_path: Path):
    # No tables created: every statement fails inside the driver.
    engine = build_engine(f"sqlite:///{tmp_path / 'empty.db'}")
    repository = SQLAlchemyArticleRepository(build_session_factory(engine))
    try:
        with pytest.raises(StorageError):
            await repository.create(ArticleDraft(title="T", body="B"))
        with pytest.raises(StorageError):
            await repository.list_by_cursor(0)
        with pytest.raises(StorageError):
            await repository.get_by_id(1)
        with pytest.raises(StorageError):
            await repository.update(1, ArticleDraft(title="T", body="B"))
        with pytest.raises(StorageError):
            await repository.delete(1)
    finally:
        await engine.dispose()


class CommitFailingSession(AsyncSession):
    """Session whose statements run but whose COMMIT never succeeds."""

    async def commit(self) -> None:
        raise OperationalError("COMMIT", None, Exception("disk I/O error"))


@pytest.mark.asyncio
async def test_failed_commit_rolls_back_every_write(engine, repository):
    seeded = await repository.create(ArticleDraft(title="Seeded", body="Original"))
    failing = SQLAlchemyArticleRepository(
        async_sessionmaker(engine, class_=CommitFailingSession, expire_on_commit=False)
    )

    with pytest.raises(StorageError):
        await failing.create(ArticleDraft(title="Lost", body="Never committed"))
    with pytest.raises(StorageError):
        await failing.update(seeded.id, ArticleDraft(title="Changed", body="Never committed"))
    with pytest.raises(StorageError):
        await failing.delete(seeded.id)

    articles = await repository.list_by_cursor(0)
    assert [(a.id, a.title, a.body) for a in articles] == [(seeded.id, "Seeded", "Original")]
    assert articles[0].updated == seeded.updated


def test_mysql_timestamps_keep_microseconds():
    ddl = str(CreateTable(ArticleModel.__table__).compile(dialect=mysql.dialect()))
    assert ddl.count("DATETIME(6)") == 2
