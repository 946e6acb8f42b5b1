"""Application service (use case) for Article operations."""

import logging
from dataclasses import dataclass, field

from blog.application.interfaces import ArticleRepository
from blog.application.schemas import ArticleForm
from blog.domain.entities import Article
from blog.domain.exceptions import EntityNotFoundError
from blog.domain.validation import validate_article

logger = logging.getLogger(__name__)


@dataclass
class ArticleWriteResult:
    """Either the stored article or the validation messages that blocked the write."""

    article: Article | None = None
    validation_errors: list[str] = field(default_factory=list)


def next_cursor(articles: list[Article]) -> int:
    """Cursor for the page after ``articles``: the smallest ID shown, or 0 at the end."""
    if not articles:
        return 0
    return articles[-1].id or 0


class ArticleService:
    """Orchestrates article business logic. Depends on the repository port (DI)."""

    def __init__(self, repository: ArticleRepository):
        self._repository = repository

    async def get_article(self, article_id: int) -> Article:
        article = await self._repository.get_by_id(article_id)
        if article is None:
            raise EntityNotFoundError("Article", article_id)
        return article

    async def list_articles(self, cursor: int = 0) -> list[Article]:
        return await self._repository.list_by_cursor(cursor)

    async def create_article(self, form: ArticleForm) -> ArticleWriteResult:
        validation = validate_article(form.title, form.body)
        if not validation.is_valid:
            logger.info("Rejected new article: %s", "; ".join(validation.errors))
            return ArticleWriteResult(validation_errors=validation.errors)

        article = await self._repository.create(validation.draft)
        logger.info("Created article %d", article.id)
        return ArticleWriteResult(article=article)

    async def update_article(self, article_id: int, form: ArticleForm) -> ArticleWriteResult:
        validation = validate_article(form.title, form.body)
        if not validation.is_valid:
            logger.info(
                "Rejected update of article %d: %s",
                article_id,
                "; ".join(validation.errors),
            )
            return ArticleWriteResult(validation_errors=validation.errors)

        article = await self._repository.update(article_id, validation.draft)
        if article is None:
            raise EntityNotFoundError("Article", article_id)
        logger.info("Updated article %d", article_id)
        return ArticleWriteResult(article=article)

    async def delete_article(self, article_id: int) -> None:
        await self._repository.delete(article_id)
        logger.info("Deleted article %d", article_id)
