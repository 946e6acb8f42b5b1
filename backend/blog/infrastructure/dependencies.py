"""FastAPI dependency injection: wires infrastructure to application layer.

The repository (and the connection pool behind it) is built once by the
application factory and kept on ``app.state``; requests only borrow it.
"""

from collections.abc import AsyncGenerator

from fastapi import Depends, Request

from blog.application.interfaces import ArticleRepository
from blog.application.services import ArticleService
from blog.config import Settings


def get_app_settings(request: Request) -> Settings:
    """Settings the running application was created with."""
    return request.app.state.settings


def get_article_repository(request: Request) -> ArticleRepository:
    return request.app.state.article_repository


async def get_article_service(
    repository: ArticleRepository = Depends(get_article_repository),
) -> AsyncGenerator[ArticleService, None]:
    """Provides an ArticleService instance with its repository wired up."""
    yield ArticleService(repository)
