"""Abstract repository interfaces (ports): define the contract, not the implementation."""

from abc import ABC, abstractmethod

from blog.domain.entities import Article, ArticleDraft

PAGE_SIZE = 10


class ArticleRepository(ABC):
    """Port for article persistence: implemented in the infrastructure layer.

    Implementations raise ``StorageError`` on any store failure; "no such
    row" is never an error and is reported as ``None``.
    """

    @abstractmethod
    async def create(self, draft: ArticleDraft) -> Article:
        """Persist a new article and return it with the generated ID."""
        ...

    @abstractmethod
    async def list_by_cursor(self, cursor: int = 0) -> list[Article]:
        """Return up to PAGE_SIZE articles with ``id < cursor``, newest first.

        A cursor of 0 or less starts from the most recent article.
        """
        ...

    @abstractmethod
    async def get_by_id(self, article_id: int) -> Article | None:
        """Retrieve a single article by its ID."""
        ...

    @abstractmethod
    async def update(self, article_id: int, draft: ArticleDraft) -> Article | None:
        """Overwrite title/body of an existing article. None if it does not exist."""
        ...

    @abstractmethod
    async def delete(self, article_id: int) -> None:
        """Delete an article. Deleting a missing ID is a no-op."""
        ...
