from .article_repository import PAGE_SIZE, ArticleRepository

__all__ = [
    "PAGE_SIZE",
    "ArticleRepository",
]
