from .article_service import ArticleService, ArticleWriteResult, next_cursor

__all__ = [
    "ArticleService",
    "ArticleWriteResult",
    "next_cursor",
]
