from .article import MAX_ARTICLE_ID, ArticleModel

__all__ = [
    "MAX_ARTICLE_ID",
    "ArticleModel",
]
