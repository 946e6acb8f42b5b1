from .article import Article, ArticleDraft

__all__ = [
    "Article",
    "ArticleDraft",
]
