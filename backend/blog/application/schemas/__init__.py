from .article import ArticleForm, ArticlePreview, ArticleResponse, ArticleWriteOutput

__all__ = [
    "ArticleForm",
    "ArticlePreview",
    "ArticleResponse",
    "ArticleWriteOutput",
]
