from .base import Base
from .session import build_engine, build_session_factory
from .models import MAX_ARTICLE_ID, ArticleModel

__all__ = [
    "Base",
    "build_engine",
    "build_session_factory",
    "MAX_ARTICLE_ID",
    "ArticleModel",
]
