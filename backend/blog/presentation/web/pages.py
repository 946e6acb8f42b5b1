"""Template context for each HTML page."""

from dataclasses import dataclass, field
from datetime import datetime, timezone

from blog.domain.entities import Article


@dataclass
class IndexPage:
    articles: list[Article]
    cursor: int


@dataclass
class ShowPage:
    article: Article


@dataclass
class FormPage:
    """New/edit form shell; the form itself talks to the JSON API."""

    message: str
    article_id: int | None = None
    now: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def api_url(self) -> str:
        if self.article_id is None:
            return "/api/articles"
        return f"/api/articles/{self.article_id}"

    @property
    def method(self) -> str:
        return "POST" if self.article_id is None else "PATCH"
