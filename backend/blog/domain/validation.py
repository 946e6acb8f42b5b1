"""Article validation rules.

Validation is a pure function: it never raises and never touches storage.
Callers receive an ``ArticleValidation`` and decide the HTTP status.
"""

from dataclasses import dataclass, field

from blog.domain.entities import ArticleDraft

TITLE_MAX_LENGTH = 255


@dataclass(frozen=True)
class ArticleValidation:
    """Outcome of validating a submitted article.

    Exactly one of ``draft`` / ``errors`` is meaningful: ``draft`` is set
    when the input is acceptable, otherwise ``errors`` holds one message per
    offending field.
    """

    draft: ArticleDraft | None = None
    errors: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return self.draft is not None


def validate_article(title: str, body: str) -> ArticleValidation:
    """Check the required-field and length rules for a submitted article."""
    title = (title or "").strip()
    body = (body or "").strip()

    errors: list[str] = []
    if not title:
        errors.append("Title is required.")
    elif len(title) > TITLE_MAX_LENGTH:
        errors.append(f"Title must be at most {TITLE_MAX_LENGTH} characters.")
    if not body:
        errors.append("Body is required.")

    if errors:
        return ArticleValidation(errors=errors)
    return ArticleValidation(draft=ArticleDraft(title=title, body=body))
