"""Parsing of integer path and query parameters (article IDs, cursors)."""

import logging
import re

from fastapi import Depends, HTTPException, Query, status

from blog.config import Settings
from blog.infrastructure.dependencies import get_app_settings

logger = logging.getLogger(__name__)

# ASCII digits only; \d would also accept other scripts' digits.
_INTEGER = re.compile(r"[+-]?[0-9]+")


def parse_int_param(raw: str, name: str, legacy: bool = False) -> int:
    """Parse a decimal integer parameter.

    Malformed input raises a 400, or reads as 0 when ``legacy`` is set.
    """
    if _INTEGER.fullmatch(raw):
        try:
            return int(raw)
        except ValueError:
            # Longer than the interpreter's int conversion limit.
            pass
    if legacy:
        logger.info("Malformed %s %r read as 0", name, raw)
        return 0
    logger.info("Rejected malformed %s %r", name, raw)
    raise HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail=f"Malformed {name}: {raw!r}",
    )


def get_article_id(
    article_id: str,
    settings: Settings = Depends(get_app_settings),
) -> int:
    """Article ID taken from the ``{article_id}`` path segment."""
    return parse_int_param(article_id, "article id", legacy=settings.legacy_param_parsing)


def get_cursor(
    cursor: str | None = Query(default=None),
    settings: Settings = Depends(get_app_settings),
) -> int:
    """Pagination cursor from the query string; absent means "from the newest"."""
    if not cursor:
        return 0
    return parse_int_param(cursor, "cursor", legacy=settings.legacy_param_parsing)
