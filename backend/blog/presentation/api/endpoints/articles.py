"""Article JSON endpoints.

Status mapping: 400 unparseable body or identifier, 404 unknown article,
422 validation failure, 500 storage failure. Storage failures are logged
by the repository; responses never carry their detail.
"""

import logging

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from blog.application.schemas import ArticleForm, ArticlePreview, ArticleResponse, ArticleWriteOutput
from blog.application.services import ArticleService, ArticleWriteResult
from blog.domain.exceptions import EntityNotFoundError, StorageError
from blog.infrastructure.dependencies import get_article_service
from blog.infrastructure.rendering.markdown_renderer import render_markdown
from blog.presentation.auth import require_credentials
from blog.presentation.csrf import require_same_origin
from blog.presentation.params import get_article_id, get_cursor

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/articles", tags=["Articles"])

# Order matters: the origin check runs before the credential check.
_WRITE_GUARDS = [Depends(require_same_origin), Depends(require_credentials)]

_FORM_CONTENT_TYPES = ("multipart/form-data", "application/x-www-form-urlencoded")


# ── Helpers ──────────────────────────────────────────────────────────

async def _read_form(request: Request) -> ArticleForm | None:
    """Decode a JSON or form-encoded article body; None when it cannot be read."""
    content_type = request.headers.get("content-type", "")
    try:
        if content_type.startswith(_FORM_CONTENT_TYPES):
            payload = dict(await request.form())
        else:
            payload = await request.json()
        return ArticleForm.model_validate(payload)
    except ValueError as exc:
        logger.warning("Unparseable article payload on %s %s: %s", request.method, request.url.path, exc)
        return None


def _output(status_code: int, **fields) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ArticleWriteOutput(**fields).model_dump(mode="json"),
    )


def _written(result: ArticleWriteResult) -> ArticleWriteOutput | JSONResponse:
    if result.validation_errors:
        return _output(422, validation_errors=result.validation_errors)
    return ArticleWriteOutput(
        article=ArticleResponse.model_validate(result.article, from_attributes=True)
    )


# ── Endpoints ────────────────────────────────────────────────────────

@router.get("", response_model=list[ArticleResponse])
async def list_articles(
    cursor: int = Depends(get_cursor),
    service: ArticleService = Depends(get_article_service),
):
    """Up to ten articles with an ID below ``cursor``, newest first."""
    try:
        articles = await service.list_articles(cursor)
    except StorageError:
        return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content="")
    return [ArticleResponse.model_validate(a, from_attributes=True) for a in articles]


@router.post(
    "",
    response_model=ArticleWriteOutput,
    dependencies=_WRITE_GUARDS,
)
async def create_article(
    request: Request,
    service: ArticleService = Depends(get_article_service),
):
    """Create a new article."""
    form = await _read_form(request)
    if form is None:
        return _output(status.HTTP_400_BAD_REQUEST)
    try:
        result = await service.create_article(form)
    except StorageError:
        return _output(status.HTTP_500_INTERNAL_SERVER_ERROR)
    return _written(result)


@router.patch(
    "/{article_id}",
    response_model=ArticleWriteOutput,
    dependencies=_WRITE_GUARDS,
)
async def update_article(
    request: Request,
    article_id: int = Depends(get_article_id),
    service: ArticleService = Depends(get_article_service),
):
    """Replace the title and body of an existing article."""
    form = await _read_form(request)
    if form is None:
        return _output(status.HTTP_400_BAD_REQUEST)
    try:
        result = await service.update_article(article_id, form)
    except EntityNotFoundError as e:
        logger.info("Update of missing article %d", article_id)
        return _output(status.HTTP_404_NOT_FOUND, message=str(e))
    except StorageError:
        return _output(status.HTTP_500_INTERNAL_SERVER_ERROR)
    return _written(result)


@router.delete(
    "/{article_id}",
    response_model=str,
    dependencies=_WRITE_GUARDS,
)
async def delete_article(
    article_id: int = Depends(get_article_id),
    service: ArticleService = Depends(get_article_service),
):
    """Delete an article by ID. Unknown IDs are deleted trivially."""
    try:
        await service.delete_article(article_id)
    except StorageError:
        return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content="")
    return f"Article {article_id} is deleted."


@router.post(
    "/preview",
    response_model=ArticlePreview,
    dependencies=_WRITE_GUARDS,
)
async def preview_article(request: Request):
    """Render a draft body as it will appear on the article page."""
    form = await _read_form(request)
    if form is None:
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"html": ""})
    return ArticlePreview(html=render_markdown(form.body))
