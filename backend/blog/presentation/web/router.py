"""Server-rendered article pages."""

import logging
from pathlib import Path

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.responses import RedirectResponse
from fastapi.templating import Jinja2Templates

from blog.application.services import ArticleService, next_cursor
from blog.domain.exceptions import EntityNotFoundError, StorageError
from blog.infrastructure.dependencies import get_article_service
from blog.infrastructure.rendering.markdown_renderer import render_markdown
from blog.presentation.auth import require_credentials
from blog.presentation.params import get_article_id
from blog.presentation.web.pages import FormPage, IndexPage, ShowPage

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"
STATIC_DIR = Path(__file__).resolve().parent / "static"

templates = Jinja2Templates(directory=TEMPLATES_DIR)
templates.env.filters["markdown"] = render_markdown

router = APIRouter(tags=["Pages"], include_in_schema=False)


@router.get("/articles")
async def article_index_redirect():
    return RedirectResponse("/", status_code=status.HTTP_308_PERMANENT_REDIRECT)


@router.get("/")
async def article_index(
    request: Request,
    service: ArticleService = Depends(get_article_service),
):
    try:
        articles = await service.list_articles(0)
    except StorageError:
        return Response(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)
    page = IndexPage(articles=articles, cursor=next_cursor(articles))
    return templates.TemplateResponse(request, "article/index.html", {"page": page})


@router.get("/articles/new", dependencies=[Depends(require_credentials)])
async def article_new(request: Request):
    page = FormPage(message="New article")
    return templates.TemplateResponse(request, "article/form.html", {"page": page})


@router.get("/articles/{article_id}")
async def article_show(
    request: Request,
    article_id: int = Depends(get_article_id),
    service: ArticleService = Depends(get_article_service),
):
    try:
        article = await service.get_article(article_id)
    except EntityNotFoundError as e:
        logger.info("Page requested for missing article: %s", e)
        return templates.TemplateResponse(
            request,
            "article/not_found.html",
            {"article_id": article_id},
            status_code=status.HTTP_404_NOT_FOUND,
        )
    except StorageError:
        return Response(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)
    return templates.TemplateResponse(request, "article/show.html", {"page": ShowPage(article=article)})


@router.get("/articles/{article_id}/edit", dependencies=[Depends(require_credentials)])
async def article_edit(
    request: Request,
    article_id: int = Depends(get_article_id),
):
    page = FormPage(message="Edit article", article_id=article_id)
    return templates.TemplateResponse(request, "article/form.html", {"page": page})
