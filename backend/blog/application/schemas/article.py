"""Pydantic DTOs (Data Transfer Objects) for the Article feature."""

from datetime import datetime

from pydantic import BaseModel, Field, StrictStr


class ArticleForm(BaseModel):
    """Raw article fields as submitted by the client.

    Only the shape is checked here (strings or absent); the content rules
    live in ``blog.domain.validation``.
    """

    title: StrictStr = Field("", examples=["Hello"])
    body: StrictStr = Field("", examples=["World"])


class ArticleResponse(BaseModel):
    """Schema returned to the client."""

    id: int
    title: str
    body: str
    created: datetime
    updated: datetime

    model_config = {"from_attributes": True}


class ArticleWriteOutput(BaseModel):
    """Envelope returned by the create and update endpoints."""

    article: ArticleResponse | None = None
    message: str = ""
    validation_errors: list[str] = Field(default_factory=list)


class ArticlePreview(BaseModel):
    """Rendered body returned by the preview endpoint."""

    html: str
