"""SQLAlchemy ORM model for the Article entity."""

from datetime import datetime

from sqlalchemy import DateTime, Integer, String, Text
from sqlalchemy.dialects import mysql
from sqlalchemy.orm import Mapped, mapped_column

from blog.infrastructure.database.base import Base

# Largest value the INTEGER id column can hold.
MAX_ARTICLE_ID = 2**31 - 1

# MySQL DATETIME drops fractional seconds unless given a precision.
Timestamp = DateTime(timezone=True).with_variant(mysql.DATETIME(fsp=6), "mysql")


class ArticleModel(Base):
    """ORM model: maps to the 'articles' table."""

    __tablename__ = "articles"
    # SQLite would otherwise hand out the id of a deleted last row again.
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    body: Mapped[str] = mapped_column(Text, nullable=False)
    created: Mapped[datetime] = mapped_column(Timestamp, nullable=False)
    updated: Mapped[datetime] = mapped_column(Timestamp, nullable=False)

    def __repr__(self) -> str:
        return f"<ArticleModel(id={self.id}, title='{self.title}')>"
