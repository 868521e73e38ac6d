from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from sqlalchemy import (
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from news_api.config import settings
from news_api.database import Base


# ---------------------------------------------------------------------------
# Topic
# ---------------------------------------------------------------------------
class Topic(Base):
    __tablename__ = "topics"

    slug: Mapped[str] = mapped_column(String(20), primary_key=True)
    description: Mapped[str] = mapped_column(Text, nullable=False)

    articles: Mapped[List["Article"]] = relationship(
        "Article", back_populates="topic_ref", lazy="raise"
    )


# ---------------------------------------------------------------------------
# User
# ---------------------------------------------------------------------------
class User(Base):
    __tablename__ = "users"

    username: Mapped[str] = mapped_column(String(100), primary_key=True)
    name: Mapped[str] = mapped_column(String(150), nullable=False)
    avatar_url: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)

    # Relationships: lazy="raise" keeps every load an explicit query in services
    articles: Mapped[List["Article"]] = relationship(
        "Article", back_populates="author_ref", lazy="raise"
    )


# ---------------------------------------------------------------------------
# Article
# ---------------------------------------------------------------------------
class Article(Base):
    __tablename__ = "articles"

    __table_args__ = (
        # Topic-filtered listing sorted by date
        Index("ix_articles_topic_created_at", "topic", "created_at"),
        Index("ix_articles_author", "author"),
    )

    article_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(300), nullable=False)
    topic: Mapped[str] = mapped_column(
        String(20), ForeignKey("topics.slug"), nullable=False
    )
    author: Mapped[str] = mapped_column(
        String(100), ForeignKey("users.username"), nullable=False
    )
    body: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False, index=True
    )
    votes: Mapped[int] = mapped_column(Integer, default=0, server_default="0", nullable=False)
    article_img_url: Mapped[str] = mapped_column(
        String(1000), default=settings.DEFAULT_ARTICLE_IMG_URL, nullable=False
    )

    topic_ref: Mapped["Topic"] = relationship("Topic", back_populates="articles", lazy="raise")
    author_ref: Mapped["User"] = relationship("User", back_populates="articles", lazy="raise")
    # Comments go with the article via ON DELETE CASCADE in the database.
    comments: Mapped[List["Comment"]] = relationship(
        "Comment", back_populates="article", lazy="raise", passive_deletes=True
    )


# ---------------------------------------------------------------------------
# Comment
# ---------------------------------------------------------------------------
class Comment(Base):
    __tablename__ = "comments"

    __table_args__ = (
        # Per-article comment listing sorted by date
        Index("ix_comments_article_id_created_at", "article_id", "created_at"),
    )

    comment_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    body: Mapped[str] = mapped_column(Text, nullable=False)
    article_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("articles.article_id", ondelete="CASCADE"), nullable=False
    )
    author: Mapped[str] = mapped_column(
        String(100), ForeignKey("users.username"), nullable=False
    )
    votes: Mapped[int] = mapped_column(Integer, default=0, server_default="0", nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    article: Mapped["Article"] = relationship("Article", back_populates="comments", lazy="raise")
