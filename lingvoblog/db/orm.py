"""SQLAlchemy ORM models mapping to the blog tables."""

from __future__ import annotations

import uuid
from datetime import UTC, datetime

from sqlalchemy import (
    Boolean,
    ForeignKey,
    Index,
    Integer,
    Text,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def _utcnow_str() -> str:
    return datetime.now(UTC).strftime("%Y-%m-%dT%H:%M:%S.%fZ")


def _new_id() -> str:
    return str(uuid.uuid4())


class Base(DeclarativeBase):
    pass


class CategoryRow(Base):
    __tablename__ = "categories"

    id: Mapped[str] = mapped_column(Text, primary_key=True, default=_new_id)
    slug: Mapped[str] = mapped_column(Text, nullable=False, unique=True)
    name_uz: Mapped[str] = mapped_column(Text, nullable=False)
    name_ru: Mapped[str] = mapped_column(Text, nullable=False)
    name_en: Mapped[str] = mapped_column(Text, nullable=False)
    description_uz: Mapped[str | None] = mapped_column(Text, nullable=True, default=None)
    description_ru: Mapped[str | None] = mapped_column(Text, nullable=True, default=None)
    description_en: Mapped[str | None] = mapped_column(Text, nullable=True, default=None)
    color: Mapped[str | None] = mapped_column(Text, nullable=True, default=None)
    icon: Mapped[str | None] = mapped_column(Text, nullable=True, default=None)

    created_at: Mapped[str] = mapped_column(Text, nullable=False, default=_utcnow_str)
    updated_at: Mapped[str] = mapped_column(Text, nullable=False, default=_utcnow_str)


class PostRow(Base):
    __tablename__ = "posts"

    id: Mapped[str] = mapped_column(Text, primary_key=True, default=_new_id)
    slug: Mapped[str] = mapped_column(Text, nullable=False, unique=True)

    title_uz: Mapped[str] = mapped_column(Text, nullable=False)
    title_ru: Mapped[str] = mapped_column(Text, nullable=False)
    title_en: Mapped[str] = mapped_column(Text, nullable=False)
    content_uz: Mapped[str] = mapped_column(Text, nullable=False)
    content_ru: Mapped[str] = mapped_column(Text, nullable=False)
    content_en: Mapped[str] = mapped_column(Text, nullable=False)
    excerpt_uz: Mapped[str | None] = mapped_column(Text, nullable=True, default=None)
    excerpt_ru: Mapped[str | None] = mapped_column(Text, nullable=True, default=None)
    excerpt_en: Mapped[str | None] = mapped_column(Text, nullable=True, default=None)

    category_id: Mapped[str | None] = mapped_column(
        Text, ForeignKey("categories.id"), nullable=True, default=None
    )
    featured_image: Mapped[str | None] = mapped_column(Text, nullable=True, default=None)
    tags_json: Mapped[str] = mapped_column(Text, nullable=False, default="[]")
    reading_time: Mapped[int] = mapped_column(Integer, nullable=False, default=5)

    # Publication
    published: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    featured: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    published_at: Mapped[str | None] = mapped_column(Text, nullable=True, default=None)

    # Per-language SEO
    meta_title_uz: Mapped[str | None] = mapped_column(Text, nullable=True, default=None)
    meta_title_ru: Mapped[str | None] = mapped_column(Text, nullable=True, default=None)
    meta_title_en: Mapped[str | None] = mapped_column(Text, nullable=True, default=None)
    meta_description_uz: Mapped[str | None] = mapped_column(Text, nullable=True, default=None)
    meta_description_ru: Mapped[str | None] = mapped_column(Text, nullable=True, default=None)
    meta_description_en: Mapped[str | None] = mapped_column(Text, nullable=True, default=None)
    focus_keywords_json: Mapped[str] = mapped_column(Text, nullable=False, default="[]")

    views: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    likes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    created_at: Mapped[str] = mapped_column(Text, nullable=False, default=_utcnow_str)
    updated_at: Mapped[str] = mapped_column(Text, nullable=False, default=_utcnow_str)

    __table_args__ = (Index("idx_posts_published", "published", "published_at"),)


class SiteSettingRow(Base):
    __tablename__ = "site_settings"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    key: Mapped[str] = mapped_column(Text, nullable=False, unique=True)
    value: Mapped[str | None] = mapped_column(Text, nullable=True, default=None)
    created_at: Mapped[str] = mapped_column(Text, nullable=False, default=_utcnow_str)
    updated_at: Mapped[str] = mapped_column(Text, nullable=False, default=_utcnow_str)


class SeoKeywordRow(Base):
    __tablename__ = "seo_keywords"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    keyword: Mapped[str] = mapped_column(Text, nullable=False)
    language: Mapped[str | None] = mapped_column(Text, nullable=True, default=None)
    priority: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    keyword_group: Mapped[str | None] = mapped_column(Text, nullable=True, default=None)
    url: Mapped[str | None] = mapped_column(Text, nullable=True, default=None)
    created_at: Mapped[str] = mapped_column(Text, nullable=False, default=_utcnow_str)
    updated_at: Mapped[str] = mapped_column(Text, nullable=False, default=_utcnow_str)

    __table_args__ = (Index("idx_seo_keywords_language", "language", "priority"),)
