"""Post and category models."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

Language = Literal["uz", "ru", "en"]

REQUIRED_POST_FIELDS: tuple[str, ...] = (
    "title_uz",
    "title_ru",
    "title_en",
    "content_uz",
    "content_ru",
    "content_en",
    "slug",
)

_OPTIONAL_TEXT_FIELDS = (
    "excerpt_uz",
    "excerpt_ru",
    "excerpt_en",
    "category_id",
    "featured_image",
    "meta_title_uz",
    "meta_title_ru",
    "meta_title_en",
    "meta_description_uz",
    "meta_description_ru",
    "meta_description_en",
)


class PostCreate(BaseModel):
    """Incoming post payload with the publisher's defaults applied."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    title_uz: str
    title_ru: str
    title_en: str
    content_uz: str
    content_ru: str
    content_en: str
    slug: str = Field(pattern=r"^[a-z0-9]+(?:-[a-z0-9]+)*$")

    excerpt_uz: str | None = None
    excerpt_ru: str | None = None
    excerpt_en: str | None = None
    category_id: str | None = None
    featured_image: str | None = None
    tags: list[str] = Field(default_factory=list)
    reading_time: int = 5
    published: bool = False
    featured: bool = False

    meta_title_uz: str | None = None
    meta_title_ru: str | None = None
    meta_title_en: str | None = None
    meta_description_uz: str | None = None
    meta_description_ru: str | None = None
    meta_description_en: str | None = None
    focus_keywords: list[str] = Field(default_factory=list)

    @field_validator(*_OPTIONAL_TEXT_FIELDS, mode="before")
    @classmethod
    def _blank_to_none(cls, value: object) -> object:
        return value or None

    @field_validator("tags", "focus_keywords", mode="before")
    @classmethod
    def _none_to_list(cls, value: object) -> object:
        return value or []

    @field_validator("reading_time", mode="before")
    @classmethod
    def _default_reading_time(cls, value: object) -> object:
        return value or 5

    @field_validator("published", "featured", mode="before")
    @classmethod
    def _none_to_false(cls, value: object) -> object:
        return False if value is None else value


class Post(BaseModel):
    """A stored blog post."""

    model_config = ConfigDict(frozen=True)

    id: str
    slug: str
    title_uz: str
    title_ru: str
    title_en: str
    content_uz: str
    content_ru: str
    content_en: str
    excerpt_uz: str | None = None
    excerpt_ru: str | None = None
    excerpt_en: str | None = None
    category_id: str | None = None
    featured_image: str | None = None
    tags: list[str] = Field(default_factory=list)
    reading_time: int = 5
    published: bool = False
    featured: bool = False
    published_at: datetime | None = None
    meta_title_uz: str | None = None
    meta_title_ru: str | None = None
    meta_title_en: str | None = None
    meta_description_uz: str | None = None
    meta_description_ru: str | None = None
    meta_description_en: str | None = None
    focus_keywords: list[str] = Field(default_factory=list)
    views: int = 0
    likes: int = 0
    created_at: datetime
    updated_at: datetime

    def localized(self, field: Literal["title", "content", "excerpt"], language: Language) -> str:
        """Return ``<field>_<language>``, or an empty string when unset."""
        return getattr(self, f"{field}_{language}") or ""


class Category(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    slug: str
    name_uz: str
    name_ru: str
    name_en: str
    description_uz: str | None = None
    description_ru: str | None = None
    description_en: str | None = None
    color: str | None = None
    icon: str | None = None
    created_at: datetime
    updated_at: datetime

    def name(self, language: Language) -> str:
        return getattr(self, f"name_{language}") or self.name_en
