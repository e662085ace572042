"""SQLAlchemy-backed database connection and CRUD helpers."""

from __future__ import annotations

import json
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlalchemy import select, text

from lingvoblog.db.engine import create_db_engine, create_session_factory
from lingvoblog.db.orm import (
    Base,
    CategoryRow,
    PostRow,
    SeoKeywordRow,
    SiteSettingRow,
)
from lingvoblog.models.post import Category, Post

if TYPE_CHECKING:
    from pathlib import Path

    from sqlalchemy import Engine
    from sqlalchemy.orm import Session, sessionmaker

    from lingvoblog.models.post import PostCreate


class Database:
    """SQLAlchemy-backed wrapper with CRUD helpers for posts, categories and settings."""

    def __init__(self, target: str | Path = ":memory:"):
        self.target = str(target)
        self._engine: Engine = create_db_engine(self.target)
        self._session_factory: sessionmaker[Session] = create_session_factory(self._engine)

    @property
    def engine(self) -> Engine:
        """Expose the SQLAlchemy engine for inspection and advanced use."""
        return self._engine

    @property
    def Session(self) -> sessionmaker[Session]:  # noqa: N802
        """Expose the session factory for consumers that need direct access."""
        return self._session_factory

    def init_schema(self) -> None:
        """Create all tables via ORM metadata."""
        Base.metadata.create_all(self._engine)

    def close(self) -> None:
        self._engine.dispose()

    def check_connection(self) -> bool:
        """Verify the database is reachable. Returns True or raises."""
        with self._session_factory() as session:
            session.execute(text("SELECT 1"))
        return True

    # --- Posts ---

    def create_post(self, post: PostCreate) -> Post:
        """Insert one post. ``published_at`` is stamped only for published posts."""
        now = _utcnow_str()
        with self._session_factory() as session:
            row = PostRow(
                slug=post.slug,
                title_uz=post.title_uz,
                title_ru=post.title_ru,
                title_en=post.title_en,
                content_uz=post.content_uz,
                content_ru=post.content_ru,
                content_en=post.content_en,
                excerpt_uz=post.excerpt_uz,
                excerpt_ru=post.excerpt_ru,
                excerpt_en=post.excerpt_en,
                category_id=post.category_id,
                featured_image=post.featured_image,
                tags_json=json.dumps(post.tags, ensure_ascii=False),
                reading_time=post.reading_time,
                published=post.published,
                featured=post.featured,
                published_at=now if post.published else None,
                meta_title_uz=post.meta_title_uz,
                meta_title_ru=post.meta_title_ru,
                meta_title_en=post.meta_title_en,
                meta_description_uz=post.meta_description_uz,
                meta_description_ru=post.meta_description_ru,
                meta_description_en=post.meta_description_en,
                focus_keywords_json=json.dumps(post.focus_keywords, ensure_ascii=False),
                created_at=now,
                updated_at=now,
            )
            session.add(row)
            session.commit()
            return self._row_to_post(row)

    def get_post_by_slug(self, slug: str) -> Post | None:
        with self._session_factory() as session:
            row = session.scalars(select(PostRow).where(PostRow.slug == slug)).first()
            if row is None:
                return None
            return self._row_to_post(row)

    def list_published_posts(self, limit: int | None = None) -> list[Post]:
        """Published posts, newest ``published_at`` first."""
        with self._session_factory() as session:
            stmt = (
                select(PostRow)
                .where(PostRow.published.is_(True))
                .order_by(PostRow.published_at.desc(), PostRow.created_at.desc())
            )
            if limit is not None:
                stmt = stmt.limit(limit)
            rows = session.scalars(stmt).all()
            return [self._row_to_post(r) for r in rows]

    def set_post_published(self, slug: str, published: bool) -> Post | None:
        """Toggle publication, stamping ``published_at`` on the false -> true transition."""
        now = _utcnow_str()
        with self._session_factory() as session:
            row = session.scalars(select(PostRow).where(PostRow.slug == slug)).first()
            if row is None:
                return None
            if published and not row.published:
                row.published_at = now
            elif not published:
                row.published_at = None
            row.published = published
            row.updated_at = now
            session.commit()
            return self._row_to_post(row)

    # --- Categories ---

    def create_category(
        self,
        slug: str,
        name_uz: str,
        name_ru: str,
        name_en: str,
        description_uz: str | None = None,
        description_ru: str | None = None,
        description_en: str | None = None,
    ) -> Category:
        with self._session_factory() as session:
            row = CategoryRow(
                slug=slug,
                name_uz=name_uz,
                name_ru=name_ru,
                name_en=name_en,
                description_uz=description_uz,
                description_ru=description_ru,
                description_en=description_en,
            )
            session.add(row)
            session.commit()
            return self._row_to_category(row)

    def get_category(self, category_id: str) -> Category | None:
        with self._session_factory() as session:
            row = session.get(CategoryRow, category_id)
            if row is None:
                return None
            return self._row_to_category(row)

    def list_categories(self) -> list[Category]:
        with self._session_factory() as session:
            rows = session.scalars(select(CategoryRow).order_by(CategoryRow.created_at)).all()
            return [self._row_to_category(r) for r in rows]

    # --- Site settings ---

    def get_site_settings(self) -> list[tuple[str, str | None]]:
        """All ``(key, value)`` rows of the settings table."""
        with self._session_factory() as session:
            rows = session.execute(select(SiteSettingRow.key, SiteSettingRow.value)).all()
            return [(key, value) for key, value in rows]

    def set_site_setting(self, key: str, value: str | None) -> None:
        with self._session_factory() as session:
            row = session.scalars(select(SiteSettingRow).where(SiteSettingRow.key == key)).first()
            if row is None:
                session.add(SiteSettingRow(key=key, value=value))
            else:
                row.value = value
                row.updated_at = _utcnow_str()
            session.commit()

    # --- SEO keywords ---

    def add_seo_keyword(self, keyword: str, language: str | None, priority: int = 0) -> None:
        with self._session_factory() as session:
            session.add(SeoKeywordRow(keyword=keyword, language=language, priority=priority))
            session.commit()

    def list_seo_keywords(self, language: str, limit: int = 20) -> list[str]:
        """Keywords for one language, highest priority first."""
        with self._session_factory() as session:
            stmt = (
                select(SeoKeywordRow.keyword)
                .where(SeoKeywordRow.language == language)
                .order_by(SeoKeywordRow.priority.desc(), SeoKeywordRow.id)
                .limit(limit)
            )
            return list(session.scalars(stmt).all())

    # --- Helpers ---

    @staticmethod
    def _parse_dt(value: str) -> datetime:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))

    @staticmethod
    def _parse_dt_opt(value: str | None) -> datetime | None:
        if value is None:
            return None
        return datetime.fromisoformat(value.replace("Z", "+00:00"))

    @staticmethod
    def _row_to_post(row: PostRow) -> Post:
        return Post(
            id=row.id,
            slug=row.slug,
            title_uz=row.title_uz,
            title_ru=row.title_ru,
            title_en=row.title_en,
            content_uz=row.content_uz,
            content_ru=row.content_ru,
            content_en=row.content_en,
            excerpt_uz=row.excerpt_uz,
            excerpt_ru=row.excerpt_ru,
            excerpt_en=row.excerpt_en,
            category_id=row.category_id,
            featured_image=row.featured_image,
            tags=json.loads(row.tags_json),
            reading_time=row.reading_time,
            published=row.published,
            featured=row.featured,
            published_at=Database._parse_dt_opt(row.published_at),
            meta_title_uz=row.meta_title_uz,
            meta_title_ru=row.meta_title_ru,
            meta_title_en=row.meta_title_en,
            meta_description_uz=row.meta_description_uz,
            meta_description_ru=row.meta_description_ru,
            meta_description_en=row.meta_description_en,
            focus_keywords=json.loads(row.focus_keywords_json),
            views=row.views,
            likes=row.likes,
            created_at=Database._parse_dt(row.created_at),
            updated_at=Database._parse_dt(row.updated_at),
        )

    @staticmethod
    def _row_to_category(row: CategoryRow) -> Category:
        return Category(
            id=row.id,
            slug=row.slug,
            name_uz=row.name_uz,
            name_ru=row.name_ru,
            name_en=row.name_en,
            description_uz=row.description_uz,
            description_ru=row.description_ru,
            description_en=row.description_en,
            color=row.color,
            icon=row.icon,
            created_at=Database._parse_dt(row.created_at),
            updated_at=Database._parse_dt(row.updated_at),
        )


def _utcnow_str() -> str:
    return datetime.now(UTC).strftime("%Y-%m-%dT%H:%M:%S.%fZ")
