"""Shared test fixtures."""

from __future__ import annotations

import pytest

from lingvoblog.config import Settings
from lingvoblog.db import Database
from lingvoblog.models.post import Category, Post, PostCreate


def make_post_payload(slug: str = "smm-strategiya", **overrides: object) -> dict[str, object]:
    payload: dict[str, object] = {
        "title_uz": "SMM strategiya",
        "title_ru": "SMM стратегия",
        "title_en": "SMM strategy",
        "content_uz": "<p>Uzbek content</p>",
        "content_ru": "<p>Russian content</p>",
        "content_en": "<p>English content</p>",
        "slug": slug,
    }
    payload.update(overrides)
    return payload


@pytest.fixture()
def post_payload():
    """Factory for a minimal valid create-post body."""
    return make_post_payload


@pytest.fixture()
def settings(tmp_path) -> Settings:
    return Settings(
        database_url="",
        data_dir=tmp_path / "data",
        site_url="https://blog.example.uz",
        site_name="ExampleBlog",
        author_name="Aziz Karimov",
        twitter_handle="@example",
        create_post_api_key="test-api-key",
        indexnow_key="test-indexnow-key",
        smtp_password="",
        log_level="DEBUG",
        log_format="console",
        _env_file=None,
    )


@pytest.fixture()
def db(tmp_path) -> Database:
    db = Database(tmp_path / "test.db")
    db.init_schema()
    yield db
    db.close()


@pytest.fixture()
def sample_category(db: Database) -> Category:
    return db.create_category(
        "marketing",
        name_uz="Marketing",
        name_ru="Маркетинг",
        name_en="Marketing",
        description_en="Digital marketing how-tos",
    )


@pytest.fixture()
def sample_post(db: Database, sample_category: Category) -> Post:
    return db.create_post(
        PostCreate.model_validate(
            make_post_payload(
                excerpt_en="How to plan a month of posts",
                category_id=sample_category.id,
                tags=["smm", "strategy"],
                featured_image="https://cdn.example.uz/smm.jpg",
                published=True,
            )
        )
    )
