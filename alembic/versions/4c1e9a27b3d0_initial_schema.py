"""initial schema

Revision ID: 4c1e9a27b3d0
Revises:
Create Date: 2026-10-19 10:12:41.208113

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "4c1e9a27b3d0"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.Text, nullable=False),
        sa.Column("updated_at", sa.Text, nullable=False),
    ]


def upgrade() -> None:
    """Create the categories, posts, site_settings and seo_keywords tables."""
    op.create_table(
        "categories",
        sa.Column("id", sa.Text, primary_key=True),
        sa.Column("slug", sa.Text, nullable=False, unique=True),
        sa.Column("name_uz", sa.Text, nullable=False),
        sa.Column("name_ru", sa.Text, nullable=False),
        sa.Column("name_en", sa.Text, nullable=False),
        sa.Column("description_uz", sa.Text, nullable=True),
        sa.Column("description_ru", sa.Text, nullable=True),
        sa.Column("description_en", sa.Text, nullable=True),
        sa.Column("color", sa.Text, nullable=True),
        sa.Column("icon", sa.Text, nullable=True),
        *_timestamps(),
    )

    op.create_table(
        "posts",
        sa.Column("id", sa.Text, primary_key=True),
        sa.Column("slug", sa.Text, nullable=False, unique=True),
        sa.Column("title_uz", sa.Text, nullable=False),
        sa.Column("title_ru", sa.Text, nullable=False),
        sa.Column("title_en", sa.Text, nullable=False),
        sa.Column("content_uz", sa.Text, nullable=False),
        sa.Column("content_ru", sa.Text, nullable=False),
        sa.Column("content_en", sa.Text, nullable=False),
        sa.Column("excerpt_uz", sa.Text, nullable=True),
        sa.Column("excerpt_ru", sa.Text, nullable=True),
        sa.Column("excerpt_en", sa.Text, nullable=True),
        sa.Column(
            "category_id",
            sa.Text,
            sa.ForeignKey("categories.id"),
            nullable=True,
        ),
        sa.Column("featured_image", sa.Text, nullable=True),
        sa.Column("tags_json", sa.Text, nullable=False, server_default="[]"),
        sa.Column("reading_time", sa.Integer, nullable=False, server_default="5"),
        sa.Column("published", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("featured", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("published_at", sa.Text, nullable=True),
        sa.Column("meta_title_uz", sa.Text, nullable=True),
        sa.Column("meta_title_ru", sa.Text, nullable=True),
        sa.Column("meta_title_en", sa.Text, nullable=True),
        sa.Column("meta_description_uz", sa.Text, nullable=True),
        sa.Column("meta_description_ru", sa.Text, nullable=True),
        sa.Column("meta_description_en", sa.Text, nullable=True),
        sa.Column("focus_keywords_json", sa.Text, nullable=False, server_default="[]"),
        sa.Column("views", sa.Integer, nullable=False, server_default="0"),
        sa.Column("likes", sa.Integer, nullable=False, server_default="0"),
        *_timestamps(),
    )
    op.create_index("idx_posts_published", "posts", ["published", "published_at"])

    op.create_table(
        "site_settings",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("key", sa.Text, nullable=False, unique=True),
        sa.Column("value", sa.Text, nullable=True),
        *_timestamps(),
    )

    op.create_table(
        "seo_keywords",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("keyword", sa.Text, nullable=False),
        sa.Column("language", sa.Text, nullable=True),
        sa.Column("priority", sa.Integer, nullable=False, server_default="0"),
        sa.Column("keyword_group", sa.Text, nullable=True),
        sa.Column("url", sa.Text, nullable=True),
        *_timestamps(),
    )
    op.create_index("idx_seo_keywords_language", "seo_keywords", ["language", "priority"])


def downgrade() -> None:
    """Drop all blog tables."""
    op.drop_table("seo_keywords")
    op.drop_table("site_settings")
    op.drop_table("posts")
    op.drop_table("categories")
