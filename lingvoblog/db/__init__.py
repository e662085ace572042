"""Database package: engine factory, ORM rows and the CRUD facade."""

from lingvoblog.db.engine import create_db_engine, create_session_factory
from lingvoblog.db.facade import Database
from lingvoblog.db.orm import (
    Base,
    CategoryRow,
    PostRow,
    SeoKeywordRow,
    SiteSettingRow,
)

__all__ = [
    "Base",
    "CategoryRow",
    "Database",
    "PostRow",
    "SeoKeywordRow",
    "SiteSettingRow",
    "create_db_engine",
    "create_session_factory",
]
