"""One-shot loaders for site configuration read during a page render.

Both loaders degrade silently: a database failure leaves the defaults in
place and is only visible in the logs.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog
from sqlalchemy.exc import SQLAlchemyError

from lingvoblog.models.site import SiteSettings

if TYPE_CHECKING:
    from lingvoblog.db import Database

logger = structlog.get_logger()

SITE_KEYWORD_LIMIT = 20


class SiteSettingsStore:
    """Holds the settings for the lifetime of one page load."""

    def __init__(self, db: Database) -> None:
        self._db = db
        self.settings = SiteSettings()
        self.is_loading = True

    def load(self) -> SiteSettings:
        try:
            self.settings = SiteSettings.from_rows(self._db.get_site_settings())
        except SQLAlchemyError as exc:
            logger.warning("Site settings unavailable, using defaults", error=str(exc))
        finally:
            self.is_loading = False
        return self.settings


def load_site_keywords(db: Database, language: str) -> list[str]:
    """Top site keywords for ``language`` by priority, or [] on failure."""
    try:
        return db.list_seo_keywords(language, limit=SITE_KEYWORD_LIMIT)
    except SQLAlchemyError as exc:
        logger.warning("SEO keywords unavailable", language=language, error=str(exc))
        return []
