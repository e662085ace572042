"""Tests for the page-load settings and keyword loaders."""

from __future__ import annotations

from sqlalchemy.exc import OperationalError

from lingvoblog.db import Database
from lingvoblog.site_settings import SiteSettingsStore, load_site_keywords


class _BrokenDb:
    def get_site_settings(self):
        raise OperationalError("SELECT", {}, Exception("no such table: site_settings"))

    def list_seo_keywords(self, language, limit=20):
        raise OperationalError("SELECT", {}, Exception("no such table: seo_keywords"))


class TestSiteSettingsStore:
    def test_starts_loading_with_defaults(self, db: Database):
        store = SiteSettingsStore(db)
        assert store.is_loading is True
        assert store.settings.ga4_measurement_id == ""

    def test_load(self, db: Database):
        db.set_site_setting("ga4_measurement_id", "G-123")
        db.set_site_setting("instagram_url", None)

        store = SiteSettingsStore(db)
        settings = store.load()

        assert store.is_loading is False
        assert settings.ga4_measurement_id == "G-123"
        assert settings.instagram_url == ""
        assert settings.gtm_container_id == ""

    def test_failure_keeps_defaults(self):
        store = SiteSettingsStore(_BrokenDb())
        settings = store.load()
        assert store.is_loading is False
        assert settings.meta_pixel_id == ""


class TestLoadSiteKeywords:
    def test_loads_for_language(self, db: Database):
        db.add_seo_keyword("smm", "uz", priority=2)
        db.add_seo_keyword("seo", "en", priority=2)
        assert load_site_keywords(db, "uz") == ["smm"]

    def test_failure_returns_empty(self):
        assert load_site_keywords(_BrokenDb(), "uz") == []
