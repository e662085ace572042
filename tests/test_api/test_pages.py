"""Tests for the server-rendered pages and their head tags."""

from __future__ import annotations

import json
import re
from typing import TYPE_CHECKING

from lingvoblog.models.post import PostCreate

if TYPE_CHECKING:
    from fastapi.testclient import TestClient

    from lingvoblog.db import Database
    from lingvoblog.models import Post


def _head(html: str) -> str:
    return html.split("<head>", 1)[1].split("</head>", 1)[0]


class TestPostPage:
    def test_seo_and_structured_data(self, client: TestClient, sample_post: Post):
        resp = client.get(f"/post/{sample_post.slug}?lang=en")
        assert resp.status_code == 200
        head = _head(resp.text)

        assert '<html lang="en">' in resp.text
        assert "<title>SMM strategy | Aziz Karimov</title>" in head
        assert '<meta name="description" content="How to plan a month of posts">' in head
        assert '<meta property="og:type" content="article">' in head
        assert '<meta property="article:section" content="Marketing">' in head
        assert (
            '<link rel="canonical" href="https://blog.example.uz/post/smm-strategiya">' in head
        )
        assert head.count('rel="alternate"') == 4

        scripts = re.findall(
            r'<script type="application/ld\+json" data-type="(\w+)">(.*?)</script>', head
        )
        data = {kind: json.loads(body) for kind, body in scripts}
        assert data["article"]["headline"] == "SMM strategy"
        assert data["article"]["publisher"]["logo"]["url"] == "https://blog.example.uz/favicon.ico"
        assert len(data["breadcrumb"]["itemListElement"]) == 4

        assert "<p>English content</p>" in resp.text

    def test_default_language_is_uzbek(self, client: TestClient, sample_post: Post):
        resp = client.get(f"/post/{sample_post.slug}")
        assert '<html lang="uz">' in resp.text
        assert "<title>SMM strategiya | Aziz Karimov</title>" in resp.text
        # no Uzbek excerpt: description falls back to the content
        assert '<meta name="description" content="&lt;p&gt;Uzbek content&lt;/p&gt;">' in resp.text

    def test_analytics_and_site_keywords(
        self, client: TestClient, db: Database, sample_post: Post
    ):
        db.set_site_setting("ga4_measurement_id", "G-TEST1")
        db.set_site_setting("gtm_container_id", "GTM-TEST")
        db.add_seo_keyword("digital marketing", "en", priority=3)

        resp = client.get(f"/post/{sample_post.slug}?lang=en")
        head = _head(resp.text)
        body = resp.text.split("<body>", 1)[1]

        assert 'src="https://www.googletagmanager.com/gtag/js?id=G-TEST1"' in head
        assert body.lstrip().startswith('<noscript id="gtm-noscript">')
        assert (
            '<meta name="keywords" content="smm, strategy, digital marketing">' in head
        )

    def test_unknown_post(self, client: TestClient):
        resp = client.get("/post/nope")
        assert resp.status_code == 404
        assert resp.json() == {"error": "Post not found"}

    def test_draft_not_served(self, client: TestClient, db: Database, sample_post: Post):
        db.set_post_published(sample_post.slug, False)
        assert client.get(f"/post/{sample_post.slug}").status_code == 404

    def test_invalid_language(self, client: TestClient, sample_post: Post):
        resp = client.get(f"/post/{sample_post.slug}?lang=de")
        assert resp.status_code == 400

    def test_mixed_case_script_close_in_title(
        self, client: TestClient, db: Database, post_payload
    ):
        db.create_post(
            PostCreate.model_validate(
                post_payload(
                    slug="tips",
                    title_en="Tips</SCRIPT><script>alert(1)</script>",
                    published=True,
                )
            )
        )

        resp = client.get("/post/tips?lang=en")
        head = _head(resp.text)
        assert "alert(1)</script>" not in head.lower()
        article = re.search(
            r'<script type="application/ld\+json" data-type="article">(.*?)</script>', head
        )
        assert json.loads(article.group(1))["headline"] == "Tips</SCRIPT><script>alert(1)</script>"


class TestHomePage:
    def test_lists_published_posts(self, client: TestClient, sample_post: Post):
        resp = client.get("/?lang=ru")
        assert resp.status_code == 200
        assert '<meta property="og:type" content="website">' in resp.text
        assert '<meta property="og:locale" content="ru_RU">' in resp.text
        assert f'href="/post/{sample_post.slug}?lang=ru">SMM стратегия</a>' in resp.text
        assert 'data-type="article"' not in resp.text

    def test_site_structured_data(self, client: TestClient, db: Database):
        db.set_site_setting("instagram_url", "https://instagram.com/example")
        db.set_site_setting("telegram_url", "https://t.me/example")

        resp = client.get("/?lang=en")
        head = _head(resp.text)
        scripts = re.findall(
            r'<script type="application/ld\+json" data-type="([\w-]+)">(.*?)</script>', head
        )
        data = {kind: json.loads(body) for kind, body in scripts}

        assert list(data) == ["website", "organization", "person", "home-breadcrumb"]
        assert data["website"]["potentialAction"]["target"]["urlTemplate"] == (
            "https://blog.example.uz/blog?search={search_term_string}"
        )
        assert data["website"]["inLanguage"] == "en-US"
        assert data["organization"]["sameAs"] == [
            "https://instagram.com/example",
            "https://t.me/example",
        ]
        assert data["person"]["name"] == "Aziz Karimov"
        assert data["home-breadcrumb"]["itemListElement"][0]["item"] == "https://blog.example.uz"
