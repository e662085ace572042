"""Tests for llms.txt, markdown-content, sitemap.xml and robots.txt endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from sqlalchemy.exc import OperationalError

if TYPE_CHECKING:
    from fastapi.testclient import TestClient

    from lingvoblog.models import Post


class TestLlmsTxt:
    @pytest.mark.parametrize("path", ["/functions/v1/llms-txt", "/llms.txt"])
    def test_digest(self, client: TestClient, sample_post: Post, path: str):
        resp = client.get(path)
        assert resp.status_code == 200
        assert resp.headers["content-type"].startswith("text/plain")
        assert resp.headers["cache-control"] == "public, max-age=3600"
        assert f"https://blog.example.uz/post/{sample_post.slug}" in resp.text
        assert "https://blog.example.uz/functions/v1/markdown-content" in resp.text

    def test_fallback_is_not_cached(self, client: TestClient, monkeypatch):
        def boom(*_args, **_kwargs):
            raise OperationalError("SELECT", {}, Exception("db down"))

        monkeypatch.setattr(client.app.state.db, "list_published_posts", boom)
        resp = client.get("/llms.txt")
        assert resp.status_code == 200
        assert resp.text.startswith("# ExampleBlog\n> Digital marketing blog\n")
        assert "cache-control" not in resp.headers


class TestMarkdownContent:
    def test_link_from_llms_txt_resolves(self, client: TestClient, sample_post: Post):
        digest = client.get("/llms.txt").text
        link = next(
            line.split(": ", 1)[1] for line in digest.splitlines() if "markdown-content" in line
        )
        resp = client.get(link.removeprefix("https://blog.example.uz"))
        assert resp.status_code == 200
        assert resp.headers["content-type"] == "text/markdown; charset=utf-8"
        assert resp.headers["cache-control"] == "public, max-age=3600"
        assert resp.text.startswith("# About ExampleBlog\n")

    def test_post(self, client: TestClient, sample_post: Post):
        resp = client.get(
            "/functions/v1/markdown-content", params={"slug": sample_post.slug, "lang": "ru"}
        )
        assert resp.status_code == 200
        assert resp.text.startswith("# SMM стратегия\n")
        assert "**Tags:** smm, strategy" in resp.text
        assert "Russian content" in resp.text
        assert "<p>" not in resp.text

    def test_unknown_post(self, client: TestClient):
        resp = client.get("/functions/v1/markdown-content?slug=nope")
        assert resp.status_code == 404
        assert resp.text == "Post not found"

    def test_index(self, client: TestClient, sample_post: Post):
        resp = client.get("/functions/v1/markdown-content")
        assert resp.status_code == 200
        assert (
            f"- [SMM strategy](https://blog.example.uz/functions/v1/markdown-content"
            f"?slug={sample_post.slug})"
        ) in resp.text

    def test_database_error(self, client: TestClient, monkeypatch):
        def boom(*_args, **_kwargs):
            raise OperationalError("SELECT", {}, Exception("db down"))

        monkeypatch.setattr(client.app.state.db, "list_published_posts", boom)
        resp = client.get("/functions/v1/markdown-content", headers={"Origin": "https://x.org"})
        assert resp.status_code == 500
        assert resp.text == "# Error\nContent not available."
        assert resp.headers["content-type"].startswith("text/markdown")
        assert resp.headers["access-control-allow-origin"] == "*"


class TestSitemap:
    @pytest.mark.parametrize("path", ["/functions/v1/sitemap", "/sitemap.xml"])
    def test_sitemap(self, client: TestClient, sample_post: Post, path: str):
        resp = client.get(path)
        assert resp.status_code == 200
        assert resp.headers["content-type"].startswith("application/xml")
        assert f"<loc>https://blog.example.uz/post/{sample_post.slug}</loc>" in resp.text
        assert "<loc>https://blog.example.uz/blog?category=marketing</loc>" in resp.text

    def test_drafts_excluded(self, client: TestClient, db, post_payload):
        from lingvoblog.models import PostCreate

        db.create_post(PostCreate.model_validate(post_payload("draft-post")))
        assert "draft-post" not in client.get("/sitemap.xml").text

    def test_database_error(self, client: TestClient, monkeypatch):
        def boom(*_args, **_kwargs):
            raise OperationalError("SELECT", {}, Exception("db down"))

        monkeypatch.setattr(client.app.state.db, "list_categories", boom)
        resp = client.get("/sitemap.xml")
        assert resp.status_code == 500
        assert "db down" in resp.json()["error"]


class TestRobots:
    def test_robots(self, client: TestClient):
        resp = client.get("/robots.txt")
        assert resp.status_code == 200
        assert resp.headers["cache-control"] == "public, max-age=86400"
        assert "Sitemap: https://blog.example.uz/functions/v1/sitemap" in resp.text
