"""XML sitemap and robots.txt generation."""

from __future__ import annotations

from datetime import UTC, date, datetime
from typing import TYPE_CHECKING, NamedTuple
from xml.sax.saxutils import escape

if TYPE_CHECKING:
    from lingvoblog.models.post import Category, Post


class StaticPage(NamedTuple):
    path: str
    priority: str
    changefreq: str


STATIC_PAGES: tuple[StaticPage, ...] = (
    StaticPage("/", "1.0", "daily"),
    StaticPage("/blog", "0.9", "daily"),
    StaticPage("/categories", "0.8", "weekly"),
    StaticPage("/about", "0.7", "monthly"),
    StaticPage("/contact", "0.7", "monthly"),
    StaticPage("/subscribe", "0.6", "monthly"),
    StaticPage("/privacy", "0.3", "yearly"),
    StaticPage("/terms", "0.3", "yearly"),
)

_URLSET_OPEN = """<?xml version="1.0" encoding="UTF-8"?>
<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9"
        xmlns:news="http://www.google.com/schemas/sitemap-news/0.9"
        xmlns:xhtml="http://www.w3.org/1999/xhtml"
        xmlns:image="http://www.google.com/schemas/sitemap-image/1.1">
"""


def _url_entry(loc: str, changefreq: str, priority: str, lastmod: str | None = None) -> str:
    parts = [f"  <url>\n    <loc>{escape(loc)}</loc>\n"]
    if lastmod:
        parts.append(f"    <lastmod>{lastmod}</lastmod>\n")
    parts.append(f"    <changefreq>{changefreq}</changefreq>\n")
    parts.append(f"    <priority>{priority}</priority>\n  </url>\n")
    return "".join(parts)


def render_sitemap(
    posts: list[Post],
    categories: list[Category],
    site_url: str,
    today: date | None = None,
) -> str:
    """Static pages, then category listings, then published posts."""
    base = site_url.rstrip("/")
    fallback = (today or datetime.now(UTC).date()).isoformat()
    chunks = [_URLSET_OPEN]

    for page in STATIC_PAGES:
        chunks.append(_url_entry(f"{base}{page.path}", page.changefreq, page.priority))

    for category in categories:
        lastmod = category.updated_at.date().isoformat() if category.updated_at else fallback
        chunks.append(
            _url_entry(f"{base}/blog?category={category.slug}", "weekly", "0.7", lastmod)
        )

    for post in posts:
        lastmod = post.updated_at.date().isoformat() if post.updated_at else fallback
        chunks.append(_url_entry(f"{base}/post/{post.slug}", "weekly", "0.8", lastmod))

    chunks.append("</urlset>")
    return "".join(chunks)


def render_robots_txt(site_url: str, functions_url: str) -> str:
    base = site_url.rstrip("/")
    return f"""# robots.txt for {base}
# Generated dynamically

User-agent: Googlebot
Allow: /
Crawl-delay: 1

User-agent: Bingbot
Allow: /
Crawl-delay: 1

User-agent: Twitterbot
Allow: /

User-agent: facebookexternalhit
Allow: /

User-agent: LinkedInBot
Allow: /

User-agent: Yandex
Allow: /
Crawl-delay: 2

User-agent: *
Allow: /
Disallow: /admin
Disallow: /admin/*
Disallow: /auth
Disallow: /auth/*
Disallow: /api/
Disallow: /*.json$
Disallow: /*?*
Allow: /post/*
Allow: /blog
Allow: /categories
Allow: /about
Allow: /contact
Crawl-delay: 1

Sitemap: {base}/sitemap.xml
Sitemap: {functions_url.rstrip("/")}/sitemap

# Yandex host directive
Host: {base}

Clean-param: utm_source&utm_medium&utm_campaign&utm_term&utm_content
"""
