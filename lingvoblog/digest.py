"""``llms.txt``: a plain-text site summary for language-model crawlers."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from lingvoblog.config import Settings
    from lingvoblog.db import Database
    from lingvoblog.models.post import Category, Post

logger = structlog.get_logger()

MAX_RECENT_POSTS = 30
EXCERPT_LIMIT = 150

_HEADER = """# {site_name}
> Digital marketing, SMM, SEO va shaxsiy rivojlanish bo'yicha professional blog

## Haqida (About)
{site_name} — {author} tomonidan yaratilgan digital marketing va shaxsiy rivojlanish bo'yicha blog platformasi. Sayt O'zbekiston bozori uchun digital marketing, SMM strategiyalar, SEO optimizatsiya, kontekstli reklama va shaxsiy rivojlanish bo'yicha amaliy maslahatlar taqdim etadi.

## Muallif (Author)
- Ism: {author}
- Kasb: Digital Marketing Specialist
- Sayt: {base}
- Tillar: O'zbek, Rus, Ingliz

## Xizmatlar (Services)
- Digital Marketing Konsalting
- SMM Strategiya va Boshqaruv
- SEO Optimizatsiya
- Kontekstli Reklama (Google Ads, Facebook Ads)
- Shaxsiy Rivojlanish Coaching

## Asosiy Sahifalar (Key Pages)
- Bosh sahifa: {base}
- Blog: {base}/blog
- Kategoriyalar: {base}/categories
- Haqida: {base}/about
- Aloqa: {base}/contact
- Obuna: {base}/subscribe

## Kategoriyalar (Categories)
"""

_FOOTER = """
## Texnik Ma'lumot (Technical Info)
- Tillar: uz, ru, en
- Sitemap: {base}/sitemap.xml
- RSS: {base}/blog (structured data available)
- Aloqa: {base}/contact
- Schema.org: Organization, Person, Article, FAQPage, BreadcrumbList

## Optional
- Markdown sahifalar: {functions}/markdown-content?page=about
- llms.txt: {base}/llms.txt
"""


def render_llms_txt(
    posts: list[Post],
    categories: list[Category],
    *,
    site_name: str,
    site_url: str,
    author: str,
    functions_url: str,
) -> str:
    """Render the digest. ``posts`` must already be sorted newest first."""
    base = site_url.rstrip("/")
    lines = [_HEADER.format(site_name=site_name, author=author, base=base)]

    for cat in categories:
        description = cat.description_en or cat.description_uz or ""
        lines.append(f"- [{cat.name_en}]({base}/categories?cat={cat.slug}): {description}\n")

    lines.append("\n## So'nggi Maqolalar (Recent Posts)\n")

    for post in posts[:MAX_RECENT_POSTS]:
        date = post.published_at.date().isoformat() if post.published_at else ""
        tags = f" [{', '.join(post.tags)}]" if post.tags else ""
        title = post.title_en or post.title_uz
        lines.append(f"- [{title}]({base}/post/{post.slug}) ({date}){tags}\n")
        excerpt = post.excerpt_en or post.excerpt_uz
        if excerpt:
            lines.append(f"  > {excerpt[:EXCERPT_LIMIT]}\n")

    lines.append(_FOOTER.format(base=base, functions=functions_url.rstrip("/")))
    return "".join(lines)


def fallback_llms_txt(site_name: str, site_url: str) -> str:
    return f"# {site_name}\n> Digital marketing blog\nURL: {site_url}\n"


def build_llms_txt(db: Database, settings: Settings) -> tuple[str, bool]:
    """Build the digest from the database.

    Returns:
        ``(text, complete)``; ``complete`` is False when the fallback document
        was produced because the digest could not be built.
    """
    try:
        posts = db.list_published_posts()
        categories = db.list_categories()
        text = render_llms_txt(
            posts,
            categories,
            site_name=settings.site_name,
            site_url=settings.site_url,
            author=settings.author_name,
            functions_url=settings.functions_base_url,
        )
    except Exception as exc:
        logger.error("llms.txt generation failed", error=str(exc), exc_info=exc)
        return fallback_llms_txt(settings.site_name, settings.site_url), False

    logger.info("Generated llms.txt", posts=len(posts), categories=len(categories))
    return text, True
