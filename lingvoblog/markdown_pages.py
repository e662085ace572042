"""Markdown renditions of the static pages and published posts.

Served to crawlers and language models that prefer plain markdown over the
rendered HTML pages. ``llms.txt`` links here.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

import structlog

from lingvoblog.config import LANGUAGES

if TYPE_CHECKING:
    from lingvoblog.config import Settings
    from lingvoblog.db import Database
    from lingvoblog.models.post import Post

logger = structlog.get_logger()

MAX_INDEX_POSTS = 50
ERROR_MARKDOWN = "# Error\nContent not available."

_ABOUT = """# About {site_name}

## {author}
**Digital Marketing Specialist | Blogger | Educator**

{site_name} is a professional blog platform dedicated to digital marketing, SMM strategies, SEO optimization, and personal development, focused on the Uzbekistan market.

### Expertise
- Digital Marketing Strategy
- Social Media Marketing (SMM)
- Search Engine Optimization (SEO)
- Google Ads & Facebook Ads
- Content Marketing
- Personal Development

### Mission
To provide practical, actionable digital marketing knowledge in Uzbek, Russian, and English languages for professionals and entrepreneurs in Central Asia.

### Contact
- Website: {base}
- Contact page: {base}/contact
"""

_SERVICES = """# Services: {site_name}

## Digital Marketing Services

### 1. SMM Strategy & Management
Complete social media strategy development and execution for Instagram, Facebook, Telegram, and other platforms.

### 2. SEO Optimization
Technical and content SEO to improve search engine rankings and organic traffic.

### 3. Contextual Advertising
Google Ads and Facebook Ads campaign setup, management, and optimization.

### 4. Content Marketing
Strategic content creation for blogs, social media, and email marketing.

### 5. Personal Development Coaching
One-on-one coaching for professional growth and career development.

### Contact
Reach out at {base}/contact for consultations.
"""

_FAQ = """# FAQ: {site_name}

## Frequently Asked Questions

### What is {site_name}?
{site_name} is a digital marketing and personal development blog by {author}, providing practical tips and strategies for the Uzbekistan market.

### What topics do you cover?
We cover digital marketing, SMM, SEO, contextual advertising (Google Ads, Facebook Ads), and personal development.

### What languages is the content available in?
Content is available in Uzbek, Russian, and English.

### How can I subscribe to the newsletter?
Visit {base}/subscribe to sign up for our newsletter.

### How can I contact you?
Use the contact form at {base}/contact.
"""

PAGES = {"about": _ABOUT, "services": _SERVICES, "faq": _FAQ}
PAGE_LABELS = {"about": "About", "services": "Services", "faq": "FAQ"}

_TAG = re.compile(r"<[^>]*>")
# Applied in order, so "&amp;lt;" ends up as "<".
_ENTITIES = (("&nbsp;", " "), ("&amp;", "&"), ("&lt;", "<"), ("&gt;", ">"))


def strip_html(content: str) -> str:
    text = _TAG.sub("", content)
    for entity, char in _ENTITIES:
        text = text.replace(entity, char)
    return text


def render_page(page: str, *, site_name: str, site_url: str, author: str) -> str | None:
    """One of the static pages, or None for an unknown name."""
    template = PAGES.get(page)
    if template is None:
        return None
    return template.format(site_name=site_name, author=author, base=site_url.rstrip("/"))


def render_post(post: Post, language: str, *, site_url: str, author: str) -> str:
    """A post as markdown, in ``language`` with English as the fallback."""
    if language not in LANGUAGES:
        language = "en"
    title = post.localized("title", language) or post.title_en
    excerpt = post.localized("excerpt", language) or post.excerpt_en
    content = strip_html(post.localized("content", language) or post.content_en)
    date = post.published_at.date().isoformat() if post.published_at else ""

    lines = [
        f"# {title}\n",
        "\n",
        f"**Author:** {author}  \n",
        f"**Date:** {date}  \n",
        f"**Tags:** {', '.join(post.tags)}  \n",
        f"**URL:** {site_url.rstrip('/')}/post/{post.slug}\n",
        "\n---\n\n",
    ]
    if excerpt:
        lines.append(f"> {excerpt}\n\n---\n\n")
    lines.append(f"{content}\n")
    return "".join(lines)


def render_index(posts: list[Post], *, site_name: str, functions_url: str) -> str:
    """Links to every static page and the newest published posts."""
    endpoint = f"{functions_url.rstrip('/')}/markdown-content"
    lines = [f"# {site_name}: Markdown Content Index\n\n## Available Pages\n"]
    lines.extend(f"- [{label}]({endpoint}?page={page})\n" for page, label in PAGE_LABELS.items())
    lines.append("\n## Blog Posts\n")
    for post in posts[:MAX_INDEX_POSTS]:
        lines.append(f"- [{post.title_en or post.title_uz}]({endpoint}?slug={post.slug})\n")
    return "".join(lines)


def build_markdown(
    db: Database,
    settings: Settings,
    *,
    page: str | None = None,
    slug: str | None = None,
    language: str = "en",
) -> str | None:
    """Resolve a markdown request.

    A known ``page`` wins over ``slug``. With neither, the index is returned.

    Returns:
        The markdown text, or None when ``slug`` names no published post.
    """
    if page:
        text = render_page(
            page,
            site_name=settings.site_name,
            site_url=settings.site_url,
            author=settings.author_name,
        )
        if text is not None:
            return text

    if slug:
        post = db.get_post_by_slug(slug)
        if post is None or not post.published:
            logger.info("Markdown post not found", slug=slug)
            return None
        return render_post(
            post, language, site_url=settings.site_url, author=settings.author_name
        )

    posts = db.list_published_posts(limit=MAX_INDEX_POSTS)
    return render_index(
        posts, site_name=settings.site_name, functions_url=settings.functions_base_url
    )
