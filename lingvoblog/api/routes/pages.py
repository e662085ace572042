"""Server-rendered public pages.

Each request starts from a fresh head document; the analytics, SEO and
structured-data writers reconcile their desired tags into it before the page
is serialized.
"""

from __future__ import annotations

import html

from fastapi import APIRouter
from fastapi.responses import HTMLResponse

from lingvoblog.api.deps import DbDep, SettingsDep
from lingvoblog.config import Settings
from lingvoblog.db import Database
from lingvoblog.errors import NotFoundError
from lingvoblog.head import (
    ArticleProps,
    HeadDocument,
    HeadElement,
    SeoProps,
    inject_analytics,
    write_home_structured_data,
    write_seo,
    write_structured_data,
)
from lingvoblog.models.post import Language, Post
from lingvoblog.models.site import SiteSettings
from lingvoblog.site_settings import SiteSettingsStore, load_site_keywords

router = APIRouter(tags=["pages"])

DESCRIPTION_FALLBACK_LENGTH = 160
HOME_RECENT_POSTS = 10
HOME_DESCRIPTION = "Digital marketing, SMM, SEO va shaxsiy rivojlanish bo'yicha blog"

_PAGE = """<!DOCTYPE html>
<html lang="{lang}">
<head>
{head}
</head>
<body>
{body_start}
{body}
</body>
</html>"""


def _base_document() -> HeadDocument:
    return HeadDocument(
        [
            HeadElement(key="meta[charset]", tag="meta", attrs={"charset": "utf-8"}),
            HeadElement(
                key="meta[name=viewport]",
                tag="meta",
                attrs={"name": "viewport", "content": "width=device-width, initial-scale=1"},
            ),
        ]
    )


def _render(document: HeadDocument, body: str, language: str) -> HTMLResponse:
    return HTMLResponse(
        _PAGE.format(
            lang=language,
            head=document.render_head(),
            body_start=document.render_body_start(),
            body=body,
        )
    )


def _prepare(
    db: Database,
    settings: Settings,
    language: str,
    props: SeoProps,
    path: str,
    site: SiteSettings | None = None,
) -> HeadDocument:
    document = _base_document()
    inject_analytics(document, site or SiteSettingsStore(db).load())
    write_seo(
        document,
        props,
        language=language,
        origin=settings.site_url.rstrip("/"),
        path=path,
        site_keywords=load_site_keywords(db, language),
        twitter_handle=settings.twitter_handle,
    )
    return document


def post_description(post: Post, language: Language) -> str:
    """Localized excerpt, or the start of the localized content."""
    return post.localized("excerpt", language) or post.localized("content", language)[
        :DESCRIPTION_FALLBACK_LENGTH
    ]


@router.get("/post/{slug}", response_class=HTMLResponse)
def post_page(slug: str, db: DbDep, settings: SettingsDep, lang: Language = "uz") -> HTMLResponse:
    post = db.get_post_by_slug(slug)
    if post is None or not post.published:
        raise NotFoundError("Post not found")

    category = db.get_category(post.category_id) if post.category_id else None
    category_name = category.name(lang) if category else ""
    origin = settings.site_url.rstrip("/")
    path = f"/post/{post.slug}"
    url = f"{origin}{path}"
    title = post.localized("title", lang)
    description = post_description(post, lang)
    published_time = post.published_at.isoformat() if post.published_at else ""

    document = _prepare(
        db,
        settings,
        lang,
        SeoProps(
            title=f"{title} | {settings.author_name}",
            description=description,
            keywords=post.tags,
            image=post.featured_image or "",
            url=url,
            type="article",
            published_time=published_time,
            section=category_name,
            tags=post.tags,
            site_name=settings.site_name,
        ),
        path,
    )
    write_structured_data(
        document,
        ArticleProps(
            title=title,
            description=description,
            image=post.featured_image or "",
            published_time=published_time,
            modified_time=post.updated_at.isoformat(),
            author=settings.author_name,
            url=url,
            tags=post.tags,
            category=category_name,
        ),
        language=lang,
        origin=origin,
        publisher_name=settings.author_name,
        publisher_logo=settings.publisher_logo,
    )

    # Post content is stored as editor HTML and rendered as-is.
    body = (
        f"<article>\n<h1>{html.escape(title)}</h1>\n"
        f"{post.localized('content', lang)}\n</article>"
    )
    return _render(document, body, lang)


@router.get("/", response_class=HTMLResponse)
def home_page(db: DbDep, settings: SettingsDep, lang: Language = "uz") -> HTMLResponse:
    site = SiteSettingsStore(db).load()
    document = _prepare(
        db,
        settings,
        lang,
        SeoProps(
            title=f"{settings.site_name} | {settings.author_name}",
            description=HOME_DESCRIPTION,
            type="website",
            site_name=settings.site_name,
        ),
        "/",
        site=site,
    )
    write_home_structured_data(
        document,
        language=lang,
        site_name=settings.site_name,
        site_url=settings.site_url.rstrip("/"),
        description=HOME_DESCRIPTION,
        author=settings.author_name,
        logo=settings.publisher_logo,
        social_links=site.social_links(),
    )
    items = "\n".join(
        f'<li><a href="/post/{html.escape(p.slug)}?lang={lang}">'
        f"{html.escape(p.localized('title', lang))}</a></li>"
        for p in db.list_published_posts(limit=HOME_RECENT_POSTS)
    )
    return _render(document, f"<main>\n<ul>\n{items}\n</ul>\n</main>", lang)
