"""SEO metadata: title, meta description/keywords, Open Graph, Twitter, hreflang."""

from __future__ import annotations

from typing import TYPE_CHECKING, Literal

from pydantic import BaseModel, ConfigDict, Field

from lingvoblog.config import LANGUAGES
from lingvoblog.head.document import HeadElement
from lingvoblog.head.reconcile import ReconcilePolicy, reconcile

if TYPE_CHECKING:
    from collections.abc import Iterable

    from lingvoblog.head.document import HeadDocument
    from lingvoblog.head.reconcile import HeadPatch

OWNER = "seo"

ROBOTS_DIRECTIVE = "index, follow, max-image-preview:large, max-snippet:-1, max-video-preview:-1"

OG_LOCALES = {"uz": "uz_UZ", "ru": "ru_RU", "en": "en_US"}


class SeoProps(BaseModel):
    """Per-page inputs for the metadata writer."""

    model_config = ConfigDict(frozen=True)

    title: str = ""
    description: str = ""
    keywords: list[str] = Field(default_factory=list)
    image: str = ""
    url: str = ""
    type: Literal["website", "article"] = "website"
    published_time: str = ""
    author: str = ""
    section: str = ""
    tags: list[str] = Field(default_factory=list)
    site_name: str = "ShohruxDigital"


def merge_keywords(*groups: Iterable[str]) -> list[str]:
    """Concatenate keyword groups, dropping repeats but keeping first-seen order."""
    seen: dict[str, None] = {}
    for group in groups:
        for keyword in group:
            if keyword:
                seen.setdefault(keyword, None)
    return list(seen)


def canonical_url(url: str) -> str:
    """Drop the query string and one trailing slash."""
    path = url.split("?", 1)[0]
    cleaned = path[:-1] if path.endswith("/") else path
    return cleaned or url


def alternate_url(origin: str, path: str, language: str) -> str:
    """URL of ``path`` in ``language``, replacing any existing language prefix."""
    segments = [s for s in path.split("/") if s]
    if segments and segments[0] in LANGUAGES:
        segments = segments[1:]
    if not segments:
        return f"{origin}/{language}"
    return f"{origin}/{language}/{'/'.join(segments)}"


def _meta(name: str, content: str) -> HeadElement:
    return HeadElement(
        key=f"meta[name={name}]",
        tag="meta",
        attrs={"name": name, "content": content},
        owner=OWNER,
    )


def _property(name: str, content: str) -> HeadElement:
    return HeadElement(
        key=f"meta[property={name}]",
        tag="meta",
        attrs={"property": name, "content": content},
        owner=OWNER,
    )


def seo_elements(
    props: SeoProps,
    *,
    language: str,
    origin: str,
    path: str = "/",
    site_keywords: Iterable[str] = (),
    twitter_handle: str = "",
) -> list[HeadElement]:
    """Desired SEO tags for one page."""
    elements: list[HeadElement] = []
    keywords = merge_keywords(props.keywords, site_keywords, props.tags)
    current_url = props.url or f"{origin}{path}"

    if props.title:
        elements.append(HeadElement(key="title", tag="title", text=props.title, owner=OWNER))
    if props.description:
        elements.append(_meta("description", props.description))
    if keywords:
        elements.append(_meta("keywords", ", ".join(keywords)))
    elements.append(_meta("robots", ROBOTS_DIRECTIVE))

    # Open Graph
    if props.title:
        elements.append(_property("og:title", props.title))
    if props.description:
        elements.append(_property("og:description", props.description))
    if props.image:
        elements.append(_property("og:image", props.image))
        elements.append(_property("og:image:width", "1200"))
        elements.append(_property("og:image:height", "630"))
        elements.append(_property("og:image:type", "image/jpeg"))
    if current_url:
        elements.append(_property("og:url", current_url))
    elements.append(_property("og:type", props.type))
    elements.append(_property("og:site_name", props.site_name))
    elements.append(_property("og:locale", OG_LOCALES.get(language, "en_US")))

    # Twitter card
    elements.append(_meta("twitter:card", "summary_large_image"))
    if twitter_handle:
        elements.append(_meta("twitter:site", twitter_handle))
        elements.append(_meta("twitter:creator", twitter_handle))
    if props.title:
        elements.append(_meta("twitter:title", props.title))
    if props.description:
        elements.append(_meta("twitter:description", props.description))
    if props.image:
        elements.append(_meta("twitter:image", props.image))

    if props.type == "article":
        if props.published_time:
            elements.append(_property("article:published_time", props.published_time))
        if props.author:
            elements.append(_property("article:author", props.author))
        if props.section:
            elements.append(_property("article:section", props.section))
        for index, tag in enumerate(props.tags):
            elements.append(_property(f"article:tag:{index}", tag))

    if current_url:
        elements.append(
            HeadElement(
                key="link[rel=canonical]",
                tag="link",
                attrs={"rel": "canonical", "href": canonical_url(current_url)},
                owner=OWNER,
            )
        )

    for lang in (*LANGUAGES, "x-default"):
        href = origin if lang == "x-default" else alternate_url(origin, path, lang)
        elements.append(
            HeadElement(
                key=f"link[rel=alternate][hreflang={lang}]",
                tag="link",
                attrs={"rel": "alternate", "hreflang": lang, "href": href},
                owner=OWNER,
            )
        )

    return elements


def write_seo(
    document: HeadDocument,
    props: SeoProps,
    *,
    language: str,
    origin: str,
    path: str = "/",
    site_keywords: Iterable[str] = (),
    twitter_handle: str = "",
) -> HeadPatch:
    """Upsert the page's SEO tags; tags from earlier renders are overwritten, not duplicated."""
    desired = seo_elements(
        props,
        language=language,
        origin=origin,
        path=path,
        site_keywords=site_keywords,
        twitter_handle=twitter_handle,
    )
    return reconcile(document, desired, ReconcilePolicy.UPSERT)
