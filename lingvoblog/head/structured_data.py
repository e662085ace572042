"""JSON-LD structured data (Article + BreadcrumbList) for post pages."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field

from lingvoblog.head.document import HeadElement
from lingvoblog.head.reconcile import ReconcilePolicy, reconcile

if TYPE_CHECKING:
    from lingvoblog.head.document import HeadDocument
    from lingvoblog.head.reconcile import HeadPatch

OWNER = "structured-data"

ARTICLE_TYPE = "article"
BREADCRUMB_TYPE = "breadcrumb"

HOME_LABELS = {"uz": "Bosh sahifa", "ru": "Главная", "en": "Home"}

HOME_OWNER = "home-structured-data"
HOME_TYPES = ("website", "organization", "person", "home-breadcrumb")

IN_LANGUAGE = {"uz": "uz-UZ", "ru": "ru-RU", "en": "en-US"}

PERSON_DESCRIPTIONS = {
    "uz": "Digital marketing mutaxassisi va shaxsiy rivojlanish bo'yicha blogger",
    "ru": "Специалист по цифровому маркетингу и блогер по личностному развитию",
    "en": "Digital marketing specialist and personal development blogger",
}


class ArticleProps(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str
    description: str
    url: str
    image: str = ""
    published_time: str = ""
    modified_time: str = ""
    author: str = "Shohruxbek Foziljonov"
    tags: list[str] = Field(default_factory=list)
    category: str = ""


def article_schema(
    props: ArticleProps, language: str, publisher_name: str, publisher_logo: str
) -> dict[str, Any]:
    data: dict[str, Any] = {
        "@context": "https://schema.org",
        "@type": "Article",
        "headline": props.title,
        "description": props.description,
    }
    if props.image:
        data["image"] = [props.image]
    if props.published_time:
        data["datePublished"] = props.published_time
    if props.modified_time or props.published_time:
        data["dateModified"] = props.modified_time or props.published_time
    data["author"] = {"@type": "Person", "name": props.author}
    data["publisher"] = {
        "@type": "Organization",
        "name": publisher_name,
        "logo": {"@type": "ImageObject", "url": publisher_logo},
    }
    data["mainEntityOfPage"] = {"@type": "WebPage", "@id": props.url}
    data["keywords"] = ", ".join(props.tags)
    if props.category:
        data["articleSection"] = props.category
    data["inLanguage"] = language if language in HOME_LABELS else "en"
    return data


def breadcrumb_schema(props: ArticleProps, language: str, origin: str) -> dict[str, Any]:
    """Home=1, Blog=2, optional Category=3, post title last."""
    trail = [
        (HOME_LABELS.get(language, "Home"), origin),
        ("Blog", f"{origin}/blog"),
    ]
    if props.category:
        trail.append((props.category, f"{origin}/categories"))
    trail.append((props.title, props.url))

    return {
        "@context": "https://schema.org",
        "@type": "BreadcrumbList",
        "itemListElement": [
            {"@type": "ListItem", "position": position, "name": name, "item": item}
            for position, (name, item) in enumerate(trail, start=1)
        ],
    }


def _json_ld(data_type: str, data: dict[str, Any], owner: str = OWNER) -> HeadElement:
    # "<" as \u003c keeps user text from opening or closing tags inside the script
    text = json.dumps(data, ensure_ascii=False).replace("<", "\\u003c")
    return HeadElement(
        key=f"script[data-type={data_type}]",
        tag="script",
        attrs={"type": "application/ld+json", "data-type": data_type},
        text=text,
        owner=owner,
    )


def structured_data_elements(
    props: ArticleProps,
    *,
    language: str,
    origin: str,
    publisher_name: str,
    publisher_logo: str,
) -> list[HeadElement]:
    return [
        _json_ld(ARTICLE_TYPE, article_schema(props, language, publisher_name, publisher_logo)),
        _json_ld(BREADCRUMB_TYPE, breadcrumb_schema(props, language, origin)),
    ]


def write_structured_data(
    document: HeadDocument,
    props: ArticleProps,
    *,
    language: str,
    origin: str,
    publisher_name: str,
    publisher_logo: str,
) -> HeadPatch:
    """Replace the article and breadcrumb scripts with ones for ``props``."""
    desired = structured_data_elements(
        props,
        language=language,
        origin=origin,
        publisher_name=publisher_name,
        publisher_logo=publisher_logo,
    )
    return reconcile(document, desired, ReconcilePolicy.REPLACE, owner=OWNER)


def clear_structured_data(document: HeadDocument) -> HeadPatch:
    """Remove every script this writer added (route leaves the post page)."""
    return reconcile(document, [], ReconcilePolicy.REPLACE, owner=OWNER)


def home_schemas(
    *,
    language: str,
    site_name: str,
    site_url: str,
    description: str,
    author: str,
    logo: str,
    social_links: list[str],
) -> dict[str, dict[str, Any]]:
    """WebSite (with search action), Organization, Person and a one-item breadcrumb."""
    same_as = [link for link in social_links if link]
    return {
        "website": {
            "@context": "https://schema.org",
            "@type": "WebSite",
            "name": site_name,
            "url": site_url,
            "description": description,
            "inLanguage": IN_LANGUAGE.get(language, "en-US"),
            "potentialAction": {
                "@type": "SearchAction",
                "target": {
                    "@type": "EntryPoint",
                    "urlTemplate": f"{site_url}/blog?search={{search_term_string}}",
                },
                "query-input": "required name=search_term_string",
            },
        },
        "organization": {
            "@context": "https://schema.org",
            "@type": "Organization",
            "name": site_name,
            "url": site_url,
            "logo": logo,
            "description": description,
            "sameAs": same_as,
            "contactPoint": {
                "@type": "ContactPoint",
                "contactType": "customer service",
                "availableLanguage": ["Uzbek", "Russian", "English"],
            },
        },
        "person": {
            "@context": "https://schema.org",
            "@type": "Person",
            "name": author,
            "url": site_url,
            "jobTitle": "Digital Marketing Specialist",
            "description": PERSON_DESCRIPTIONS.get(language, PERSON_DESCRIPTIONS["en"]),
            "sameAs": same_as,
        },
        "home-breadcrumb": {
            "@context": "https://schema.org",
            "@type": "BreadcrumbList",
            "itemListElement": [
                {
                    "@type": "ListItem",
                    "position": 1,
                    "name": HOME_LABELS.get(language, "Home"),
                    "item": site_url,
                }
            ],
        },
    }


def home_structured_data_elements(**kwargs: Any) -> list[HeadElement]:
    schemas = home_schemas(**kwargs)
    return [_json_ld(data_type, schemas[data_type], owner=HOME_OWNER) for data_type in HOME_TYPES]


def write_home_structured_data(document: HeadDocument, **kwargs: Any) -> HeadPatch:
    """Replace the home page's site-level JSON-LD. Accepts the ``home_schemas`` arguments."""
    desired = home_structured_data_elements(**kwargs)
    return reconcile(document, desired, ReconcilePolicy.REPLACE, owner=HOME_OWNER)


def clear_home_structured_data(document: HeadDocument) -> HeadPatch:
    return reconcile(document, [], ReconcilePolicy.REPLACE, owner=HOME_OWNER)
