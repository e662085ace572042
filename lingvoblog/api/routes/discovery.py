"""Crawler-facing documents: llms.txt, markdown pages, sitemap.xml and robots.txt."""

from __future__ import annotations

import structlog
from fastapi import APIRouter
from fastapi.responses import JSONResponse, PlainTextResponse, Response
from sqlalchemy.exc import SQLAlchemyError

from lingvoblog.api.deps import DbDep, SettingsDep
from lingvoblog.digest import build_llms_txt
from lingvoblog.markdown_pages import ERROR_MARKDOWN, build_markdown
from lingvoblog.sitemap import render_robots_txt, render_sitemap

# Mounted under /functions/v1
router = APIRouter(tags=["discovery"])
# The same documents at their conventional root paths
public_router = APIRouter(tags=["discovery"])

logger = structlog.get_logger()

ONE_HOUR = "public, max-age=3600"
ONE_DAY = "public, max-age=86400"
MARKDOWN = "text/markdown; charset=utf-8"


def llms_txt(db: DbDep, settings: SettingsDep) -> PlainTextResponse:
    text, complete = build_llms_txt(db, settings)
    headers = {"Cache-Control": ONE_HOUR} if complete else {}
    return PlainTextResponse(text, headers=headers)


def markdown_content(
    db: DbDep,
    settings: SettingsDep,
    page: str | None = None,
    slug: str | None = None,
    lang: str = "en",
) -> Response:
    try:
        text = build_markdown(db, settings, page=page, slug=slug, language=lang)
    except Exception as exc:
        logger.error("Markdown content failed", error=str(exc), exc_info=exc)
        return Response(ERROR_MARKDOWN, status_code=500, media_type=MARKDOWN)

    if text is None:
        return PlainTextResponse("Post not found", status_code=404)
    return Response(text, media_type=MARKDOWN, headers={"Cache-Control": ONE_HOUR})


def sitemap(db: DbDep, settings: SettingsDep) -> Response:
    try:
        posts = db.list_published_posts()
        categories = db.list_categories()
    except SQLAlchemyError as exc:
        logger.error("Sitemap generation failed", error=str(exc))
        return JSONResponse(status_code=500, content={"error": str(exc)})

    logger.info("Generated sitemap", posts=len(posts), categories=len(categories))
    return Response(
        content=render_sitemap(posts, categories, settings.site_url),
        media_type="application/xml; charset=utf-8",
        headers={"Cache-Control": ONE_HOUR},
    )


def robots(settings: SettingsDep) -> PlainTextResponse:
    return PlainTextResponse(
        render_robots_txt(settings.site_url, settings.functions_base_url),
        headers={"Cache-Control": ONE_DAY},
    )


for _path, _public_path, _endpoint, _response_class in (
    ("/llms-txt", "/llms.txt", llms_txt, PlainTextResponse),
    ("/sitemap", "/sitemap.xml", sitemap, Response),
    ("/robots", "/robots.txt", robots, PlainTextResponse),
):
    router.add_api_route(_path, _endpoint, methods=["GET"], response_class=_response_class)
    public_router.add_api_route(
        _public_path, _endpoint, methods=["GET"], response_class=_response_class
    )

router.add_api_route(
    "/markdown-content", markdown_content, methods=["GET"], response_class=Response
)
