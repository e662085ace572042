"""create-post: insert one post on behalf of an API-key holder."""

from __future__ import annotations

import json
from typing import Any

import structlog
from fastapi import APIRouter, Request
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from starlette.concurrency import run_in_threadpool

from lingvoblog import metrics
from lingvoblog.api.deps import ApiKeyDep, DbDep, SettingsDep
from lingvoblog.api.schemas import CreatedPost, CreatePostResponse
from lingvoblog.errors import BlogError, InvalidRequestError, UpstreamError
from lingvoblog.models.post import REQUIRED_POST_FIELDS, PostCreate

router = APIRouter(tags=["posts"])

logger = structlog.get_logger()


async def read_json_object(request: Request) -> dict[str, Any]:
    """Parse the body as a JSON object; unparseable bodies are a server-side 500."""
    try:
        body = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise BlogError("Internal server error", details=str(exc)) from exc
    if not isinstance(body, dict):
        raise InvalidRequestError("Request body must be a JSON object")
    return body


def validate_post_payload(body: dict[str, Any]) -> PostCreate:
    """Check the required fields in order, then coerce the optional ones."""
    for field in REQUIRED_POST_FIELDS:
        if not body.get(field):
            raise InvalidRequestError(f"Missing required field: {field}")
    try:
        return PostCreate.model_validate(body)
    except ValidationError as exc:
        details = [{"loc": list(e["loc"]), "msg": e["msg"]} for e in exc.errors()]
        raise InvalidRequestError("Invalid post data", details=details) from exc


@router.post(
    "/create-post",
    status_code=201,
    response_model=CreatePostResponse,
    dependencies=[ApiKeyDep],
)
async def create_post(
    request: Request,
    db: DbDep,
    settings: SettingsDep,
) -> CreatePostResponse:
    body = await read_json_object(request)
    payload = validate_post_payload(body)
    logger.info("Creating post", slug=payload.slug, published=payload.published)

    try:
        post = await run_in_threadpool(db.create_post, payload)
    except SQLAlchemyError as exc:
        detail = str(getattr(exc, "orig", None) or exc)
        logger.error("Database error while creating post", slug=payload.slug, error=detail)
        raise UpstreamError("Failed to create post", details=detail) from exc

    metrics.posts_created_total.labels(published=str(post.published).lower()).inc()
    logger.info("Post created", post_id=post.id, slug=post.slug)

    return CreatePostResponse(
        post=CreatedPost(
            id=post.id,
            slug=post.slug,
            published=post.published,
            url=f"{settings.site_url.rstrip('/')}/post/{post.slug}",
        )
    )
