"""ping-search-engines: ask search engines to (re)crawl changed URLs."""

from __future__ import annotations

from fastapi import APIRouter, Request
from pydantic import ValidationError
from starlette.concurrency import run_in_threadpool

from lingvoblog.api.deps import SettingsDep
from lingvoblog.api.routes.posts import read_json_object
from lingvoblog.api.schemas import PingRequest, PingResponse
from lingvoblog.clients.search_engines import SearchEngineNotifier
from lingvoblog.errors import InvalidRequestError

router = APIRouter(tags=["indexing"])


@router.post("/ping-search-engines", response_model=PingResponse)
async def ping_search_engines(request: Request, settings: SettingsDep) -> PingResponse:
    body = await read_json_object(request)
    try:
        targets = PingRequest.model_validate(body).targets()
    except ValidationError as exc:
        raise InvalidRequestError("URL(s) are required", details=str(exc)) from exc
    if not targets:
        raise InvalidRequestError("URL(s) are required")

    notifier = SearchEngineNotifier(settings.site_url, settings.indexnow_key)
    results = await run_in_threadpool(notifier.notify, targets)
    return PingResponse(results=results, submitted_urls=targets)
