"""FastAPI dependency injection."""

from __future__ import annotations

import secrets
from typing import Annotated

from fastapi import Depends, Header, Request

from lingvoblog.config import Settings
from lingvoblog.db import Database
from lingvoblog.errors import AuthenticationError


def _get_db(request: Request) -> Database:
    """Get the database instance from app state."""
    return request.app.state.db  # type: ignore[no-any-return]


def _get_settings(request: Request) -> Settings:
    """Get the settings instance from app state."""
    return request.app.state.settings  # type: ignore[no-any-return]


DbDep = Annotated[Database, Depends(_get_db)]
SettingsDep = Annotated[Settings, Depends(_get_settings)]


def require_api_key(
    settings: SettingsDep,
    x_api_key: Annotated[str | None, Header()] = None,
) -> None:
    """Reject the request unless ``x-api-key`` matches the configured secret."""
    expected = settings.create_post_api_key
    if (
        not x_api_key
        or not expected
        or not secrets.compare_digest(x_api_key.encode(), expected.encode())
    ):
        raise AuthenticationError("Unauthorized - Invalid API key")


ApiKeyDep = Depends(require_api_key)
