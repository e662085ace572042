"""FastAPI test client fixtures."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from lingvoblog.api.app import include_routes
from lingvoblog.api.middleware import add_exception_handlers, add_middleware

if TYPE_CHECKING:
    from lingvoblog.config import Settings
    from lingvoblog.db import Database

API_KEY = "test-api-key"


def _create_test_app(db: Database, settings: Settings) -> FastAPI:
    """Create a FastAPI app with injected test db/settings (no lifespan)."""
    app = FastAPI(title="lingvoblog test")

    app.state.db = db
    app.state.settings = settings

    add_middleware(app)
    add_exception_handlers(app)
    include_routes(app)

    return app


@pytest.fixture()
def client(db: Database, settings: Settings) -> TestClient:
    app = _create_test_app(db, settings)
    return TestClient(app)


@pytest.fixture()
def auth_headers() -> dict[str, str]:
    return {"x-api-key": API_KEY}
