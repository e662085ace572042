"""Health check and config endpoints."""

from __future__ import annotations

from fastapi import APIRouter
from sqlalchemy.exc import SQLAlchemyError

from lingvoblog import __version__
from lingvoblog.api.deps import DbDep, SettingsDep
from lingvoblog.api.schemas import ConfigCheckResponse, HealthResponse

router = APIRouter(tags=["system"])


@router.get("/health", response_model=HealthResponse)
def health_check(
    db: DbDep,
) -> HealthResponse:
    db_ok = False
    try:
        db.check_connection()
        db_ok = True
    except SQLAlchemyError:
        pass

    return HealthResponse(
        status="healthy" if db_ok else "unhealthy",
        version=__version__,
        db_connected=db_ok,
    )


@router.get("/config/check", response_model=ConfigCheckResponse)
def config_check(
    settings: SettingsDep,
) -> ConfigCheckResponse:
    return ConfigCheckResponse(
        configured={
            "create_post_api_key": bool(settings.create_post_api_key),
            "smtp": bool(settings.smtp_password),
            "indexnow": bool(settings.indexnow_key),
            "database_url": bool(settings.database_url),
        }
    )
