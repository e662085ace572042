"""SQLAlchemy engine factory and session maker."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import create_engine, event
from sqlalchemy.engine import make_url
from sqlalchemy.orm import Session, sessionmaker

if TYPE_CHECKING:
    from sqlalchemy import Engine


def _to_url(target: str | object) -> str:
    """Accept a SQLAlchemy URL, a filesystem path, or ':memory:'."""
    value = str(target)
    if value == ":memory:":
        return "sqlite://"
    if "://" in value:
        return value
    return f"sqlite:///{value}"


def create_db_engine(target: str | object, echo: bool = False) -> Engine:
    """Create an engine for the posts database.

    SQLite files get WAL mode and enforced foreign keys; any other URL (the
    managed Postgres in production) is passed through unchanged.
    """
    url = _to_url(target)
    if make_url(url).get_backend_name() != "sqlite":
        return create_engine(url, echo=echo, pool_pre_ping=True)

    engine = create_engine(url, echo=echo, connect_args={"timeout": 30.0})

    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_conn: object, _connection_record: object) -> None:
        cursor = dbapi_conn.cursor()  # type: ignore[union-attr]
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    return engine


def create_session_factory(engine: Engine) -> sessionmaker[Session]:
    """Create a sessionmaker bound to the given engine."""
    return sessionmaker(bind=engine, expire_on_commit=False)
