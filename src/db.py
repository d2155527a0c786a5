"""Database engine/session helpers."""

from __future__ import annotations

from sqlalchemy import create_engine, text
from sqlalchemy.engine import URL, Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from domain.errors import DatabaseConnectionError


def create_db_engine(db_url: str | URL) -> Engine:
    """Create a SQLAlchemy engine with conservative defaults for scripts."""
    return create_engine(db_url, pool_pre_ping=True, future=True)


def create_session_factory(engine: Engine) -> sessionmaker[Session]:
    """Create a session factory bound to the provided engine."""
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False, future=True)


def check_connection(engine: Engine) -> None:
    """Open one connection so an unreachable database fails before any export work."""
    try:
        with engine.connect() as connection:
            connection.execute(text("SELECT 1"))
    except SQLAlchemyError as exc:
        database = engine.url.database or engine.url.render_as_string(hide_password=True)
        raise DatabaseConnectionError(f"could not connect to {database}: {exc}") from exc
