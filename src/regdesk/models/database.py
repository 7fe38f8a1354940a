"""Database engine construction and per-request sessions"""

import logging

from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel

logger = logging.getLogger(__name__)


def create_db_engine(database_url: str, echo: bool = False) -> Engine:
    """Create the SQLAlchemy engine for the given URL.

    In-memory SQLite URLs share one connection so every session sees the
    same database.
    """
    if not database_url:
        raise ValueError(
            "DATABASE_URL environment variable is not set. "
            "Set DATABASE_URL in the environment or local .env file."
        )

    kwargs = {"echo": echo}
    if database_url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        if database_url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
    else:
        kwargs["pool_pre_ping"] = True

    return create_engine(database_url, **kwargs)


def init_db(engine: Engine) -> None:
    """Create any missing tables for the registered models"""
    # Import models so their tables are registered on the metadata
    import regdesk.models  # noqa: F401

    SQLModel.metadata.create_all(engine)
    logger.info("Database tables verified")


def get_db(request: Request):
    """Get database session bound to the application's engine"""
    with Session(request.app.state.engine) as session:
        yield session
