# taskapi/database.py
"""Database engine, idempotent schema creation and the per-request session."""

import logging
from typing import Optional

from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, SQLModel, create_engine

from taskapi import config
from taskapi.models import Task  # noqa: F401  registers the tasks table

logger = logging.getLogger(__name__)


def build_engine(url: Optional[str] = None, echo: bool = config.SQL_ECHO) -> Engine:
    """Create the pooled engine for ``url`` (defaults to the configured one)."""
    url = url or config.database_url()
    if url.startswith("sqlite"):
        return create_engine(url, echo=echo, connect_args={"check_same_thread": False})
    return create_engine(url, echo=echo, pool_pre_ping=True)


engine = build_engine()


def create_db_and_tables(
    bind: Optional[Engine] = None, strict: Optional[bool] = None
) -> bool:
    """Create the tasks table if it is absent.

    Safe to call on every start. A failure is logged and reported by
    returning False; with ``strict`` (or SCHEMA_INIT_STRICT) it is re-raised
    so the process refuses to start.
    """
    if bind is None:
        bind = engine
    if strict is None:
        strict = config.SCHEMA_INIT_STRICT
    try:
        SQLModel.metadata.create_all(bind)
    except SQLAlchemyError as exc:
        logger.error("Error creating table: %s", exc)
        if strict:
            raise
        return False
    logger.info("Tasks table ready")
    return True


def get_session():
    """Yield a database session for FastAPI dependency injection."""
    with Session(engine) as session:
        yield session
