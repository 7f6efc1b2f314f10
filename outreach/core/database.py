from __future__ import annotations

import logging
from collections.abc import Generator
from typing import Any

from sqlalchemy import Engine, create_engine, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from outreach.core.config import get_settings
from outreach.errors import StorageUnavailableError


logger = logging.getLogger("outreach.lifecycle")


class Base(DeclarativeBase):
    pass


_engine: Engine | None = None
SessionLocal = sessionmaker(autocommit=False, autoflush=False)


def _engine_options(drivername: str) -> dict[str, Any]:
    settings = get_settings()
    if drivername.startswith("sqlite"):
        return {"connect_args": {"check_same_thread": False}}
    return {
        "pool_size": settings.db_pool_size,
        "pool_recycle": settings.db_pool_recycle_seconds,
        "pool_pre_ping": True,
        "connect_args": {"connect_timeout": settings.db_connect_timeout_seconds},
    }


def open_database() -> Engine:
    """Create the process-wide engine and bind the session factory to it.

    Creating the engine does not connect; it only loads the driver, so a
    missing driver surfaces here as ``StorageUnavailableError``.
    """
    global _engine
    if _engine is not None:
        return _engine

    url = get_settings().sqlalchemy_url
    try:
        engine = create_engine(url, **_engine_options(url.drivername))
    except ModuleNotFoundError as exc:
        raise StorageUnavailableError(f"database driver not installed: {exc.name}") from exc

    SessionLocal.configure(bind=engine)
    _engine = engine
    logger.info("database.opened", extra={"path": url.render_as_string(hide_password=True)})
    return engine


def close_database() -> None:
    global _engine
    if _engine is None:
        return
    _engine.dispose()
    SessionLocal.configure(bind=None)
    _engine = None
    logger.info("database.closed")


def get_db() -> Generator[Session, None, None]:
    open_database()
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


def check_connection(session: Session) -> bool:
    try:
        session.execute(text("SELECT 1"))
    except SQLAlchemyError as exc:
        logger.warning("database.unreachable", extra={"error": str(exc)})
        return False
    return True
