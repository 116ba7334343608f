"""
Database Connection Module

Synchronous engine and session management.

Usage:
    # Scripts and background work
    with get_db_session() as session:
        session.add(record)

    # FastAPI routes
    @router.get("/things")
    def list_things(session: Session = Depends(get_session)):
        ...
"""

import logging
from contextlib import contextmanager
from typing import Generator, Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import NullPool, QueuePool

from config.database import DatabaseSettings, get_database_settings

from .models import Base

logger = logging.getLogger(__name__)

# Global sync engine and session factory (lazy initialization)
_sync_engine: Optional[Engine] = None
_sync_session_factory: Optional[sessionmaker] = None


def get_sync_engine(settings: Optional[DatabaseSettings] = None) -> Engine:
    """
    Get or create the SQLAlchemy engine.

    Args:
        settings: Database settings. If None, loads from environment.

    Returns:
        Engine: Synchronous SQLAlchemy engine.
    """
    global _sync_engine

    if _sync_engine is None:
        settings = settings or get_database_settings()

        logger.info("Creating database engine", extra={"sqlite": settings.is_sqlite})

        # Pool configuration differs for SQLite vs PostgreSQL
        if settings.is_sqlite:
            settings.ensure_sqlite_directory()
            pool_class = NullPool
            pool_kwargs = {}
        else:
            pool_class = QueuePool
            pool_kwargs = {
                "pool_size": settings.pool_size,
                "max_overflow": settings.max_overflow,
                "pool_recycle": settings.pool_recycle,
                "pool_pre_ping": settings.pool_pre_ping,
            }

        _sync_engine = create_engine(
            settings.sync_url,
            echo=settings.echo_sql,
            poolclass=pool_class,
            connect_args=settings.get_connect_args(),
            **pool_kwargs,
        )

    return _sync_engine


def get_sync_session_factory(settings: Optional[DatabaseSettings] = None) -> sessionmaker:
    """
    Get or create the session factory.

    Args:
        settings: Optional database settings.

    Returns:
        sessionmaker: Factory for creating sessions.
    """
    global _sync_session_factory

    if _sync_session_factory is None:
        engine = get_sync_engine(settings)
        _sync_session_factory = sessionmaker(
            bind=engine,
            expire_on_commit=False,
            autoflush=False,
        )

    return _sync_session_factory


def init_db(engine: Optional[Engine] = None) -> None:
    """Create any missing tables."""
    engine = engine or get_sync_engine()
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables ensured")


@contextmanager
def get_db_session(settings: Optional[DatabaseSettings] = None) -> Generator[Session, None, None]:
    """
    Get a database session as a context manager.

    Yields:
        Session: SQLAlchemy session that commits on success and rolls back on error.
    """
    session_factory = get_sync_session_factory(settings)
    session = session_factory()

    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def close_sync_engine() -> None:
    """
    Dispose of the engine and its pooled connections.

    Should be called during application shutdown.
    """
    global _sync_engine, _sync_session_factory

    if _sync_engine is not None:
        logger.info("Closing database engine")
        _sync_engine.dispose()
        _sync_engine = None
        _sync_session_factory = None


def get_session() -> Generator[Session, None, None]:
    """FastAPI dependency for sessions."""
    with get_db_session() as session:
        yield session
