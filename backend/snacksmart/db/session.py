"""
SQLAlchemy engine and session factory (Postgres in deployment, SQLite for tests/dev).
"""
from __future__ import annotations

from contextlib import contextmanager
from typing import Generator

from sqlalchemy import create_engine, event
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from snacksmart.core.config import get_settings

Base = declarative_base()

_engine = None
_SessionLocal = None


def _enable_sqlite_fks(dbapi_connection, connection_record) -> None:
    # SQLite ignores ON DELETE CASCADE unless enabled per connection
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def get_engine():
    global _engine
    if _engine is None:
        settings = get_settings()
        if settings.is_sqlite:
            kwargs = {"connect_args": {"check_same_thread": False}}
            if settings.database_url in ("sqlite://", "sqlite:///:memory:"):
                # One shared connection so every session sees the same in-memory DB
                kwargs["poolclass"] = StaticPool
            _engine = create_engine(settings.database_url, echo=False, **kwargs)
            event.listen(_engine, "connect", _enable_sqlite_fks)
        else:
            _engine = create_engine(
                settings.database_url,
                pool_size=settings.pool_size,
                max_overflow=settings.max_overflow,
                pool_pre_ping=True,
                echo=False,
            )
    return _engine


def get_session_factory():
    global _SessionLocal
    if _SessionLocal is None:
        _SessionLocal = sessionmaker(
            autocommit=False,
            autoflush=False,
            expire_on_commit=False,
            bind=get_engine(),
        )
    return _SessionLocal


@contextmanager
def get_db() -> Generator[Session, None, None]:
    """Context manager for a single request-scoped DB session."""
    factory = get_session_factory()
    session = factory()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def create_all() -> None:
    """Create every mapped table (tests and local SQLite dev; Postgres uses migrations/)."""
    import snacksmart.models  # noqa: F401  (registers mappers)

    Base.metadata.create_all(bind=get_engine())


def drop_all() -> None:
    import snacksmart.models  # noqa: F401

    Base.metadata.drop_all(bind=get_engine())
