import logging
from collections.abc import Iterator
from contextlib import contextmanager
from functools import lru_cache

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from resume_builder.app.core.config import get_settings

log = logging.getLogger(__name__)


@lru_cache
def get_engine() -> Engine:
    """Return the process-wide engine for the configured PostgreSQL database.

    Notes:
        1. Built lazily on first use so importing the app never connects.
        2. `pool_pre_ping` drops stale pooled connections before they are used.

    """
    _msg = "Creating database engine"
    log.debug(_msg)
    return create_engine(
        str(get_settings().database_url),
        echo=False,
        pool_pre_ping=True,
    )


@lru_cache
def get_session_local() -> sessionmaker:
    """Return the session factory bound to `get_engine()`."""
    return sessionmaker(autocommit=False, autoflush=False, bind=get_engine())


@contextmanager
def session_scope() -> Iterator[Session]:
    """Open a session for work that runs outside a request.

    Yields:
        Session: A new session. Callers commit their own work.

    Notes:
        1. An exception inside the block rolls the session back and propagates.
        2. The session is closed on every exit path.

    """
    db = get_session_local()()
    try:
        yield db
    except Exception:
        _msg = "Rolling back database session"
        log.debug(_msg)
        db.rollback()
        raise
    finally:
        db.close()


def get_db() -> Iterator[Session]:
    """FastAPI dependency yielding one session per request."""
    with session_scope() as db:
        yield db


def create_tables() -> None:
    """Create all tables registered on the ORM metadata.

    Notes:
        1. Import the models package so every model is registered on `Base.metadata`.
        2. Existing tables are left untouched.

    """
    from resume_builder.app.models import Base

    _msg = "Creating database tables"
    log.info(_msg)
    Base.metadata.create_all(bind=get_engine())
