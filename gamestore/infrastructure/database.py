"""Database plumbing — engine, session factory and store error translation."""

from contextlib import contextmanager
from typing import Generator, Iterator

import structlog
from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.exc import OperationalError, SQLAlchemyError, TimeoutError as PoolTimeoutError
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from gamestore.config import Settings
from gamestore.core.exceptions import InternalServerException, ServiceUnavailableException

logger = structlog.get_logger(__name__)

Base = declarative_base()


def build_engine(settings: Settings) -> Engine:
    """Create the engine with bounded waits on every store call."""
    url = settings.DATABASE_URL
    timeout = settings.DB_TIMEOUT_SECONDS

    if url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False, "timeout": timeout}}
        if url in ("sqlite://", "sqlite:///:memory:"):
            # One shared connection, otherwise each checkout sees an empty database
            kwargs["poolclass"] = StaticPool
        return create_engine(url, **kwargs)

    connect_args = {}
    if url.startswith("postgresql"):
        connect_args = {
            "connect_timeout": timeout,
            "options": f"-c statement_timeout={timeout * 1000}",
        }
    return create_engine(
        url,
        pool_pre_ping=True,
        pool_timeout=timeout,
        connect_args=connect_args,
    )


def build_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


def get_db(request: Request) -> Generator[Session, None, None]:
    """FastAPI dependency that yields a session bound to the app's engine."""
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def handle_store_errors(message: str) -> Iterator[None]:
    """
    Translate database and file-system failures into AppErrors.

    The original error is logged; the caller only sees `message`.
    Application errors raised inside the block pass through untouched.
    """
    try:
        yield
    except (OperationalError, PoolTimeoutError):
        logger.exception("Store unavailable", operation=message)
        raise ServiceUnavailableException("Servicio no disponible, intente más tarde")
    except (SQLAlchemyError, OSError):
        logger.exception("Store operation failed", operation=message)
        raise InternalServerException(message)
