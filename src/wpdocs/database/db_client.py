from contextlib import contextmanager
from functools import wraps
from typing import Callable, Generator, TypeVar

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.exc import DBAPIError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from ..errors import BackingStoreError
from ..utils.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


def get_engine(database_url: str, echo: bool = False) -> Engine:
    return create_engine(database_url, future=True, echo=echo)


def get_session(database_url: str, echo: bool = False) -> Session:
    """Get a SQLAlchemy session (caller must close it)."""
    engine = get_engine(database_url, echo=echo)
    return sessionmaker(bind=engine, autoflush=False, autocommit=False)()


@contextmanager
def session_context(database_url: str, echo: bool = False) -> Generator[Session, None, None]:
    """
    Context manager for read-only SQLAlchemy sessions.

    The session is rolled back on error and always closed. Nothing is ever
    committed: this layer does not write to the store.

    Usage:
        with session_context(database_url) as session:
            service = ContentService(session)
    """
    session = get_session(database_url, echo=echo)
    try:
        yield session
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def engine_diagnostic(exc: SQLAlchemyError) -> str:
    """Return the underlying driver's message when there is one."""
    if isinstance(exc, DBAPIError) and exc.orig is not None:
        return str(exc.orig)
    return str(exc)


def translate_store_errors(func: Callable[..., T]) -> Callable[..., T]:
    """Re-raise any SQLAlchemy failure from a repo function as BackingStoreError."""

    @wraps(func)
    def wrapper(*args, **kwargs) -> T:
        try:
            return func(*args, **kwargs)
        except SQLAlchemyError as exc:
            message = engine_diagnostic(exc)
            logger.error(f"Store query failed in {func.__name__}: {message}")
            raise BackingStoreError(message) from exc

    return wrapper
