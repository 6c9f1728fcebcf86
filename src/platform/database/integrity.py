from contextlib import contextmanager
from typing import Iterator, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from src.platform.exception.exceptions import PersistenceError, UniqueViolationError


def _constraint_name(error: IntegrityError) -> Optional[str]:
    # asyncpg keeps the violated constraint on the driver exception behind the DBAPI wrapper
    driver_error = getattr(error.orig, '__cause__', None) or error.orig
    return getattr(driver_error, 'constraint_name', None)


@contextmanager
def translate_integrity_error() -> Iterator[None]:
    """Re-raise unique/exclusion violations as UniqueViolationError."""
    try:
        yield
    except IntegrityError as e:
        raise UniqueViolationError(str(e.orig), constraint=_constraint_name(e)) from e


@contextmanager
def translate_persistence_error() -> Iterator[None]:
    """Re-raise any SQLAlchemy failure as PersistenceError."""
    try:
        yield
    except SQLAlchemyError as e:
        raise PersistenceError(str(e)) from e
