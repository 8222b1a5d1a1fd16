from contextlib import contextmanager

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from library_app.errors import StorageError


@contextmanager
def unit_of_work(session, action: str):
    """
    Groups the writes made inside the block into one transaction.

    Commits when the block finishes, rolls back when it raises. Driver
    errors come out as StorageError; domain errors raised inside the block
    are re-raised unchanged after the rollback.
    """
    try:
        yield session
        session.commit()
    except SQLAlchemyError as e:
        session.rollback()
        current_app.logger.exception(f"[storage] {action} failed: {e}")
        raise StorageError(action, str(e)) from e
    except Exception:
        session.rollback()
        raise
