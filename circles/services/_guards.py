"""
Session guard shared by the services.

Storage failures are rolled back, logged with their traceback and surfaced
to callers as ``Internal`` so driver details never reach API consumers.
"""
import logging
from contextlib import contextmanager

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from circles.utils.errors import Internal

logger = logging.getLogger(__name__)


@contextmanager
def storage_guard(db: Session, action: str):
    try:
        yield
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("storage_failure: action=%s", action)
        raise Internal() from e
