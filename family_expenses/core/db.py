from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy import create_engine
from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.orm.exc import StaleDataError

from family_expenses.core.config import settings
from family_expenses.core.errors import ConflictError

logger = logging.getLogger(__name__)

_connect_args = {"check_same_thread": False} if settings.database_url.startswith("sqlite") else {}

engine = create_engine(settings.database_url, pool_pre_ping=True, connect_args=_connect_args)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Iterator[Session]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def transaction(db: Session) -> Iterator[Session]:
    """
    Run one operation as a single all-or-nothing unit of work.

    Commits on success. On any failure the session is rolled back and the error
    re-raised; backend conflicts (version mismatch, lock/serialization failure,
    a lost race on a unique key) are re-raised as ConflictError.
    """
    try:
        yield db
        db.commit()
    except StaleDataError as exc:
        db.rollback()
        logger.warning("transaction aborted on version conflict: %s", exc)
        raise ConflictError("records were changed by another request; retry the operation") from exc
    except IntegrityError as exc:
        db.rollback()
        logger.warning("transaction aborted on integrity conflict: %s", exc.orig)
        raise ConflictError("records were changed by another request; retry the operation") from exc
    except OperationalError as exc:
        db.rollback()
        logger.warning("transaction aborted by backend: %s", exc.orig)
        raise ConflictError("storage backend aborted the transaction; retry the operation") from exc
    except Exception:
        db.rollback()
        raise
