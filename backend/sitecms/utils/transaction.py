from contextlib import contextmanager
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm.exc import StaleDataError
from sitecms.extensions import db
from sitecms.domain.exceptions import Conflict

# Driver errors that mean another writer won the row locks
LOCK_CONFLICT_CODES = {"40P01", "40001"}
LOCK_CONFLICT_MARKERS = ("deadlock", "could not serialize", "database is locked")


def is_lock_conflict(exc: OperationalError) -> bool:
    orig = exc.orig
    if getattr(orig, "pgcode", None) in LOCK_CONFLICT_CODES:
        return True
    message = str(orig).lower()
    return any(marker in message for marker in LOCK_CONFLICT_MARKERS)


@contextmanager
def transactional():
    """
    Context manager for database transactions.

    A StaleDataError means another writer committed first against the
    same row version; a deadlock or serialization failure means it held
    the row locks. Both surface as Conflict so callers can re-read.
    """
    try:
        yield
        db.session.commit()
    except StaleDataError as exc:
        db.session.rollback()
        raise Conflict("Content was modified concurrently; re-read and retry") from exc
    except OperationalError as exc:
        db.session.rollback()
        if is_lock_conflict(exc):
            raise Conflict("Content is being modified concurrently; re-read and retry") from exc
        raise
    except Exception:
        db.session.rollback()
        raise
