from __future__ import annotations

# petcare/services/utils.py
import logging
import sqlite3
from contextlib import contextmanager
from typing import Iterator

from ..db import Database
from ..errors import ConstraintError, DataAccessError

logger = logging.getLogger(__name__)


@contextmanager
def db_call(db: Database, action: str, atomic: bool = False, immediate: bool = False) -> Iterator[sqlite3.Connection]:
    """Scoped connection for one facade operation.

    Driver errors are logged with the operation name and re-raised as
    ConstraintError (integrity) or DataAccessError (everything else).
    With ``atomic=True`` the block runs inside BEGIN/COMMIT; ``immediate``
    additionally takes the write lock at BEGIN.
    """
    scope = db.transaction(immediate=immediate) if (atomic or immediate) else db.connect()
    try:
        with scope as conn:
            yield conn
    except sqlite3.IntegrityError as e:
        logger.error(f"{action}: constraint violated: {e}")
        raise ConstraintError(f"{action}: {e}") from e
    except sqlite3.Error as e:
        logger.error(f"{action}: database error: {e}")
        raise DataAccessError(f"{action}: {e}") from e


def one(row, mapper):
    return mapper(row) if row is not None else None


def many(rows, mapper) -> list:
    return [mapper(r) for r in rows]
