"""
Unit of work

Every multi-step controller operation runs inside one unit of work: writes are
flushed as the operation proceeds, the outermost scope commits once, and any
exception rolls the whole sequence back before propagating.
"""

from __future__ import annotations

import threading
from contextlib import contextmanager

from sqlalchemy.orm.exc import StaleDataError

from fleet_maintenance import db
from fleet_maintenance.buisness.core.errors import ConcurrencyError
from fleet_maintenance.logger import get_logger

logger = get_logger("fleet_maintenance.buisness.core.unit_of_work")

_state = threading.local()


@contextmanager
def unit_of_work(operation: str):
    """
    Transaction scope for one controller operation.

    Nested scopes join the outer one; only the outermost commits or rolls back.
    """
    depth = getattr(_state, "depth", 0)
    _state.depth = depth + 1
    try:
        yield db.session
        if depth == 0:
            db.session.commit()
            logger.debug(f"Committed unit of work: {operation}")
        else:
            db.session.flush()
    except StaleDataError as e:
        if depth == 0:
            db.session.rollback()
        logger.warning(f"Concurrent modification detected during {operation}: {e}")
        raise ConcurrencyError(f"Data changed while running {operation}; reload and retry") from e
    except Exception:
        if depth == 0:
            db.session.rollback()
            logger.debug(f"Rolled back unit of work: {operation}")
        raise
    finally:
        _state.depth = depth
