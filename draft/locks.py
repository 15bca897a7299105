from __future__ import annotations

"""draft.locks

Process-local serialization for draft mutations.

Pick completion, trade create/cancel/delete, round add/remove, toggle active,
reset and delete are each a read-modify-write of the stored draft aggregate.
They all take this lock and then open a single SQLite transaction.

Constraints:
- SQLite (draft_repo.DraftRepo) is the SSOT; the lock only keeps two writers
  of the same process from interleaving.
- Re-entrant: delete_trade -> cancel_trade nests on one thread.
- Lock order: draft_write_lock -> repo.transaction(). Never acquire the lock
  from inside an open transaction.
"""

import logging
import time
from contextlib import contextmanager
from threading import RLock
from typing import Iterator

from .errors import INVALID_REQUEST, WRITE_LOCK_TIMEOUT, ConflictError, RuleViolation

logger = logging.getLogger(__name__)

_DRAFT_WRITE_LOCK = RLock()


def _coerce_timeout(timeout_s: float | None) -> float | None:
    if timeout_s is None:
        return None
    try:
        return max(0.0, float(timeout_s))
    except (TypeError, ValueError) as exc:
        raise RuleViolation(
            INVALID_REQUEST,
            "Lock timeout must be a number of seconds",
            {"timeout_s": repr(timeout_s)},
        ) from exc


@contextmanager
def draft_write_lock(*, reason: str = "", timeout_s: float | None = None) -> Iterator[None]:
    """Hold the draft write lock for the duration of the block.

    reason is a short label such as "COMPLETE_PICK:D..:7"; it is logged and,
    on timeout, returned to the caller in the error details.

    Raises:
        ConflictError(WRITE_LOCK_TIMEOUT): another writer kept the lock past
            timeout_s. None waits forever.
    """
    timeout = _coerce_timeout(timeout_s)
    started = time.monotonic()
    if timeout is None:
        acquired = _DRAFT_WRITE_LOCK.acquire()
    else:
        acquired = _DRAFT_WRITE_LOCK.acquire(timeout=timeout)

    if not acquired:
        logger.warning("draft write lock timed out after %.3fs: %s", timeout, reason or "-")
        raise ConflictError(
            WRITE_LOCK_TIMEOUT,
            "Another draft change is in progress; retry shortly",
            {"reason": reason, "timeout_s": timeout},
        )

    waited = time.monotonic() - started
    logger.debug("draft write lock acquired after %.3fs: %s", waited, reason or "-")
    try:
        yield
    finally:
        _DRAFT_WRITE_LOCK.release()


__all__ = [
    "draft_write_lock",
]
