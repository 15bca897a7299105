from __future__ import annotations

"""Process-wide runtime state.

Only the SQLite path lives here. The database is the single source of truth
for drafts, picks, trades and player draft status; nothing else is cached
in memory between requests.
"""

import threading
from typing import Optional

_LOCK = threading.Lock()
_DB_PATH: Optional[str] = None


def set_db_path(path: str) -> None:
    global _DB_PATH
    p = str(path or "").strip()
    if not p:
        raise ValueError("db_path must be a non-empty string")
    with _LOCK:
        _DB_PATH = p


def get_db_path() -> str:
    with _LOCK:
        if _DB_PATH is None:
            raise RuntimeError("db_path is not set; call state.set_db_path() during startup")
        return _DB_PATH


def reset_db_path() -> None:
    global _DB_PATH
    with _LOCK:
        _DB_PATH = None
