# db_schema/init.py
from __future__ import annotations

import sqlite3
from types import ModuleType
from typing import List, Optional, Sequence

from . import core, draft, players, trades
from .registry import EnsureColumnsFn, apply_all

# managers -> drafts/picks/transfers -> trades -> player draft status
DEFAULT_MODULES: Sequence[ModuleType] = (core, draft, trades, players)


def apply_schema(
    cur: sqlite3.Cursor,
    *,
    now: str,
    schema_version: str,
    ensure_columns: EnsureColumnsFn,
    modules: Optional[Sequence[ModuleType]] = None,
) -> List[str]:
    """Create or migrate every draft-engine table; returns module names applied."""
    return apply_all(
        cur,
        modules=DEFAULT_MODULES if modules is None else modules,
        now=now,
        schema_version=schema_version,
        ensure_columns=ensure_columns,
    )
