# db_schema/registry.py
"""Ordered schema modules and the loop that applies them.

A schema module exposes ``ddl(*, now, schema_version) -> str`` and, when it
has columns added after the first release, ``migrate(cur, *, ensure_columns)``.
"""

from __future__ import annotations

import logging
import sqlite3
from types import ModuleType
from typing import Callable, Iterable, List, Mapping

logger = logging.getLogger(__name__)

# Same shape as DraftRepo._ensure_table_columns(cur, table, columns)
EnsureColumnsFn = Callable[[sqlite3.Cursor, str, Mapping[str, str]], None]


def _module_name(module: ModuleType) -> str:
    return str(getattr(module, "__name__", module)).rsplit(".", 1)[-1]


def check_modules(modules: Iterable[ModuleType]) -> List[ModuleType]:
    """Materialize modules, rejecting any without a callable ddl()."""
    out: List[ModuleType] = []
    seen: set[str] = set()
    for m in modules:
        name = _module_name(m)
        if not callable(getattr(m, "ddl", None)):
            raise TypeError(f"schema module {name!r} has no ddl()")
        if name in seen:
            raise ValueError(f"schema module {name!r} listed twice")
        seen.add(name)
        out.append(m)
    return out


def apply_all(
    cur: sqlite3.Cursor,
    *,
    modules: Iterable[ModuleType],
    now: str,
    schema_version: str,
    ensure_columns: EnsureColumnsFn,
) -> List[str]:
    """Run every module's DDL, then every migrate() hook, in list order.

    Returns the applied module names.
    """
    ordered = check_modules(modules)

    for m in ordered:
        cur.executescript(m.ddl(now=now, schema_version=schema_version))

    for m in ordered:
        migrate = getattr(m, "migrate", None)
        if migrate is not None:
            migrate(cur, ensure_columns=ensure_columns)

    names = [_module_name(m) for m in ordered]
    logger.debug("schema applied: modules=%s version=%s", names, schema_version)
    return names
