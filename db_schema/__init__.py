"""db_schema package.

SQLite DDL + migrations for the draft engine, one module per subsystem
(core, draft, trades, players). DraftRepo.init_db() is the only caller.

Public API:
- apply_schema(...)
"""

from .init import apply_schema  # noqa: F401

__all__ = ["apply_schema"]
