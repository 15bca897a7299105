"""SQLite SSOT schema: draft tables.

Tables:
- drafts: draft header, draft order, and both cursors (current + active)
- draft_picks: one row per pick; (draft_id, overall_pick_number) is the identity
- pick_transfers: append-only ownership log per pick (the traded_to chain)

Design notes:
- At most one active draft is enforced twice: by DraftLifecycleManager inside one
  write transaction, and by a partial unique index as a backstop.
- pick_transfers.seq orders the chain; the row with the highest seq is the
  current owner. trade_id records which trade appended the row so a
  cancellation can verify it before removing the tail.
"""

from __future__ import annotations

import sqlite3
from typing import Callable, Mapping


# Signature compatible with DraftRepo._ensure_table_columns(cur, table, columns)
EnsureColumnsFn = Callable[[sqlite3.Cursor, str, Mapping[str, str]], None]


def ddl(*, now: str, schema_version: str) -> str:
    """Return DDL SQL for draft tables."""
    _ = (now, schema_version)
    return """
                CREATE TABLE IF NOT EXISTS drafts (
                    draft_id TEXT PRIMARY KEY,
                    year INTEGER NOT NULL,
                    type TEXT NOT NULL,
                    is_snake_draft INTEGER NOT NULL DEFAULT 0,
                    is_active INTEGER NOT NULL DEFAULT 0,
                    draft_order_json TEXT NOT NULL DEFAULT '[]',
                    current_round INTEGER NOT NULL DEFAULT 1,
                    current_pick INTEGER NOT NULL DEFAULT 1,
                    current_overall_pick INTEGER NOT NULL DEFAULT 1,
                    active_round INTEGER NOT NULL DEFAULT 1,
                    active_pick INTEGER NOT NULL DEFAULT 1,
                    active_overall_pick INTEGER NOT NULL DEFAULT 1,
                    created_at TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                );

                CREATE UNIQUE INDEX IF NOT EXISTS uq_drafts_single_active
                    ON drafts(is_active) WHERE is_active = 1;

                CREATE TABLE IF NOT EXISTS draft_picks (
                    draft_id TEXT NOT NULL,
                    overall_pick_number INTEGER NOT NULL,
                    round_number INTEGER NOT NULL,
                    pick_number INTEGER NOT NULL,
                    manager_id TEXT NOT NULL,
                    is_complete INTEGER NOT NULL DEFAULT 0,
                    created_at TEXT NOT NULL,
                    updated_at TEXT NOT NULL,
                    PRIMARY KEY (draft_id, overall_pick_number),
                    FOREIGN KEY(draft_id) REFERENCES drafts(draft_id) ON DELETE CASCADE
                );

                CREATE UNIQUE INDEX IF NOT EXISTS uq_draft_picks_round_pick
                    ON draft_picks(draft_id, round_number, pick_number);

                CREATE TABLE IF NOT EXISTS pick_transfers (
                    draft_id TEXT NOT NULL,
                    overall_pick_number INTEGER NOT NULL,
                    seq INTEGER NOT NULL,
                    manager_id TEXT NOT NULL,
                    trade_id TEXT NOT NULL,
                    created_at TEXT NOT NULL,
                    PRIMARY KEY (draft_id, overall_pick_number, seq),
                    FOREIGN KEY(draft_id, overall_pick_number)
                        REFERENCES draft_picks(draft_id, overall_pick_number) ON DELETE CASCADE
                );

                CREATE INDEX IF NOT EXISTS idx_pick_transfers_trade
                    ON pick_transfers(trade_id);
"""


def migrate(cur: sqlite3.Cursor, *, ensure_columns: EnsureColumnsFn) -> None:
    # completed_at was added after the first schema; older files lack it.
    ensure_columns(
        cur,
        "draft_picks",
        {
            "completed_at": "TEXT",
        },
    )
