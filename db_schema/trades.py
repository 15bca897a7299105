# db_schema/trades.py
"""SQLite SSOT schema: trade ledger tables.

- trades: one row per trade; parties (with per-asset receivers) are stored as
  canonical JSON. Ownership effects live in draft.pick_transfers, keyed by
  trade_id, not here.
"""

from __future__ import annotations


def ddl(*, now: str, schema_version: str) -> str:
    """Return DDL SQL for trade tables."""
    _ = (now, schema_version)
    return """
                CREATE TABLE IF NOT EXISTS trades (
                    trade_id TEXT PRIMARY KEY,
                    status TEXT NOT NULL DEFAULT 'active',
                    notes TEXT,
                    parties_json TEXT NOT NULL DEFAULT '[]',
                    created_at TEXT NOT NULL,
                    cancelled_at TEXT,
                    updated_at TEXT NOT NULL
                );
                CREATE INDEX IF NOT EXISTS idx_trades_status ON trades(status);
                CREATE INDEX IF NOT EXISTS idx_trades_created_at ON trades(created_at);
"""
