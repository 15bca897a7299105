# db_schema/core.py
"""SQLite SSOT schema: core tables (meta + manager registry).

DDL only; must not import DraftRepo.
"""

from __future__ import annotations


def ddl(*, now: str, schema_version: str) -> str:
    """Return DDL SQL for core tables (as a single executescript string)."""
    return f"""
                CREATE TABLE IF NOT EXISTS meta (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL
                );

                INSERT INTO meta(key, value) VALUES ('schema_version', '{schema_version}')
                ON CONFLICT(key) DO UPDATE SET value=excluded.value;
                INSERT OR IGNORE INTO meta(key, value) VALUES ('created_at', '{now}');

                -- Manager registry (identity list for draft orders and trade parties)
                CREATE TABLE IF NOT EXISTS managers (
                    manager_id TEXT PRIMARY KEY,
                    name TEXT NOT NULL,
                    team_name TEXT,
                    is_user INTEGER NOT NULL DEFAULT 0,
                    email TEXT,
                    created_at TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                );
"""
