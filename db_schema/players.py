# db_schema/players.py
"""SQLite SSOT schema: player draft status (collaborator record).

The player catalogue itself is owned elsewhere; this table only records that
a player was drafted in a given draft, by whom, and at which pick.

- (draft_id, player_id) is unique: a player is drafted at most once per draft.
- (draft_id, overall_pick) is unique: one player per pick.
"""

from __future__ import annotations


def ddl(*, now: str, schema_version: str) -> str:
    """Return DDL SQL for player draft status."""
    _ = (now, schema_version)
    return """
                CREATE TABLE IF NOT EXISTS player_draft_status (
                    draft_id TEXT NOT NULL,
                    player_id TEXT NOT NULL,
                    drafted_by TEXT NOT NULL,
                    round INTEGER NOT NULL,
                    pick INTEGER NOT NULL,
                    overall_pick INTEGER NOT NULL,
                    drafted_at TEXT NOT NULL,
                    PRIMARY KEY (draft_id, player_id)
                );

                CREATE UNIQUE INDEX IF NOT EXISTS uq_player_draft_status_overall
                    ON player_draft_status(draft_id, overall_pick);

                CREATE INDEX IF NOT EXISTS idx_player_draft_status_player
                    ON player_draft_status(player_id);
"""
