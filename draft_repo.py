# draft_repo.py
# Developer note:
# - SQLite DB is the single source of truth (SSOT) for drafts, picks, ownership
#   chains, trades, managers and player draft status.
# - CSV/Excel files are export only (no runtime reads).
# - draft_id / trade_id / manager_id / player_id are canonical strings (schema.py).
"""
DraftRepository: persisted-data SSOT (SQLite)

Goal:
- All persisted reads/writes go through DraftRepo.
- Services compose repo methods inside one DraftRepo.transaction(); nested
  calls become SAVEPOINTs so a failure anywhere rolls the whole unit back.

Usage (CLI):
  python draft_repo.py init --db <db_path>
  python draft_repo.py validate --db <db_path>
  python draft_repo.py export_board --db <db_path> --draft <draft_id> --out board.csv

Python:
  from draft_repo import DraftRepo
  with DraftRepo("<db_path>") as repo:
      repo.init_db()
      draft = repo.get_active_draft()
"""

from __future__ import annotations

import argparse
import contextlib
import datetime as _dt
import json
import logging
import sqlite3
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from schema import SCHEMA_VERSION, normalize_manager_id, normalize_player_id

from draft.errors import INTEGRITY_CHECK_FAILED, PERSISTENCE_FAILED, InternalError
from draft.types import Draft, DraftPosition, DraftRound, PickRef

logger = logging.getLogger(__name__)
_WARN_COUNTS: Dict[str, int] = {}


# ----------------------------
# Helpers
# ----------------------------

def _warn_limited(code: str, msg: str, *, limit: int = 5) -> None:
    n = _WARN_COUNTS.get(code, 0)
    if n < limit:
        logger.warning("%s %s", code, msg)
    _WARN_COUNTS[code] = n + 1


def _utc_now_iso() -> str:
    return _dt.datetime.now(_dt.timezone.utc).isoformat(timespec="microseconds")


def _json_dumps(obj: Any) -> str:
    return json.dumps(
        obj,
        ensure_ascii=False,
        separators=(",", ":"),
        sort_keys=True,
        default=str,
    )


def _json_loads(value: Any, default: Any):
    """
    Safe JSON loader:
    - None -> default
    - already dict/list -> returns as-is
    - invalid JSON -> default
    """
    if value is None:
        return default
    if isinstance(value, (dict, list)):
        return value
    try:
        return json.loads(value)
    except (json.JSONDecodeError, TypeError):
        _warn_limited("JSON_DECODE_FAILED", f"value_preview={repr(str(value))[:120]}", limit=3)
        return default


# ----------------------------
# Repository
# ----------------------------

class DraftRepo:
    def __init__(self, db_path: str | Path):
        self.db_path = str(db_path)
        self._conn = sqlite3.connect(self.db_path, check_same_thread=False)
        self._conn.row_factory = sqlite3.Row
        self._conn.execute("PRAGMA foreign_keys = ON;")
        self._conn.execute("PRAGMA journal_mode = WAL;")
        # Nested transaction support (SAVEPOINT) for callers that compose repo methods.
        # (SQLite raises if BEGIN is issued while a transaction is already active.)
        self._savepoint_seq = 0

    def close(self) -> None:
        try:
            self._conn.close()
        except sqlite3.Error:
            _warn_limited("CLOSE_FAILED", f"db_path={self.db_path}")

    @contextlib.contextmanager
    def transaction(self):
        """
        Atomic transaction helper.

        Supports nesting via SAVEPOINT:
        - outermost: BEGIN ... COMMIT/ROLLBACK
        - nested: SAVEPOINT ... RELEASE (or ROLLBACK TO + RELEASE on error)

        sqlite3 errors escaping the outermost level are logged and re-raised as
        InternalError; domain errors (DraftError) pass through unchanged.
        """
        cur = self._conn.cursor()
        nested = bool(getattr(self._conn, "in_transaction", False))
        sp_name = None
        try:
            if nested:
                self._savepoint_seq += 1
                sp_name = f"sp_{self._savepoint_seq}"
                cur.execute(f"SAVEPOINT {sp_name};")
            else:
                self._conn.execute("BEGIN;")

            yield cur

            if nested and sp_name:
                cur.execute(f"RELEASE SAVEPOINT {sp_name};")
            else:
                self._conn.commit()
        except Exception as exc:
            if nested and sp_name:
                # Roll back to the savepoint only; do NOT rollback the outer transaction here.
                try:
                    cur.execute(f"ROLLBACK TO SAVEPOINT {sp_name};")
                finally:
                    cur.execute(f"RELEASE SAVEPOINT {sp_name};")
                raise
            self._conn.rollback()
            if isinstance(exc, sqlite3.Error):
                logger.exception("transaction rolled back (db_path=%s)", self.db_path)
                raise InternalError(
                    PERSISTENCE_FAILED,
                    "Database operation failed",
                    {"error_type": type(exc).__name__},
                ) from exc
            raise
        finally:
            cur.close()

    # ------------------------
    # Schema
    # ------------------------

    def _ensure_table_columns(self, cur: sqlite3.Cursor, table: str, columns: Mapping[str, str]) -> None:
        """SQLite has no ADD COLUMN IF NOT EXISTS; check PRAGMA table_info first."""
        rows = cur.execute(f"PRAGMA table_info({table});").fetchall()
        existing = {r["name"] for r in rows}
        for col, ddl in columns.items():
            if col in existing:
                continue
            cur.execute(f"ALTER TABLE {table} ADD COLUMN {col} {ddl};")

    def init_db(self) -> None:
        """Apply SQLite schema (DDL + migrations) via db_schema."""
        from db_schema import apply_schema

        now = _utc_now_iso()
        with self.transaction() as cur:
            apply_schema(
                cur,
                now=now,
                schema_version=SCHEMA_VERSION,
                ensure_columns=self._ensure_table_columns,
            )

    # ------------------------
    # Managers
    # ------------------------

    def upsert_manager(
        self,
        manager_id: str,
        *,
        name: str,
        team_name: Optional[str] = None,
        is_user: bool = False,
        email: Optional[str] = None,
    ) -> Dict[str, Any]:
        mid = normalize_manager_id(manager_id)
        nm = str(name or "").strip()
        if not nm:
            raise ValueError("manager name is required")
        now = _utc_now_iso()
        with self.transaction() as cur:
            cur.execute(
                """
                INSERT INTO managers(manager_id, name, team_name, is_user, email, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?, ?, ?)
                ON CONFLICT(manager_id) DO UPDATE SET
                    name=excluded.name,
                    team_name=excluded.team_name,
                    is_user=excluded.is_user,
                    email=excluded.email,
                    updated_at=excluded.updated_at;
                """,
                (mid, nm, team_name, 1 if is_user else 0, email, now, now),
            )
        manager = self.get_manager(mid)
        if manager is None:
            raise InternalError(PERSISTENCE_FAILED, "Manager row missing after upsert", {"manager_id": mid})
        return manager

    @staticmethod
    def _manager_row_to_dict(r: sqlite3.Row) -> Dict[str, Any]:
        return {
            "id": str(r["manager_id"]),
            "name": str(r["name"]),
            "team_name": r["team_name"],
            "is_user": bool(r["is_user"]),
            "email": r["email"],
        }

    def get_manager(self, manager_id: str) -> Optional[Dict[str, Any]]:
        row = self._conn.execute(
            "SELECT * FROM managers WHERE manager_id=?;", (str(manager_id),)
        ).fetchone()
        return self._manager_row_to_dict(row) if row else None

    def list_managers(self) -> List[Dict[str, Any]]:
        rows = self._conn.execute("SELECT * FROM managers ORDER BY name, manager_id;").fetchall()
        return [self._manager_row_to_dict(r) for r in rows]

    def find_missing_managers(self, manager_ids: Iterable[str]) -> List[str]:
        ids = [str(m) for m in manager_ids]
        if not ids:
            return []
        placeholders = ",".join("?" for _ in ids)
        rows = self._conn.execute(
            f"SELECT manager_id FROM managers WHERE manager_id IN ({placeholders});", ids
        ).fetchall()
        known = {str(r["manager_id"]) for r in rows}
        missing: List[str] = []
        for m in ids:
            if m not in known and m not in missing:
                missing.append(m)
        return missing

    # ------------------------
    # Drafts
    # ------------------------

    def insert_draft(self, draft: Draft) -> None:
        now = _utc_now_iso()
        created_at = draft.created_at or now
        with self.transaction() as cur:
            cur.execute(
                """
                INSERT INTO drafts(
                    draft_id, year, type, is_snake_draft, is_active, draft_order_json,
                    current_round, current_pick, current_overall_pick,
                    active_round, active_pick, active_overall_pick,
                    created_at, updated_at
                )
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?);
                """,
                (
                    draft.draft_id,
                    int(draft.year),
                    str(draft.type),
                    1 if draft.is_snake_draft else 0,
                    1 if draft.is_active else 0,
                    _json_dumps(list(draft.draft_order)),
                    draft.current.round,
                    draft.current.pick,
                    draft.current.overall_pick_number,
                    draft.active.round,
                    draft.active.pick,
                    draft.active.overall_pick_number,
                    created_at,
                    now,
                ),
            )
            for rnd in draft.rounds:
                self.insert_round(draft.draft_id, rnd)

    def insert_round(self, draft_id: str, rnd: DraftRound) -> None:
        now = _utc_now_iso()
        rows = [
            (
                str(draft_id),
                int(p.overall_pick_number),
                int(rnd.round_number),
                int(p.pick_number),
                str(p.manager_id),
                1 if p.is_complete else 0,
                now,
                now,
            )
            for p in rnd.picks
        ]
        with self.transaction() as cur:
            cur.executemany(
                """
                INSERT INTO draft_picks(
                    draft_id, overall_pick_number, round_number, pick_number,
                    manager_id, is_complete, created_at, updated_at
                )
                VALUES (?, ?, ?, ?, ?, ?, ?, ?);
                """,
                rows,
            )
            self._touch_draft(cur, draft_id)

    def delete_round(self, draft_id: str, round_number: int) -> int:
        with self.transaction() as cur:
            cur.execute(
                "DELETE FROM draft_picks WHERE draft_id=? AND round_number=?;",
                (str(draft_id), int(round_number)),
            )
            n = int(cur.rowcount or 0)
            self._touch_draft(cur, draft_id)
        return n

    def _touch_draft(self, cur: sqlite3.Cursor, draft_id: str) -> None:
        cur.execute("UPDATE drafts SET updated_at=? WHERE draft_id=?;", (_utc_now_iso(), str(draft_id)))

    def _read_draft(self, row: sqlite3.Row) -> Draft:
        draft_id = str(row["draft_id"])
        pick_rows = self._conn.execute(
            """
            SELECT overall_pick_number, round_number, pick_number, manager_id, is_complete
            FROM draft_picks
            WHERE draft_id=?
            ORDER BY overall_pick_number;
            """,
            (draft_id,),
        ).fetchall()
        transfer_rows = self._conn.execute(
            """
            SELECT overall_pick_number, manager_id
            FROM pick_transfers
            WHERE draft_id=?
            ORDER BY overall_pick_number, seq;
            """,
            (draft_id,),
        ).fetchall()
        chains: Dict[int, List[str]] = {}
        for t in transfer_rows:
            chains.setdefault(int(t["overall_pick_number"]), []).append(str(t["manager_id"]))

        picks_by_round: Dict[int, List[DraftPosition]] = {}
        for p in pick_rows:
            overall = int(p["overall_pick_number"])
            picks_by_round.setdefault(int(p["round_number"]), []).append(
                DraftPosition(
                    manager_id=str(p["manager_id"]),
                    pick_number=int(p["pick_number"]),
                    overall_pick_number=overall,
                    traded_to=tuple(chains.get(overall, ())),
                    is_complete=bool(p["is_complete"]),
                )
            )
        rounds = tuple(
            DraftRound(round_number=rn, picks=tuple(sorted(ps, key=lambda x: x.pick_number)))
            for rn, ps in sorted(picks_by_round.items())
        )
        order = _json_loads(row["draft_order_json"], [])
        if not isinstance(order, list):
            _warn_limited("DRAFT_ORDER_INVALID", f"draft_id={draft_id}")
            order = []
        return Draft(
            draft_id=draft_id,
            year=int(row["year"]),
            type=str(row["type"]),
            is_snake_draft=bool(row["is_snake_draft"]),
            is_active=bool(row["is_active"]),
            draft_order=tuple(str(m) for m in order),
            rounds=rounds,
            current=PickRef(
                round=int(row["current_round"]),
                pick=int(row["current_pick"]),
                overall_pick_number=int(row["current_overall_pick"]),
            ),
            active=PickRef(
                round=int(row["active_round"]),
                pick=int(row["active_pick"]),
                overall_pick_number=int(row["active_overall_pick"]),
            ),
            created_at=str(row["created_at"]),
        )

    def get_draft(self, draft_id: str) -> Optional[Draft]:
        row = self._conn.execute(
            "SELECT * FROM drafts WHERE draft_id=?;", (str(draft_id),)
        ).fetchone()
        return self._read_draft(row) if row else None

    def list_drafts(self) -> List[Draft]:
        rows = self._conn.execute("SELECT * FROM drafts ORDER BY created_at DESC, rowid DESC;").fetchall()
        return [self._read_draft(r) for r in rows]

    def get_active_draft(self) -> Optional[Draft]:
        row = self._conn.execute("SELECT * FROM drafts WHERE is_active=1 LIMIT 1;").fetchone()
        return self._read_draft(row) if row else None

    def set_draft_active(self, draft_id: str, is_active: bool) -> None:
        with self.transaction() as cur:
            cur.execute(
                "UPDATE drafts SET is_active=?, updated_at=? WHERE draft_id=?;",
                (1 if is_active else 0, _utc_now_iso(), str(draft_id)),
            )

    def deactivate_other_drafts(self, draft_id: str) -> List[str]:
        with self.transaction() as cur:
            rows = cur.execute(
                "SELECT draft_id FROM drafts WHERE is_active=1 AND draft_id<>?;", (str(draft_id),)
            ).fetchall()
            ids = [str(r["draft_id"]) for r in rows]
            if ids:
                cur.execute(
                    "UPDATE drafts SET is_active=0, updated_at=? WHERE is_active=1 AND draft_id<>?;",
                    (_utc_now_iso(), str(draft_id)),
                )
        return ids

    def update_cursors(self, draft_id: str, *, current: PickRef, active: PickRef) -> None:
        with self.transaction() as cur:
            cur.execute(
                """
                UPDATE drafts SET
                    current_round=?, current_pick=?, current_overall_pick=?,
                    active_round=?, active_pick=?, active_overall_pick=?,
                    updated_at=?
                WHERE draft_id=?;
                """,
                (
                    current.round,
                    current.pick,
                    current.overall_pick_number,
                    active.round,
                    active.pick,
                    active.overall_pick_number,
                    _utc_now_iso(),
                    str(draft_id),
                ),
            )

    def set_pick_complete(self, draft_id: str, overall_pick_number: int) -> None:
        now = _utc_now_iso()
        with self.transaction() as cur:
            cur.execute(
                """
                UPDATE draft_picks SET is_complete=1, completed_at=?, updated_at=?
                WHERE draft_id=? AND overall_pick_number=? AND is_complete=0;
                """,
                (now, now, str(draft_id), int(overall_pick_number)),
            )
            if int(cur.rowcount or 0) != 1:
                raise ValueError(
                    f"pick not updated (missing or already complete): "
                    f"draft_id={draft_id} overall={overall_pick_number}"
                )
            self._touch_draft(cur, draft_id)

    def reset_picks(self, draft_id: str) -> int:
        with self.transaction() as cur:
            cur.execute(
                """
                UPDATE draft_picks SET is_complete=0, completed_at=NULL, updated_at=?
                WHERE draft_id=? AND is_complete=1;
                """,
                (_utc_now_iso(), str(draft_id)),
            )
            n = int(cur.rowcount or 0)
            self._touch_draft(cur, draft_id)
        return n

    def delete_draft(self, draft_id: str) -> None:
        with self.transaction() as cur:
            cur.execute("DELETE FROM drafts WHERE draft_id=?;", (str(draft_id),))

    # ------------------------
    # Ownership chains (pick_transfers)
    # ------------------------

    def get_pick_transfers(self, draft_id: str, overall_pick_number: int) -> List[Dict[str, Any]]:
        rows = self._conn.execute(
            """
            SELECT seq, manager_id, trade_id, created_at
            FROM pick_transfers
            WHERE draft_id=? AND overall_pick_number=?
            ORDER BY seq;
            """,
            (str(draft_id), int(overall_pick_number)),
        ).fetchall()
        return [
            {
                "seq": int(r["seq"]),
                "manager_id": str(r["manager_id"]),
                "trade_id": str(r["trade_id"]),
                "created_at": str(r["created_at"]),
            }
            for r in rows
        ]

    def append_pick_transfer(
        self, draft_id: str, overall_pick_number: int, *, manager_id: str, trade_id: str
    ) -> int:
        with self.transaction() as cur:
            row = cur.execute(
                """
                SELECT COALESCE(MAX(seq), 0) AS s FROM pick_transfers
                WHERE draft_id=? AND overall_pick_number=?;
                """,
                (str(draft_id), int(overall_pick_number)),
            ).fetchone()
            seq = int(row["s"]) + 1
            cur.execute(
                """
                INSERT INTO pick_transfers(draft_id, overall_pick_number, seq, manager_id, trade_id, created_at)
                VALUES (?, ?, ?, ?, ?, ?);
                """,
                (str(draft_id), int(overall_pick_number), seq, str(manager_id), str(trade_id), _utc_now_iso()),
            )
        return seq

    def delete_pick_transfer(self, draft_id: str, overall_pick_number: int, seq: int) -> None:
        with self.transaction() as cur:
            cur.execute(
                "DELETE FROM pick_transfers WHERE draft_id=? AND overall_pick_number=? AND seq=?;",
                (str(draft_id), int(overall_pick_number), int(seq)),
            )
            if int(cur.rowcount or 0) != 1:
                raise ValueError(
                    f"pick transfer not found: draft_id={draft_id} overall={overall_pick_number} seq={seq}"
                )

    def count_transfers_in_round(self, draft_id: str, round_number: int) -> int:
        row = self._conn.execute(
            """
            SELECT COUNT(*) AS c
            FROM pick_transfers t
            JOIN draft_picks p
              ON p.draft_id = t.draft_id AND p.overall_pick_number = t.overall_pick_number
            WHERE p.draft_id=? AND p.round_number=?;
            """,
            (str(draft_id), int(round_number)),
        ).fetchone()
        return int(row["c"] or 0)

    # ------------------------
    # Trades
    # ------------------------

    def insert_trade(
        self,
        trade_id: str,
        *,
        parties: Sequence[Mapping[str, Any]],
        notes: Optional[str],
        status: str,
        created_at: str,
    ) -> None:
        with self.transaction() as cur:
            cur.execute(
                """
                INSERT INTO trades(trade_id, status, notes, parties_json, created_at, cancelled_at, updated_at)
                VALUES (?, ?, ?, ?, ?, NULL, ?);
                """,
                (str(trade_id), str(status), notes, _json_dumps(list(parties)), created_at, created_at),
            )

    @staticmethod
    def _trade_row_to_dict(r: sqlite3.Row) -> Dict[str, Any]:
        return {
            "trade_id": str(r["trade_id"]),
            "status": str(r["status"]),
            "notes": r["notes"],
            "parties": _json_loads(r["parties_json"], []),
            "created_at": str(r["created_at"]),
            "cancelled_at": r["cancelled_at"],
        }

    def get_trade_row(self, trade_id: str) -> Optional[Dict[str, Any]]:
        row = self._conn.execute("SELECT * FROM trades WHERE trade_id=?;", (str(trade_id),)).fetchone()
        return self._trade_row_to_dict(row) if row else None

    def list_trade_rows(self) -> List[Dict[str, Any]]:
        rows = self._conn.execute("SELECT * FROM trades ORDER BY created_at DESC, rowid DESC;").fetchall()
        return [self._trade_row_to_dict(r) for r in rows]

    def set_trade_status(self, trade_id: str, status: str, *, cancelled_at: Optional[str] = None) -> None:
        with self.transaction() as cur:
            cur.execute(
                "UPDATE trades SET status=?, cancelled_at=?, updated_at=? WHERE trade_id=?;",
                (str(status), cancelled_at, _utc_now_iso(), str(trade_id)),
            )
            if int(cur.rowcount or 0) != 1:
                raise ValueError(f"trade not found: {trade_id}")

    def delete_trade_row(self, trade_id: str) -> None:
        with self.transaction() as cur:
            cur.execute("DELETE FROM trades WHERE trade_id=?;", (str(trade_id),))
            if int(cur.rowcount or 0) != 1:
                raise ValueError(f"trade not found: {trade_id}")

    # ------------------------
    # Player draft status (collaborator record)
    # ------------------------

    def mark_player_drafted(
        self,
        draft_id: str,
        player_id: str,
        *,
        drafted_by: str,
        round: int,
        pick: int,
        overall_pick: int,
    ) -> None:
        pid = normalize_player_id(player_id)
        with self.transaction() as cur:
            cur.execute(
                """
                INSERT INTO player_draft_status(draft_id, player_id, drafted_by, round, pick, overall_pick, drafted_at)
                VALUES (?, ?, ?, ?, ?, ?, ?);
                """,
                (str(draft_id), pid, str(drafted_by), int(round), int(pick), int(overall_pick), _utc_now_iso()),
            )

    def get_player_draft_status(self, draft_id: str, player_id: str) -> Optional[Dict[str, Any]]:
        row = self._conn.execute(
            "SELECT * FROM player_draft_status WHERE draft_id=? AND player_id=?;",
            (str(draft_id), str(player_id)),
        ).fetchone()
        return dict(row) if row else None

    def list_player_draft_status(self, player_id: str) -> List[Dict[str, Any]]:
        rows = self._conn.execute(
            "SELECT * FROM player_draft_status WHERE player_id=? ORDER BY drafted_at;",
            (normalize_player_id(player_id),),
        ).fetchall()
        return [dict(r) for r in rows]

    def reset_player_draft_status(self, draft_id: str) -> int:
        with self.transaction() as cur:
            cur.execute("DELETE FROM player_draft_status WHERE draft_id=?;", (str(draft_id),))
            return int(cur.rowcount or 0)

    # ------------------------
    # Integrity
    # ------------------------

    def validate_integrity(self) -> None:
        """Fail loud (InternalError) when persisted state breaks a draft invariant."""
        problems: List[str] = []

        active = self._conn.execute("SELECT COUNT(*) AS c FROM drafts WHERE is_active=1;").fetchone()
        if int(active["c"] or 0) > 1:
            problems.append(f"more than one active draft ({int(active['c'])})")

        for d in self._conn.execute("SELECT draft_id FROM drafts;").fetchall():
            draft_id = str(d["draft_id"])
            row = self._conn.execute(
                """
                SELECT COUNT(*) AS c, MIN(overall_pick_number) AS lo, MAX(overall_pick_number) AS hi
                FROM draft_picks WHERE draft_id=?;
                """,
                (draft_id,),
            ).fetchone()
            count = int(row["c"] or 0)
            if count == 0:
                problems.append(f"draft {draft_id} has no picks")
                continue
            if int(row["lo"]) != 1 or int(row["hi"]) != count:
                problems.append(
                    f"draft {draft_id} overall numbers not contiguous (count={count} lo={row['lo']} hi={row['hi']})"
                )
            rounds = self._conn.execute(
                "SELECT DISTINCT round_number FROM draft_picks WHERE draft_id=? ORDER BY round_number;",
                (draft_id,),
            ).fetchall()
            numbers = [int(r["round_number"]) for r in rounds]
            if numbers != list(range(1, len(numbers) + 1)):
                problems.append(f"draft {draft_id} round numbers not contiguous: {numbers}")

        orphan = self._conn.execute(
            """
            SELECT t.trade_id AS trade_id, t.draft_id AS draft_id, t.overall_pick_number AS overall
            FROM pick_transfers t
            LEFT JOIN trades tr ON tr.trade_id = t.trade_id
            WHERE tr.trade_id IS NULL OR tr.status <> 'active';
            """
        ).fetchall()
        for r in orphan:
            problems.append(
                f"pick transfer for draft {r['draft_id']} pick {r['overall']} references "
                f"missing or cancelled trade {r['trade_id']}"
            )

        if problems:
            raise InternalError(
                INTEGRITY_CHECK_FAILED,
                "Draft database integrity check failed",
                {"problems": problems},
            )

    # ------------------------
    # Export
    # ------------------------

    def export_board(self, draft_id: str, out_path: str | Path) -> int:
        """Write a draft board (one row per pick, on-the-clock order) to CSV or Excel."""
        import pandas as pd

        from draft.board import board_records

        draft = self.get_draft(draft_id)
        if draft is None:
            raise KeyError(f"draft not found: {draft_id}")

        df = pd.DataFrame.from_records(board_records(draft))
        out = Path(out_path)
        if out.suffix.lower() == ".xlsx":
            df.to_excel(out, index=False)
        else:
            df.to_csv(out, index=False)
        return len(df)

    # ------------------------
    # Convenience
    # ------------------------

    def __enter__(self) -> "DraftRepo":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


# ----------------------------
# CLI
# ----------------------------

def _cmd_init(args) -> None:
    with DraftRepo(args.db) as repo:
        repo.init_db()
    print(f"OK: initialized {args.db}")


def _cmd_validate(args) -> None:
    with DraftRepo(args.db) as repo:
        repo.validate_integrity()
    print(f"OK: validation passed for {args.db}")


def _cmd_export_board(args) -> None:
    with DraftRepo(args.db) as repo:
        n = repo.export_board(args.draft, args.out)
    print(f"OK: exported {n} picks to {args.out}")


def main(argv: Optional[Sequence[str]] = None) -> None:
    p = argparse.ArgumentParser(description="DraftRepo (SQLite single source of truth)")
    sub = p.add_subparsers(dest="cmd", required=True)

    p_init = sub.add_parser("init", help="initialize DB schema")
    p_init.add_argument("--db", required=True, help="path to sqlite db file")
    p_init.set_defaults(func=_cmd_init)

    p_val = sub.add_parser("validate", help="validate DB integrity")
    p_val.add_argument("--db", required=True, help="path to sqlite db file")
    p_val.set_defaults(func=_cmd_validate)

    p_exp = sub.add_parser("export_board", help="export a draft board to .csv or .xlsx")
    p_exp.add_argument("--db", required=True, help="path to sqlite db file")
    p_exp.add_argument("--draft", required=True, help="draft id")
    p_exp.add_argument("--out", required=True, help="output path (.csv or .xlsx)")
    p_exp.set_defaults(func=_cmd_export_board)

    args = p.parse_args(argv)
    args.func(args)


if __name__ == "__main__":
    main()
