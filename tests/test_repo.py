"""DraftRepo: schema, nested transactions, integrity check, export, CLI."""

import sqlite3

import pandas as pd
import pytest

import draft_repo
from draft.errors import INTEGRITY_CHECK_FAILED, PERSISTENCE_FAILED, InternalError
from draft_repo import DraftRepo
from schema import SCHEMA_VERSION


def test_init_db_is_idempotent(db_path):
    with DraftRepo(db_path) as repo:
        repo.init_db()
        repo.init_db()
        row = repo._conn.execute("SELECT value FROM meta WHERE key='schema_version';").fetchone()
        cols = {r["name"] for r in repo._conn.execute("PRAGMA table_info(draft_picks);").fetchall()}

    assert row["value"] == SCHEMA_VERSION
    assert "completed_at" in cols


def test_managers_registry(repo):
    assert [m["id"] for m in repo.list_managers()] == ["m1", "m2", "m3", "m4"]
    assert repo.get_manager("m1")["is_user"] is True
    assert repo.find_missing_managers(["m1", "zz", "zz"]) == ["zz"]

    repo.upsert_manager("m2", name="Bruno B.", email="bruno@example.com")
    updated = repo.get_manager("m2")
    assert updated["name"] == "Bruno B."
    assert updated["email"] == "bruno@example.com"

    with pytest.raises(ValueError):
        repo.upsert_manager("m5", name="   ")


def test_nested_transaction_rolls_back_inner_only(repo):
    with repo.transaction():
        repo.upsert_manager("outer", name="Outer")
        with pytest.raises(RuntimeError):
            with repo.transaction():
                repo.upsert_manager("inner", name="Inner")
                raise RuntimeError("abort inner")

    assert repo.get_manager("outer") is not None
    assert repo.get_manager("inner") is None


def test_sqlite_errors_surface_as_internal_error(repo):
    with pytest.raises(InternalError) as exc_info:
        with repo.transaction() as cur:
            cur.execute("INSERT INTO no_such_table VALUES (1);")

    assert exc_info.value.code == PERSISTENCE_FAILED
    assert isinstance(exc_info.value.__cause__, sqlite3.Error)


def test_single_active_index_backstops_lifecycle(repo, lifecycle, manager_ids):
    a = lifecycle.create_draft(year=2023, type="standard", is_snake_draft=False, initial_rounds=1, draft_order=manager_ids)
    b = lifecycle.create_draft(year=2024, type="standard", is_snake_draft=False, initial_rounds=1, draft_order=manager_ids)
    repo.set_draft_active(a.draft_id, True)

    with pytest.raises(InternalError):
        repo.set_draft_active(b.draft_id, True)


def test_validate_integrity_flags_orphan_transfer(repo, active_draft):
    repo.validate_integrity()

    repo.append_pick_transfer(active_draft.draft_id, 3, manager_id="m1", trade_id="Tghost")

    with pytest.raises(InternalError) as exc_info:
        repo.validate_integrity()
    assert exc_info.value.code == INTEGRITY_CHECK_FAILED
    assert "Tghost" in exc_info.value.details["problems"][0]


def test_export_board_csv(repo, ledger, active_draft, tmp_path):
    did = active_draft.draft_id
    ledger.create_trade(
        [
            {"manager_id": "m1", "assets": [{"type": "DraftPick", "draft_id": did, "overall_pick_number": 5}]},
            {"manager_id": "m4", "assets": [{"type": "Other", "description": "cash"}]},
        ]
    )
    out = tmp_path / "board.csv"

    n = repo.export_board(did, out)

    df = pd.read_csv(out)
    assert n == 12 == len(df)
    # Round 2 of a snake draft is listed on-the-clock: stored pick 4 first, shown as pick 1.
    round2 = df[df["round"] == 2]
    assert list(round2["pick"]) == [4, 3, 2, 1]
    assert list(round2["display_pick"]) == [1, 2, 3, 4]
    traded = df[df["overall_pick"] == 5].iloc[0]
    assert traded["original_manager"] == "m1"
    assert traded["current_owner"] == "m4"
    assert traded["trade_hops"] == 1


def test_cli_init_and_validate(tmp_path, capsys):
    path = str(tmp_path / "cli.sqlite3")

    draft_repo.main(["init", "--db", path])
    draft_repo.main(["validate", "--db", path])

    out = capsys.readouterr().out
    assert "initialized" in out
    assert "validation passed" in out


def test_schema_registry_rejects_bad_module_lists():
    import types

    from db_schema import core, draft
    from db_schema.registry import check_modules

    assert check_modules([core, draft]) == [core, draft]
    with pytest.raises(ValueError):
        check_modules([core, core])
    with pytest.raises(TypeError):
        check_modules([types.ModuleType("no_ddl")])


def test_upsert_manager_missing_row_is_internal_error(repo, monkeypatch):
    monkeypatch.setattr(repo, "get_manager", lambda manager_id: None)

    with pytest.raises(InternalError) as exc_info:
        repo.upsert_manager("m9", name="Nobody")

    assert exc_info.value.code == PERSISTENCE_FAILED
    assert exc_info.value.details == {"manager_id": "m9"}
