"""
Pytest fixtures for the draft engine.

Provides:
- a temporary SQLite path per test
- an initialized DraftRepo with four registered managers
- lifecycle / ledger services bound to that repo
- an active 3-round snake draft over the four managers
- a FastAPI TestClient bound to a temporary database
"""

import pytest

import state
from draft.lifecycle import DraftLifecycleManager
from draft_repo import DraftRepo
from trades.ledger import TradeLedger


MANAGERS = [
    ("m1", "Alice", "Alice's Aces"),
    ("m2", "Bruno", "Bruno's Bruisers"),
    ("m3", "Chen", "Chen's Chargers"),
    ("m4", "Dana", "Dana's Dynamos"),
]


# ============================================================================
# DATABASE FIXTURES
# ============================================================================

@pytest.fixture
def db_path(tmp_path):
    """Temporary database file path (removed with tmp_path)."""
    return str(tmp_path / "draft_test.sqlite3")


@pytest.fixture
def repo(db_path):
    """DraftRepo with schema applied and MANAGERS registered."""
    r = DraftRepo(db_path)
    r.init_db()
    for manager_id, name, team_name in MANAGERS:
        r.upsert_manager(manager_id, name=name, team_name=team_name, is_user=(manager_id == "m1"))
    yield r
    r.close()


@pytest.fixture
def manager_ids():
    return [m[0] for m in MANAGERS]


# ============================================================================
# SERVICE FIXTURES
# ============================================================================

@pytest.fixture
def lifecycle(repo):
    return DraftLifecycleManager(repo)


@pytest.fixture
def ledger(repo):
    return TradeLedger(repo)


@pytest.fixture
def active_draft(lifecycle, manager_ids):
    """3 rounds x 4 managers, snake, activated. Overall picks 1..12."""
    draft = lifecycle.create_draft(
        year=2024,
        type="standard",
        is_snake_draft=True,
        initial_rounds=3,
        draft_order=manager_ids,
    )
    return lifecycle.toggle_active(draft.draft_id)


# ============================================================================
# API FIXTURES
# ============================================================================

@pytest.fixture
def client(db_path):
    """TestClient with startup (schema init) run against db_path."""
    from fastapi.testclient import TestClient

    from app.main import create_app

    with TestClient(create_app(db_path)) as c:
        yield c
    state.reset_db_path()
