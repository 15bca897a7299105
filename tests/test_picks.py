"""Pick completion: auto-advance, conflicts, ownership, atomicity."""

import sqlite3

import pytest

from draft.errors import (
    NO_ACTIVE_DRAFT,
    PICK_ALREADY_COMPLETE,
    PICK_NOT_FOUND,
    PICK_NOT_OWNED,
    PLAYER_ALREADY_DRAFTED,
    ConflictError,
    InternalError,
    NotFoundError,
    RuleViolation,
)
from draft.picks import complete_pick


def _advance_to(lifecycle, overall):
    while lifecycle.get_active_draft().current.overall_pick_number < overall:
        lifecycle.advance()


def test_completing_current_pick_advances_to_next(repo, lifecycle, active_draft):
    _advance_to(lifecycle, 7)

    result = complete_pick(repo, overall_pick_number=7, player_id="p7")

    assert result["advanced"] is True
    draft = lifecycle.get_active_draft()
    assert draft.current.overall_pick_number == 8
    assert draft.find_pick(7)[1].is_complete


def test_completing_later_pick_leaves_current(repo, lifecycle, active_draft):
    _advance_to(lifecycle, 7)

    result = complete_pick(repo, overall_pick_number=9, player_id="p9")

    assert result["advanced"] is False
    draft = lifecycle.get_active_draft()
    assert draft.current.overall_pick_number == 7
    assert draft.find_pick(9)[1].is_complete
    assert not draft.find_pick(7)[1].is_complete


def test_completing_final_pick_keeps_current_on_it(repo, lifecycle, active_draft):
    _advance_to(lifecycle, 12)

    complete_pick(repo, overall_pick_number=12, player_id="p12")

    assert lifecycle.get_active_draft().current.overall_pick_number == 12


def test_completion_stamps_player_status(repo, active_draft):
    complete_pick(repo, overall_pick_number=6, player_id="p6", manager_id="m2")

    status = repo.get_player_draft_status(active_draft.draft_id, "p6")
    assert status["drafted_by"] == "m2"
    assert (status["round"], status["pick"], status["overall_pick"]) == (2, 2, 6)


def test_completion_credits_current_owner_after_trade(repo, ledger, active_draft):
    ledger.create_trade(
        [
            {"manager_id": "m1", "assets": [{"type": "DraftPick", "draft_id": active_draft.draft_id, "overall_pick_number": 1}]},
            {"manager_id": "m2", "assets": [{"type": "Other", "description": "cash"}]},
        ]
    )

    with pytest.raises(RuleViolation) as exc_info:
        complete_pick(repo, overall_pick_number=1, player_id="p1", manager_id="m1")
    assert exc_info.value.code == PICK_NOT_OWNED

    result = complete_pick(repo, overall_pick_number=1, player_id="p1", manager_id="m2")
    assert result["drafted_by"] == "m2"


def test_completing_twice_is_a_conflict(repo, lifecycle, active_draft):
    complete_pick(repo, overall_pick_number=1, player_id="p1")

    with pytest.raises(ConflictError) as exc_info:
        complete_pick(repo, overall_pick_number=1, player_id="p-other")

    assert exc_info.value.code == PICK_ALREADY_COMPLETE
    assert lifecycle.get_active_draft().current.overall_pick_number == 2


def test_drafting_same_player_twice_is_a_conflict(repo, lifecycle, active_draft):
    complete_pick(repo, overall_pick_number=1, player_id="p1")

    with pytest.raises(ConflictError) as exc_info:
        complete_pick(repo, overall_pick_number=2, player_id="p1")

    assert exc_info.value.code == PLAYER_ALREADY_DRAFTED
    assert not lifecycle.get_active_draft().find_pick(2)[1].is_complete


def test_unknown_pick(repo, active_draft):
    with pytest.raises(NotFoundError) as exc_info:
        complete_pick(repo, overall_pick_number=99, player_id="p1")
    assert exc_info.value.code == PICK_NOT_FOUND


def test_no_active_draft(repo):
    with pytest.raises(NotFoundError) as exc_info:
        complete_pick(repo, overall_pick_number=1, player_id="p1")
    assert exc_info.value.code == NO_ACTIVE_DRAFT


def test_failed_player_stamp_rolls_back_completion_and_advance(repo, lifecycle, active_draft, monkeypatch):
    _advance_to(lifecycle, 10)

    def _boom(*args, **kwargs):
        raise sqlite3.OperationalError("disk I/O error")

    monkeypatch.setattr(repo, "mark_player_drafted", _boom)

    with pytest.raises(InternalError):
        complete_pick(repo, overall_pick_number=10, player_id="p10")

    draft = lifecycle.get_active_draft()
    assert draft.current.overall_pick_number == 10
    assert not draft.find_pick(10)[1].is_complete
    assert repo.get_player_draft_status(draft.draft_id, "p10") is None
