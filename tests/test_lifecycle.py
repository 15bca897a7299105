"""DraftLifecycleManager: create, activate, rounds, reset, delete."""

import pytest

from draft.errors import (
    CANNOT_REMOVE_ONLY_ROUND,
    DRAFT_NOT_ACTIVE,
    DRAFT_NOT_FOUND,
    DUPLICATE_MANAGER_IN_ORDER,
    EMPTY_DRAFT_ORDER,
    INVALID_ROUND,
    MANAGER_NOT_FOUND,
    NO_ACTIVE_DRAFT,
    ROUND_CONTAINS_CURRENT_PICK,
    ROUND_HAS_COMPLETED_PICKS,
    ROUND_HAS_TRADED_PICKS,
    NotFoundError,
    RuleViolation,
)
from draft.picks import complete_pick


def _pick_trade(draft_id, overall, sender, receiver):
    return [
        {"manager_id": sender, "assets": [{"type": "DraftPick", "draft_id": draft_id, "overall_pick_number": overall}]},
        {"manager_id": receiver, "assets": [{"type": "Other", "description": "future considerations"}]},
    ]


# ============================================================================
# CREATE
# ============================================================================

def test_create_draft_starts_inactive_at_first_pick(lifecycle, manager_ids):
    draft = lifecycle.create_draft(
        year=2025, type="standard", is_snake_draft=True, initial_rounds=2, draft_order=manager_ids
    )

    assert not draft.is_active
    assert draft.draft_order == tuple(manager_ids)
    assert draft.round_count == 2
    assert draft.pick_count == 8
    assert draft.current.to_dict() == {"round": 1, "pick": 1, "overall_pick_number": 1}
    assert draft.active.to_dict() == {"round": 1, "pick": 1, "overall_pick_number": 1}
    assert [p.overall_pick_number for _, p in draft.iter_picks()] == list(range(1, 9))


@pytest.mark.parametrize(
    "order,rounds,error_cls,code",
    [
        ([], 2, RuleViolation, EMPTY_DRAFT_ORDER),
        (["m1", "m2", "m1"], 2, RuleViolation, DUPLICATE_MANAGER_IN_ORDER),
        (["m1", "ghost"], 2, NotFoundError, MANAGER_NOT_FOUND),
        (["m1", "m2"], 0, RuleViolation, INVALID_ROUND),
    ],
)
def test_create_draft_rejects_bad_input_without_writing(lifecycle, order, rounds, error_cls, code):
    with pytest.raises(error_cls) as exc_info:
        lifecycle.create_draft(
            year=2025, type="standard", is_snake_draft=False, initial_rounds=rounds, draft_order=order
        )

    assert exc_info.value.code == code
    assert lifecycle.list_drafts() == []


def test_list_drafts_newest_first(lifecycle, manager_ids):
    first = lifecycle.create_draft(
        year=2023, type="standard", is_snake_draft=False, initial_rounds=1, draft_order=manager_ids
    )
    second = lifecycle.create_draft(
        year=2024, type="standard", is_snake_draft=False, initial_rounds=1, draft_order=manager_ids
    )

    assert [d.draft_id for d in lifecycle.list_drafts()] == [second.draft_id, first.draft_id]


# ============================================================================
# ACTIVE FLAG
# ============================================================================

def test_toggle_active_keeps_single_active_draft(lifecycle, manager_ids):
    a = lifecycle.create_draft(year=2023, type="standard", is_snake_draft=False, initial_rounds=1, draft_order=manager_ids)
    b = lifecycle.create_draft(year=2024, type="standard", is_snake_draft=False, initial_rounds=1, draft_order=manager_ids)

    lifecycle.toggle_active(a.draft_id)
    lifecycle.toggle_active(b.draft_id)

    assert not lifecycle.get_draft(a.draft_id).is_active
    assert lifecycle.get_draft(b.draft_id).is_active
    assert lifecycle.get_active_draft().draft_id == b.draft_id
    assert sum(1 for d in lifecycle.list_drafts() if d.is_active) == 1


def test_toggle_active_twice_deactivates(lifecycle, active_draft):
    lifecycle.toggle_active(active_draft.draft_id)

    with pytest.raises(NotFoundError) as exc_info:
        lifecycle.get_active_draft()
    assert exc_info.value.code == NO_ACTIVE_DRAFT


def test_toggle_active_unknown_draft(lifecycle):
    with pytest.raises(NotFoundError) as exc_info:
        lifecycle.toggle_active("Dmissing")
    assert exc_info.value.code == DRAFT_NOT_FOUND


# ============================================================================
# ROUNDS
# ============================================================================

def test_add_round_continues_overall_numbering(lifecycle, active_draft):
    draft = lifecycle.add_round(active_draft.draft_id)

    new_round = draft.rounds[-1]
    assert new_round.round_number == 4
    assert [p.overall_pick_number for p in new_round.picks] == [13, 14, 15, 16]
    assert [p.pick_number for p in new_round.picks] == [1, 2, 3, 4]
    assert [p.manager_id for p in new_round.picks] == list(active_draft.draft_order)


def test_remove_round_drops_highest_round(lifecycle, active_draft):
    draft = lifecycle.remove_round(active_draft.draft_id)

    assert draft.round_count == 2
    assert draft.pick_count == 8


def test_remove_only_round_is_rejected(lifecycle, manager_ids):
    draft = lifecycle.create_draft(
        year=2025, type="standard", is_snake_draft=False, initial_rounds=1, draft_order=manager_ids
    )

    with pytest.raises(RuleViolation) as exc_info:
        lifecycle.remove_round(draft.draft_id)

    assert exc_info.value.code == CANNOT_REMOVE_ONLY_ROUND
    assert lifecycle.get_draft(draft.draft_id).round_count == 1


def test_remove_round_with_completed_pick_is_rejected(repo, lifecycle, active_draft):
    complete_pick(repo, overall_pick_number=11, player_id="p-late")

    with pytest.raises(RuleViolation) as exc_info:
        lifecycle.remove_round(active_draft.draft_id)

    assert exc_info.value.code == ROUND_HAS_COMPLETED_PICKS
    assert lifecycle.get_draft(active_draft.draft_id).round_count == 3


def test_remove_round_with_traded_pick_is_rejected(lifecycle, ledger, active_draft):
    ledger.create_trade(_pick_trade(active_draft.draft_id, 12, "m4", "m1"))

    with pytest.raises(RuleViolation) as exc_info:
        lifecycle.remove_round(active_draft.draft_id)

    assert exc_info.value.code == ROUND_HAS_TRADED_PICKS
    assert lifecycle.get_draft(active_draft.draft_id).round_count == 3


def test_remove_round_holding_current_pick_is_rejected(lifecycle, active_draft):
    for _ in range(9):
        lifecycle.advance()
    assert lifecycle.get_active_draft().current.overall_pick_number == 10

    with pytest.raises(RuleViolation) as exc_info:
        lifecycle.remove_round(active_draft.draft_id)

    assert exc_info.value.code == ROUND_CONTAINS_CURRENT_PICK


def test_remove_round_clamps_active_pointer(lifecycle, active_draft):
    lifecycle.set_active(11)

    draft = lifecycle.remove_round(active_draft.draft_id)

    assert draft.active.overall_pick_number == 8
    assert (draft.active.round, draft.active.pick) == (2, 4)
    assert draft.current.overall_pick_number == 1


# ============================================================================
# CURSOR MOVES
# ============================================================================

def test_advance_and_set_active_are_persisted_independently(lifecycle, active_draft):
    lifecycle.advance()
    lifecycle.advance()
    lifecycle.set_active(9)

    draft = lifecycle.get_draft(active_draft.draft_id)
    assert draft.current.overall_pick_number == 3
    assert draft.active.overall_pick_number == 9

    current = lifecycle.get_current_pick()
    assert current["overall_pick_number"] == 3

    active = lifecycle.get_active_pick()
    # Overall 9 = round 3, pick 1 (odd round: display unchanged).
    assert (active["round"], active["pick"], active["display_pick"]) == (3, 1, 1)


def test_current_pick_payload_uses_snake_display(lifecycle, active_draft):
    for _ in range(4):
        lifecycle.advance()

    current = lifecycle.get_current_pick()

    # Overall 5 = round 2, stored pick 1; displayed as pick 4 of 4.
    assert (current["round"], current["pick"], current["display_pick"]) == (2, 1, 4)


# ============================================================================
# RESET / DELETE
# ============================================================================

def test_reset_requires_active_draft(lifecycle, manager_ids):
    draft = lifecycle.create_draft(
        year=2025, type="standard", is_snake_draft=False, initial_rounds=1, draft_order=manager_ids
    )

    with pytest.raises(RuleViolation) as exc_info:
        lifecycle.reset(draft.draft_id)

    assert exc_info.value.code == DRAFT_NOT_ACTIVE


def test_reset_clears_completions_and_cursors(repo, lifecycle, active_draft):
    complete_pick(repo, overall_pick_number=1, player_id="p1")
    complete_pick(repo, overall_pick_number=2, player_id="p2")
    complete_pick(repo, overall_pick_number=7, player_id="p7")
    lifecycle.set_active(7)

    draft = lifecycle.reset(active_draft.draft_id)

    assert draft.current.overall_pick_number == 1
    assert draft.active.overall_pick_number == 1
    assert all(not p.is_complete for _, p in draft.iter_picks())
    assert repo.get_player_draft_status(draft.draft_id, "p1") is None
    assert repo.list_player_draft_status("p7") == []


def test_reset_keeps_trade_ownership(lifecycle, ledger, active_draft):
    ledger.create_trade(_pick_trade(active_draft.draft_id, 6, "m2", "m3"))

    draft = lifecycle.reset(active_draft.draft_id)

    _, pick = draft.find_pick(6)
    assert pick.traded_to == ("m3",)
    assert pick.current_owner == "m3"
    assert ledger.list_trades()[0].is_active


def test_delete_draft_removes_picks_and_player_status(repo, lifecycle, active_draft):
    complete_pick(repo, overall_pick_number=1, player_id="p1")

    lifecycle.delete_draft(active_draft.draft_id)

    with pytest.raises(NotFoundError) as exc_info:
        lifecycle.get_draft(active_draft.draft_id)
    assert exc_info.value.code == DRAFT_NOT_FOUND
    assert repo.list_player_draft_status("p1") == []
    repo.validate_integrity()


def test_delete_unknown_draft(lifecycle):
    with pytest.raises(NotFoundError):
        lifecycle.delete_draft("Dnope")


# ============================================================================
# WRITE LOCK
# ============================================================================

def test_busy_write_lock_times_out_as_conflict(repo, active_draft):
    import threading

    from draft.errors import WRITE_LOCK_TIMEOUT, ConflictError
    from draft.lifecycle import DraftLifecycleManager
    from draft.locks import draft_write_lock

    held = threading.Event()
    release = threading.Event()

    def _hold():
        with draft_write_lock(reason="HOLDER"):
            held.set()
            release.wait(5)

    holder = threading.Thread(target=_hold)
    holder.start()
    try:
        assert held.wait(5)
        impatient = DraftLifecycleManager(repo, lock_timeout_s=0.05)
        with pytest.raises(ConflictError) as exc_info:
            impatient.add_round(active_draft.draft_id)
    finally:
        release.set()
        holder.join(5)

    assert exc_info.value.code == WRITE_LOCK_TIMEOUT
    assert exc_info.value.details["reason"] == f"ADD_ROUND:{active_draft.draft_id}"
    assert DraftLifecycleManager(repo).get_draft(active_draft.draft_id).round_count == 3
