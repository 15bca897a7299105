"""PickCursor: current (progress) vs active (navigation) pointers."""

import pytest

from draft.cursor import PickCursor
from draft.errors import (
    CANNOT_ADVANCE_PAST_FINAL_PICK,
    NO_INCOMPLETE_PICKS,
    PICK_NOT_FOUND,
    NotFoundError,
    RuleViolation,
)
from draft.order import build_rounds
from draft.types import Draft, PickRef


def make_cursor(*, rounds=3, managers=4, snake=True, current=1, active=1, completed=()):
    order = [f"m{i}" for i in range(1, managers + 1)]
    draft = Draft(
        draft_id="Dtest",
        year=2024,
        type="standard",
        is_snake_draft=snake,
        is_active=True,
        draft_order=order,
        rounds=tuple(build_rounds(rounds, order, snake)),
    )
    cursor = PickCursor.from_draft(draft)
    cursor.current = cursor.ref_for(current)
    cursor.active = cursor.ref_for(active)
    for overall in completed:
        cursor.mark_complete(overall)
    return cursor


def test_advance_moves_current_by_one_in_overall_order():
    cursor = make_cursor()

    ref = cursor.advance()

    assert ref.overall_pick_number == 2
    assert (ref.round, ref.pick) == (1, 2)


def test_advance_crosses_round_boundary_without_reversal():
    cursor = make_cursor(current=4)

    ref = cursor.advance()

    # Overall 5 is round 2, stored pick 1 (displayed as 4 in a snake draft).
    assert (ref.round, ref.pick, ref.overall_pick_number) == (2, 1, 5)


def test_advance_past_final_pick_fails_and_leaves_cursor():
    cursor = make_cursor(current=12)

    with pytest.raises(RuleViolation) as exc_info:
        cursor.advance()

    assert exc_info.value.code == CANNOT_ADVANCE_PAST_FINAL_PICK
    assert cursor.current.overall_pick_number == 12
    assert not cursor.can_advance()


def test_advance_skip_completed_lands_on_next_incomplete():
    cursor = make_cursor(current=3, completed=(4, 5, 6))

    ref = cursor.advance(skip_completed=True)

    assert ref.overall_pick_number == 7


def test_advance_skip_completed_without_incomplete_picks_fails():
    cursor = make_cursor(current=10, completed=(11, 12))

    assert not cursor.can_skip_to_incomplete()
    with pytest.raises(RuleViolation) as exc_info:
        cursor.advance(skip_completed=True)

    assert exc_info.value.code == NO_INCOMPLETE_PICKS
    assert cursor.current.overall_pick_number == 10


def test_can_skip_to_incomplete_ignores_picks_behind_current():
    cursor = make_cursor(current=11, completed=(12,))

    # Picks 1..10 are incomplete but behind the cursor.
    assert not cursor.can_skip_to_incomplete()


def test_set_active_never_moves_current():
    cursor = make_cursor(current=6, completed=(2,))

    cursor.set_active(2)

    assert cursor.active.overall_pick_number == 2
    assert cursor.current.overall_pick_number == 6

    cursor.set_active(12)
    assert cursor.active.overall_pick_number == 12
    assert cursor.current.overall_pick_number == 6


def test_advance_never_moves_active():
    cursor = make_cursor(current=1, active=9)

    cursor.advance()
    cursor.advance()

    assert cursor.current.overall_pick_number == 3
    assert cursor.active.overall_pick_number == 9


@pytest.mark.parametrize("overall", [0, 13, -1])
def test_set_active_out_of_range(overall):
    cursor = make_cursor()

    with pytest.raises(NotFoundError) as exc_info:
        cursor.set_active(overall)

    assert exc_info.value.code == PICK_NOT_FOUND
    assert cursor.active.overall_pick_number == 1


def test_completing_current_pick_advances():
    cursor = make_cursor(current=7)

    moved = cursor.on_pick_completed(7)

    assert moved
    assert cursor.current.overall_pick_number == 8
    assert cursor.is_complete(7)


def test_completing_other_pick_leaves_current():
    cursor = make_cursor(current=7)

    moved = cursor.on_pick_completed(9)

    assert not moved
    assert cursor.current.overall_pick_number == 7
    assert cursor.is_complete(9)


def test_completing_final_pick_stays_on_it():
    cursor = make_cursor(current=12)

    moved = cursor.on_pick_completed(12)

    assert not moved
    assert cursor.current.overall_pick_number == 12


def test_clamp_active_only_touches_active():
    # One round left (picks 1..4) while active still points into a removed round.
    cursor = make_cursor(rounds=1, current=3)
    cursor.active = PickRef(round=2, pick=4, overall_pick_number=8)

    assert cursor.clamp_active()

    assert cursor.active.overall_pick_number == 4
    assert cursor.current.overall_pick_number == 3
    assert not cursor.clamp_active()
