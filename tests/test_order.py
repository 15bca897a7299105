"""Round construction, overall numbering and snake display numbers."""

import pytest

from draft.errors import EMPTY_DRAFT_ORDER, INVALID_ROUND, RuleViolation
from draft.order import (
    build_rounds,
    compute_round,
    display_pick_number,
    is_reversed_round,
    round_traversal,
)


TEN = [f"m{i}" for i in range(1, 11)]


def test_compute_round_assigns_order_positions():
    rnd = compute_round(1, ["a", "b", "c"], False, 0)

    assert rnd.round_number == 1
    assert [p.manager_id for p in rnd.picks] == ["a", "b", "c"]
    assert [p.pick_number for p in rnd.picks] == [1, 2, 3]
    assert [p.overall_pick_number for p in rnd.picks] == [1, 2, 3]
    assert all(p.traded_to == () and not p.is_complete for p in rnd.picks)


def test_snake_round_keeps_stored_order_and_overall_numbers():
    rnd = compute_round(2, TEN, True, 10)

    # Stored picks are never reversed; only the display number is.
    assert [p.manager_id for p in rnd.picks] == TEN
    assert [p.pick_number for p in rnd.picks] == list(range(1, 11))
    assert [p.overall_pick_number for p in rnd.picks] == list(range(11, 21))


def test_display_pick_number_ten_manager_snake():
    # N=10: round 2 pick 1 displays as 10, pick 10 as 1; odd rounds unchanged.
    assert display_pick_number(1, 2, 10, True) == 10
    assert display_pick_number(10, 2, 10, True) == 1
    assert display_pick_number(3, 2, 10, True) == 8
    assert display_pick_number(1, 1, 10, True) == 1
    assert display_pick_number(1, 3, 10, True) == 1
    assert display_pick_number(4, 4, 10, True) == 7


def test_display_pick_number_linear_draft_is_identity():
    for rnd in (1, 2, 3, 4):
        assert display_pick_number(1, rnd, 10, False) == 1
        assert display_pick_number(10, rnd, 10, False) == 10


def test_is_reversed_round():
    assert is_reversed_round(2, True)
    assert not is_reversed_round(3, True)
    assert not is_reversed_round(2, False)


def test_build_rounds_overall_numbers_are_contiguous():
    rounds = build_rounds(4, TEN, True)

    overall = [p.overall_pick_number for r in rounds for p in r.picks]
    assert [r.round_number for r in rounds] == [1, 2, 3, 4]
    assert overall == list(range(1, 41))
    assert len(set(overall)) == 40


def test_round_traversal_reverses_even_snake_rounds():
    rounds = build_rounds(2, ["a", "b", "c"], True)

    assert [p.manager_id for p in round_traversal(rounds[0], True)] == ["a", "b", "c"]
    assert [p.manager_id for p in round_traversal(rounds[1], True)] == ["c", "b", "a"]
    assert [p.manager_id for p in round_traversal(rounds[1], False)] == ["a", "b", "c"]


def test_empty_draft_order_is_rejected():
    with pytest.raises(RuleViolation) as exc_info:
        compute_round(1, [], False, 0)
    assert exc_info.value.code == EMPTY_DRAFT_ORDER


@pytest.mark.parametrize("round_number,offset", [(0, 0), (-1, 0), (1, -3)])
def test_invalid_round_or_offset_is_rejected(round_number, offset):
    with pytest.raises(RuleViolation) as exc_info:
        compute_round(round_number, ["a"], False, offset)
    assert exc_info.value.code == INVALID_ROUND


def test_build_rounds_requires_at_least_one_round():
    with pytest.raises(RuleViolation) as exc_info:
        build_rounds(0, ["a"], False)
    assert exc_info.value.code == INVALID_ROUND
