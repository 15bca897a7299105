from __future__ import annotations

"""Draft order construction (pure).

Responsibilities:
  - Build one round of picks from the draft order (manager ids, round-1 order).
  - Build the initial rounds of a new draft with cumulative overall numbering.
  - Derive the snake "display" pick number and the on-the-clock order of a round.

Numbering rules:
  - pick_number for draft_order[i] is i+1 in every round (assignment order).
  - overall_pick_number for draft_order[i] is offset+i+1, where offset is the
    number of picks in all prior rounds. Overall numbering is never reversed.
  - Only the display number reverses: in even rounds of a snake draft,
    display = N - pick_number + 1 (N = manager count).

Note:
  This module performs no I/O. Persisting rounds is draft.lifecycle's job.
"""

from typing import List, Sequence

from .errors import EMPTY_DRAFT_ORDER, INVALID_ROUND, RuleViolation
from .types import DraftPosition, DraftRound, ManagerId


def is_reversed_round(round_number: int, is_snake_draft: bool) -> bool:
    return bool(is_snake_draft) and int(round_number) % 2 == 0


def compute_round(
    round_number: int,
    draft_order: Sequence[ManagerId],
    is_snake_draft: bool,
    overall_pick_offset: int,
) -> DraftRound:
    """Compute the picks of a single round.

    is_snake_draft does not change the stored picks; it is accepted so callers
    pass the same arguments they use for display. Raises RuleViolation on an
    empty draft order or an invalid round number / offset.
    """
    order = [str(m) for m in (draft_order or [])]
    if not order:
        raise RuleViolation(
            EMPTY_DRAFT_ORDER,
            "Draft order is empty; a round cannot be created with zero picks",
            {"round_number": round_number},
        )
    rnd = int(round_number)
    offset = int(overall_pick_offset)
    if rnd < 1:
        raise RuleViolation(INVALID_ROUND, "round_number must be >= 1", {"round_number": rnd})
    if offset < 0:
        raise RuleViolation(
            INVALID_ROUND,
            "overall_pick_offset must be >= 0",
            {"round_number": rnd, "overall_pick_offset": offset},
        )

    picks = tuple(
        DraftPosition(
            manager_id=manager_id,
            pick_number=i + 1,
            overall_pick_number=offset + i + 1,
        )
        for i, manager_id in enumerate(order)
    )
    return DraftRound(round_number=rnd, picks=picks)


def build_rounds(
    initial_rounds: int,
    draft_order: Sequence[ManagerId],
    is_snake_draft: bool,
) -> List[DraftRound]:
    n = int(initial_rounds)
    if n < 1:
        raise RuleViolation(INVALID_ROUND, "initial_rounds must be >= 1", {"initial_rounds": n})
    rounds: List[DraftRound] = []
    offset = 0
    for round_number in range(1, n + 1):
        rnd = compute_round(round_number, draft_order, is_snake_draft, offset)
        rounds.append(rnd)
        offset += len(rnd.picks)
    return rounds


def display_pick_number(
    pick_number: int,
    round_number: int,
    manager_count: int,
    is_snake_draft: bool,
) -> int:
    """Presentation-only pick number (never persisted)."""
    if is_reversed_round(round_number, is_snake_draft):
        return int(manager_count) - int(pick_number) + 1
    return int(pick_number)


def round_traversal(rnd: DraftRound, is_snake_draft: bool) -> List[DraftPosition]:
    """Picks of a round in on-the-clock order (reversed for even snake rounds)."""
    reverse = is_reversed_round(rnd.round_number, is_snake_draft)
    return sorted(rnd.picks, key=lambda p: p.pick_number, reverse=reverse)
