"""Draft domain types.

Dependency-light; imported by:
- draft.order     (pure round construction / display numbering)
- draft.cursor    (pure current/active pointer state machine)
- draft.lifecycle (DB-integrated draft lifecycle)
- trades.*        (pick ownership chains)

Conventions:
- pick_number is the manager's 1-based position in draft_order. It is fixed
  at round creation and never reordered for snake rounds; the snake "display"
  number is derived (see draft.order.display_pick_number).
- overall_pick_number is unique within a draft and contiguous 1..rounds*managers.
- traded_to is an append-only ownership log; the current owner is its last
  element, or the original manager_id when empty.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Optional, Tuple

ManagerId = str
DraftId = str
RoundNo = int
OverallNo = int


@dataclass(frozen=True, slots=True)
class PickRef:
    """A cursor value: (round, pick, overall). Immutable."""

    round: RoundNo
    pick: int
    overall_pick_number: OverallNo

    def __post_init__(self) -> None:
        object.__setattr__(self, "round", int(self.round))
        object.__setattr__(self, "pick", int(self.pick))
        object.__setattr__(self, "overall_pick_number", int(self.overall_pick_number))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "round": int(self.round),
            "pick": int(self.pick),
            "overall_pick_number": int(self.overall_pick_number),
        }


FIRST_PICK = PickRef(round=1, pick=1, overall_pick_number=1)


@dataclass(frozen=True, slots=True)
class DraftPosition:
    manager_id: ManagerId
    pick_number: int
    overall_pick_number: OverallNo
    traded_to: Tuple[ManagerId, ...] = ()
    is_complete: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "manager_id", str(self.manager_id))
        object.__setattr__(self, "pick_number", int(self.pick_number))
        object.__setattr__(self, "overall_pick_number", int(self.overall_pick_number))
        object.__setattr__(self, "traded_to", tuple(str(m) for m in (self.traded_to or ())))
        object.__setattr__(self, "is_complete", bool(self.is_complete))

    @property
    def current_owner(self) -> ManagerId:
        if self.traded_to:
            return self.traded_to[-1]
        return self.manager_id

    def to_dict(self) -> Dict[str, Any]:
        return {
            "manager_id": self.manager_id,
            "pick_number": int(self.pick_number),
            "overall_pick_number": int(self.overall_pick_number),
            "traded_to": list(self.traded_to),
            "current_owner": self.current_owner,
            "is_complete": bool(self.is_complete),
        }


@dataclass(frozen=True, slots=True)
class DraftRound:
    round_number: RoundNo
    picks: Tuple[DraftPosition, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "round_number", int(self.round_number))
        object.__setattr__(self, "picks", tuple(self.picks or ()))

    def has_completed_picks(self) -> bool:
        return any(p.is_complete for p in self.picks)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "round_number": int(self.round_number),
            "picks": [p.to_dict() for p in self.picks],
        }


@dataclass(frozen=True, slots=True)
class Draft:
    """Draft aggregate (as read from the repo).

    Services never mutate a Draft in place; they compute the change, write it
    through DraftRepo in one transaction, and re-read.
    """

    draft_id: DraftId
    year: int
    type: str
    is_snake_draft: bool
    is_active: bool
    draft_order: Tuple[ManagerId, ...]
    rounds: Tuple[DraftRound, ...]
    current: PickRef = FIRST_PICK
    active: PickRef = FIRST_PICK
    created_at: Optional[str] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "year", int(self.year))
        object.__setattr__(self, "is_snake_draft", bool(self.is_snake_draft))
        object.__setattr__(self, "is_active", bool(self.is_active))
        object.__setattr__(self, "draft_order", tuple(str(m) for m in (self.draft_order or ())))
        object.__setattr__(self, "rounds", tuple(sorted(self.rounds or (), key=lambda r: r.round_number)))

    @property
    def manager_count(self) -> int:
        return len(self.draft_order)

    @property
    def round_count(self) -> int:
        return len(self.rounds)

    @property
    def pick_count(self) -> int:
        return sum(len(r.picks) for r in self.rounds)

    def iter_picks(self) -> Iterator[Tuple[RoundNo, DraftPosition]]:
        """All picks as (round_number, pick) ordered by overall_pick_number."""
        rows: List[Tuple[RoundNo, DraftPosition]] = []
        for rnd in self.rounds:
            for p in rnd.picks:
                rows.append((rnd.round_number, p))
        rows.sort(key=lambda t: t[1].overall_pick_number)
        return iter(rows)

    def find_pick(self, overall_pick_number: int) -> Optional[Tuple[RoundNo, DraftPosition]]:
        target = int(overall_pick_number)
        for rnd in self.rounds:
            for p in rnd.picks:
                if p.overall_pick_number == target:
                    return rnd.round_number, p
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.draft_id,
            "year": int(self.year),
            "type": self.type,
            "is_snake_draft": bool(self.is_snake_draft),
            "is_active": bool(self.is_active),
            "created_at": self.created_at,
            "draft_order": list(self.draft_order),
            "rounds": [r.to_dict() for r in self.rounds],
            "current_round": self.current.round,
            "current_pick": self.current.pick,
            "current_overall_pick": self.current.overall_pick_number,
            "active_round": self.active.round,
            "active_pick": self.active.pick,
            "active_overall_pick": self.active.overall_pick_number,
        }
