from __future__ import annotations

"""Pick cursor state machine (in-memory, pure).

- Holds:
    * the draft's picks ordered by overall_pick_number (with completion flags)
    * current : the draft's progress pointer (next pick due)
    * active  : the navigation pointer (pick being displayed / edited)

- Provides:
    * advance(skip_completed)      moves current forward only
    * set_active(overall)          moves active anywhere, never touches current
    * can_advance() / can_skip_to_incomplete()
    * on_pick_completed(overall)   auto-advance when the current pick is made

The two pointers are independent values. Nothing here moves active as a side
effect of progress or the other way around.
"""

from dataclasses import dataclass, replace
from typing import Dict, List, Optional

from .errors import (
    CANNOT_ADVANCE_PAST_FINAL_PICK,
    NO_INCOMPLETE_PICKS,
    PICK_NOT_FOUND,
    NotFoundError,
    RuleViolation,
)
from .types import Draft, PickRef


@dataclass(frozen=True, slots=True)
class _Slot:
    ref: PickRef
    is_complete: bool


class PickCursor:
    def __init__(self, slots: List[_Slot], current: PickRef, active: PickRef) -> None:
        self._slots = sorted(slots, key=lambda s: s.ref.overall_pick_number)
        self._index: Dict[int, int] = {
            s.ref.overall_pick_number: i for i, s in enumerate(self._slots)
        }
        self.current = current
        self.active = active

    @classmethod
    def from_draft(cls, draft: Draft) -> "PickCursor":
        slots = [
            _Slot(
                ref=PickRef(round=round_number, pick=p.pick_number, overall_pick_number=p.overall_pick_number),
                is_complete=p.is_complete,
            )
            for round_number, p in draft.iter_picks()
        ]
        return cls(slots, current=draft.current, active=draft.active)

    # ------------------------
    # Lookups
    # ------------------------

    @property
    def last(self) -> Optional[PickRef]:
        return self._slots[-1].ref if self._slots else None

    def _position(self, overall_pick_number: int) -> int:
        pos = self._index.get(int(overall_pick_number))
        if pos is None:
            raise NotFoundError(
                PICK_NOT_FOUND,
                "Pick not found",
                {"overall_pick_number": int(overall_pick_number)},
            )
        return pos

    def ref_for(self, overall_pick_number: int) -> PickRef:
        return self._slots[self._position(overall_pick_number)].ref

    def is_complete(self, overall_pick_number: int) -> bool:
        return self._slots[self._position(overall_pick_number)].is_complete

    # ------------------------
    # Predicates
    # ------------------------

    def can_advance(self) -> bool:
        last = self.last
        if last is None:
            return False
        return self.current.overall_pick_number < last.overall_pick_number

    def can_skip_to_incomplete(self) -> bool:
        cur = self.current.overall_pick_number
        return any(
            not s.is_complete for s in self._slots if s.ref.overall_pick_number > cur
        )

    # ------------------------
    # Moves
    # ------------------------

    def advance(self, skip_completed: bool = False) -> PickRef:
        """Move current forward; never wraps, never silently no-ops."""
        pos = self._position(self.current.overall_pick_number)
        if not skip_completed:
            if pos + 1 >= len(self._slots):
                raise RuleViolation(
                    CANNOT_ADVANCE_PAST_FINAL_PICK,
                    "Cannot advance past the final pick",
                    {"current": self.current.to_dict()},
                )
            self.current = self._slots[pos + 1].ref
            return self.current

        for slot in self._slots[pos + 1:]:
            if not slot.is_complete:
                self.current = slot.ref
                return self.current
        raise RuleViolation(
            NO_INCOMPLETE_PICKS,
            "No incomplete picks remain after the current pick",
            {"current": self.current.to_dict()},
        )

    def set_active(self, overall_pick_number: int) -> PickRef:
        self.active = self.ref_for(overall_pick_number)
        return self.active

    def mark_complete(self, overall_pick_number: int) -> None:
        pos = self._position(overall_pick_number)
        self._slots[pos] = replace(self._slots[pos], is_complete=True)

    def on_pick_completed(self, overall_pick_number: int) -> bool:
        """Record a completion; advance current by one if it was the current pick.

        Returns True when the cursor moved. Completing the final pick leaves
        current on it; completing any other pick leaves current untouched.
        """
        self.mark_complete(overall_pick_number)
        if int(overall_pick_number) != self.current.overall_pick_number:
            return False
        if not self.can_advance():
            return False
        self.advance(skip_completed=False)
        return True

    def clamp_active(self) -> bool:
        """Pull the active pointer back onto the last pick if it falls beyond it.

        Used after the final round is removed. current is never clamped: the
        lifecycle refuses to remove the round holding it.
        """
        last = self.last
        if last is None:
            return False
        if self.active.overall_pick_number > last.overall_pick_number:
            self.active = last
            return True
        return False
