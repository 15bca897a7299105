from __future__ import annotations

"""Draft lifecycle (DB-integrated).

DraftLifecycleManager owns every change to a draft's shape and cursors:
create, toggle active, add/remove round, reset, delete, and the cursor moves
requested by the UI (advance current, set active).

Each mutation follows the same sequence:
  1) take draft_write_lock
  2) open one DraftRepo.transaction()
  3) re-read the draft, validate, write, re-read

Validation errors are raised before the first write, so a rejected request
leaves the stored draft untouched.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence

import config
from draft_repo import DraftRepo
from schema import DRAFT_ID_PREFIX, new_id, normalize_draft_id, normalize_manager_id

from .cursor import PickCursor
from .errors import (
    CANNOT_REMOVE_ONLY_ROUND,
    DRAFT_NOT_ACTIVE,
    DRAFT_NOT_FOUND,
    DUPLICATE_MANAGER_IN_ORDER,
    EMPTY_DRAFT_ORDER,
    INVALID_REQUEST,
    MANAGER_NOT_FOUND,
    NO_ACTIVE_DRAFT,
    ROUND_CONTAINS_CURRENT_PICK,
    ROUND_HAS_COMPLETED_PICKS,
    ROUND_HAS_TRADED_PICKS,
    NotFoundError,
    RuleViolation,
)
from .locks import draft_write_lock
from .order import build_rounds, compute_round, display_pick_number
from .types import FIRST_PICK, Draft, ManagerId, PickRef

logger = logging.getLogger(__name__)


def coerce_draft_id(value: Any) -> str:
    try:
        return normalize_draft_id(value)
    except ValueError as exc:
        raise RuleViolation(INVALID_REQUEST, str(exc), {"draft_id": value}) from exc


def pick_payload(draft: Draft, ref: PickRef) -> Dict[str, Any]:
    """Cursor payload used by the currentPick / activePick endpoints."""
    return {
        "draft_id": draft.draft_id,
        "round": ref.round,
        "pick": ref.pick,
        "overall_pick_number": ref.overall_pick_number,
        "display_pick": display_pick_number(
            ref.pick, ref.round, draft.manager_count, draft.is_snake_draft
        ),
    }


class DraftLifecycleManager:
    def __init__(self, repo: DraftRepo, *, lock_timeout_s: Optional[float] = None) -> None:
        self.repo = repo
        self.lock_timeout_s = config.LOCK_TIMEOUT_S if lock_timeout_s is None else lock_timeout_s

    def _lock(self, reason: str):
        return draft_write_lock(reason=reason, timeout_s=self.lock_timeout_s)

    # ------------------------
    # Reads
    # ------------------------

    def get_draft(self, draft_id: Any) -> Draft:
        did = coerce_draft_id(draft_id)
        draft = self.repo.get_draft(did)
        if draft is None:
            raise NotFoundError(DRAFT_NOT_FOUND, "Draft not found", {"draft_id": did})
        return draft

    def list_drafts(self) -> List[Draft]:
        return self.repo.list_drafts()

    def get_active_draft(self) -> Draft:
        draft = self.repo.get_active_draft()
        if draft is None:
            raise NotFoundError(NO_ACTIVE_DRAFT, "No active draft")
        return draft

    def get_current_pick(self) -> Dict[str, Any]:
        draft = self.get_active_draft()
        return pick_payload(draft, draft.current)

    def get_active_pick(self) -> Dict[str, Any]:
        draft = self.get_active_draft()
        return pick_payload(draft, draft.active)

    # ------------------------
    # Create
    # ------------------------

    def _validate_draft_order(self, draft_order: Sequence[Any]) -> List[ManagerId]:
        order: List[ManagerId] = []
        for raw in draft_order or []:
            try:
                order.append(normalize_manager_id(raw))
            except ValueError as exc:
                raise RuleViolation(INVALID_REQUEST, str(exc), {"manager_id": raw}) from exc
        if not order:
            raise RuleViolation(EMPTY_DRAFT_ORDER, "Draft order must name at least one manager")

        seen = set()
        dupes = []
        for m in order:
            if m in seen and m not in dupes:
                dupes.append(m)
            seen.add(m)
        if dupes:
            raise RuleViolation(
                DUPLICATE_MANAGER_IN_ORDER,
                "A manager may appear only once in the draft order",
                {"manager_ids": dupes},
            )

        missing = self.repo.find_missing_managers(order)
        if missing:
            raise NotFoundError(MANAGER_NOT_FOUND, "Unknown manager in draft order", {"manager_ids": missing})
        return order

    def create_draft(
        self,
        *,
        year: int,
        type: str,
        is_snake_draft: bool,
        initial_rounds: int,
        draft_order: Sequence[Any],
    ) -> Draft:
        order = self._validate_draft_order(draft_order)
        rounds = build_rounds(initial_rounds, order, is_snake_draft)
        draft = Draft(
            draft_id=new_id(DRAFT_ID_PREFIX),
            year=int(year),
            type=str(type or "").strip() or "standard",
            is_snake_draft=bool(is_snake_draft),
            is_active=False,
            draft_order=tuple(order),
            rounds=tuple(rounds),
            current=FIRST_PICK,
            active=FIRST_PICK,
        )
        with self._lock(f"CREATE_DRAFT:{draft.draft_id}"):
            with self.repo.transaction():
                self.repo.insert_draft(draft)
        logger.info(
            "draft created: draft_id=%s year=%s rounds=%s managers=%s snake=%s",
            draft.draft_id,
            draft.year,
            draft.round_count,
            draft.manager_count,
            draft.is_snake_draft,
        )
        return self.get_draft(draft.draft_id)

    # ------------------------
    # Active flag
    # ------------------------

    def toggle_active(self, draft_id: Any) -> Draft:
        did = coerce_draft_id(draft_id)
        with self._lock(f"TOGGLE_ACTIVE:{did}"):
            with self.repo.transaction():
                draft = self.get_draft(did)
                activate = not draft.is_active
                deactivated: List[str] = []
                if activate:
                    # Others first: the partial unique index allows one active row.
                    deactivated = self.repo.deactivate_other_drafts(did)
                self.repo.set_draft_active(did, activate)
        logger.info(
            "draft %s: draft_id=%s deactivated_others=%s",
            "activated" if activate else "deactivated",
            did,
            deactivated,
        )
        return self.get_draft(did)

    # ------------------------
    # Rounds
    # ------------------------

    def add_round(self, draft_id: Any) -> Draft:
        did = coerce_draft_id(draft_id)
        with self._lock(f"ADD_ROUND:{did}"):
            with self.repo.transaction():
                draft = self.get_draft(did)
                rnd = compute_round(
                    draft.round_count + 1,
                    draft.draft_order,
                    draft.is_snake_draft,
                    draft.pick_count,
                )
                self.repo.insert_round(did, rnd)
        logger.info("round added: draft_id=%s round=%s", did, rnd.round_number)
        return self.get_draft(did)

    def remove_round(self, draft_id: Any) -> Draft:
        """Drop the highest round and clamp the active pointer into what is left.

        Raises RuleViolation with:
            CANNOT_REMOVE_ONLY_ROUND: the draft has a single round.
            ROUND_HAS_COMPLETED_PICKS: a pick in the round was used.
            ROUND_HAS_TRADED_PICKS: a pick in the round has an ownership chain.
            ROUND_CONTAINS_CURRENT_PICK: current is in the round; it never
                moves backwards, so it cannot be clamped.
        """
        did = coerce_draft_id(draft_id)
        with self._lock(f"REMOVE_ROUND:{did}"):
            with self.repo.transaction():
                draft = self.get_draft(did)
                if draft.round_count <= 1:
                    raise RuleViolation(
                        CANNOT_REMOVE_ONLY_ROUND,
                        "Cannot remove the only round of a draft",
                        {"draft_id": did},
                    )
                last = draft.rounds[-1]
                details = {"draft_id": did, "round_number": last.round_number}
                if last.has_completed_picks():
                    raise RuleViolation(
                        ROUND_HAS_COMPLETED_PICKS,
                        "Cannot remove a round that has completed picks",
                        details,
                    )
                if self.repo.count_transfers_in_round(did, last.round_number) > 0:
                    raise RuleViolation(
                        ROUND_HAS_TRADED_PICKS,
                        "Cannot remove a round whose picks have been traded",
                        details,
                    )
                if draft.current.round >= last.round_number:
                    raise RuleViolation(
                        ROUND_CONTAINS_CURRENT_PICK,
                        "Cannot remove the round holding the current pick",
                        dict(details, current=draft.current.to_dict()),
                    )

                self.repo.delete_round(did, last.round_number)

                cursor = PickCursor.from_draft(self.get_draft(did))
                if cursor.clamp_active():
                    self.repo.update_cursors(did, current=cursor.current, active=cursor.active)
        logger.info("round removed: draft_id=%s round=%s", did, last.round_number)
        return self.get_draft(did)

    # ------------------------
    # Cursor moves
    # ------------------------

    def advance(self, *, skip_completed: bool = False) -> Dict[str, Any]:
        with self._lock("ADVANCE_PICK"):
            with self.repo.transaction():
                draft = self.get_active_draft()
                cursor = PickCursor.from_draft(draft)
                before = cursor.current
                cursor.advance(skip_completed=bool(skip_completed))
                self.repo.update_cursors(draft.draft_id, current=cursor.current, active=cursor.active)
        logger.info(
            "current pick advanced: draft_id=%s from=%s to=%s skip_completed=%s",
            draft.draft_id,
            before.overall_pick_number,
            cursor.current.overall_pick_number,
            bool(skip_completed),
        )
        return pick_payload(draft, cursor.current)

    def set_active(self, overall_pick_number: int) -> Dict[str, Any]:
        with self._lock(f"SET_ACTIVE:{overall_pick_number}"):
            with self.repo.transaction():
                draft = self.get_active_draft()
                cursor = PickCursor.from_draft(draft)
                cursor.set_active(int(overall_pick_number))
                self.repo.update_cursors(draft.draft_id, current=cursor.current, active=cursor.active)
        return pick_payload(draft, cursor.active)

    # ------------------------
    # Reset / delete
    # ------------------------

    def reset(self, draft_id: Any) -> Draft:
        """Clear completions, rewind both cursors and the player draft status.

        Trade ownership chains are kept: a reset replays the same draft with
        the same pick owners.
        """
        did = coerce_draft_id(draft_id)
        with self._lock(f"RESET:{did}"):
            with self.repo.transaction():
                draft = self.get_draft(did)
                if not draft.is_active:
                    raise RuleViolation(DRAFT_NOT_ACTIVE, "Only the active draft can be reset", {"draft_id": did})
                cleared = self.repo.reset_picks(did)
                self.repo.update_cursors(did, current=FIRST_PICK, active=FIRST_PICK)
                players = self.repo.reset_player_draft_status(did)
        logger.info("draft reset: draft_id=%s picks_cleared=%s players_reset=%s", did, cleared, players)
        return self.get_draft(did)

    def delete_draft(self, draft_id: Any) -> None:
        did = coerce_draft_id(draft_id)
        with self._lock(f"DELETE_DRAFT:{did}"):
            with self.repo.transaction():
                self.get_draft(did)
                players = self.repo.reset_player_draft_status(did)
                self.repo.delete_draft(did)
        logger.info("draft deleted: draft_id=%s players_reset=%s", did, players)
