from __future__ import annotations

"""Pick completion.

complete_pick() is the one place where a player is assigned to a pick. In a
single transaction it:
  - marks the pick complete,
  - advances the current cursor when the completed pick was the current one,
  - stamps the player's draft status (drafted_by = the pick's current owner).

If any step fails, none of them is committed; the current cursor can never be
ahead of the completion state.
"""

import logging
from typing import Any, Dict, Optional

import config
from draft_repo import DraftRepo
from schema import normalize_manager_id, normalize_player_id

from .cursor import PickCursor
from .errors import (
    DRAFT_NOT_FOUND,
    INVALID_REQUEST,
    NO_ACTIVE_DRAFT,
    PICK_ALREADY_COMPLETE,
    PICK_NOT_FOUND,
    PICK_NOT_OWNED,
    PLAYER_ALREADY_DRAFTED,
    ConflictError,
    NotFoundError,
    RuleViolation,
)
from .lifecycle import coerce_draft_id
from .locks import draft_write_lock

logger = logging.getLogger(__name__)


def complete_pick(
    repo: DraftRepo,
    *,
    overall_pick_number: int,
    player_id: Any,
    manager_id: Optional[Any] = None,
    draft_id: Optional[Any] = None,
    lock_timeout_s: Optional[float] = None,
) -> Dict[str, Any]:
    """Assign player_id to a pick of the active draft (or of draft_id).

    Returns a summary with the completed pick, the owner credited and the
    cursor after the completion.
    """
    try:
        pid = normalize_player_id(player_id)
        mid = normalize_manager_id(manager_id) if manager_id is not None else None
    except ValueError as exc:
        raise RuleViolation(INVALID_REQUEST, str(exc)) from exc
    did = coerce_draft_id(draft_id) if draft_id is not None else None
    overall = int(overall_pick_number)
    timeout = config.LOCK_TIMEOUT_S if lock_timeout_s is None else lock_timeout_s

    with draft_write_lock(reason=f"COMPLETE_PICK:{did or 'active'}:{overall}", timeout_s=timeout):
        with repo.transaction():
            if did is None:
                draft = repo.get_active_draft()
                if draft is None:
                    raise NotFoundError(NO_ACTIVE_DRAFT, "No active draft")
            else:
                draft = repo.get_draft(did)
                if draft is None:
                    raise NotFoundError(DRAFT_NOT_FOUND, "Draft not found", {"draft_id": did})

            found = draft.find_pick(overall)
            details = {"draft_id": draft.draft_id, "overall_pick_number": overall}
            if found is None:
                raise NotFoundError(PICK_NOT_FOUND, "Pick not found", details)
            round_number, pick = found

            if pick.is_complete:
                raise ConflictError(PICK_ALREADY_COMPLETE, "Pick is already complete", details)
            if repo.get_player_draft_status(draft.draft_id, pid) is not None:
                raise ConflictError(
                    PLAYER_ALREADY_DRAFTED,
                    "Player was already drafted in this draft",
                    dict(details, player_id=pid),
                )
            owner = pick.current_owner
            if mid is not None and mid != owner:
                raise RuleViolation(
                    PICK_NOT_OWNED,
                    "Manager does not own this pick",
                    dict(details, manager_id=mid, current_owner=owner),
                )

            cursor = PickCursor.from_draft(draft)
            repo.set_pick_complete(draft.draft_id, overall)
            advanced = cursor.on_pick_completed(overall)
            if advanced:
                repo.update_cursors(draft.draft_id, current=cursor.current, active=cursor.active)
            repo.mark_player_drafted(
                draft.draft_id,
                pid,
                drafted_by=owner,
                round=round_number,
                pick=pick.pick_number,
                overall_pick=overall,
            )

    logger.info(
        "pick completed: draft_id=%s overall=%s player_id=%s drafted_by=%s advanced=%s",
        draft.draft_id,
        overall,
        pid,
        owner,
        advanced,
    )
    return {
        "draft_id": draft.draft_id,
        "round": round_number,
        "pick": pick.pick_number,
        "overall_pick_number": overall,
        "player_id": pid,
        "drafted_by": owner,
        "advanced": advanced,
        "current": cursor.current.to_dict(),
    }
