from __future__ import annotations

from fastapi import APIRouter

import state
from draft.errors import INVALID_REQUEST, DraftError, RuleViolation
from draft_repo import DraftRepo
from app.services.error_facade import _draft_error_response

router = APIRouter()


@router.get("/players/{player_id}/draftStatus")
async def api_player_draft_status(player_id: str):
    """Every draft in which the player was picked (empty list when undrafted)."""
    try:
        with DraftRepo(state.get_db_path()) as repo:
            try:
                rows = repo.list_player_draft_status(player_id)
            except ValueError as exc:
                raise RuleViolation(INVALID_REQUEST, str(exc), {"player_id": player_id}) from exc
            return {"value": rows}
    except DraftError as exc:
        return _draft_error_response(exc)
