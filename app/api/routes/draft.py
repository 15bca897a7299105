from __future__ import annotations

from typing import Optional

from fastapi import APIRouter

import state
from draft.board import build_board
from draft.errors import DraftError
from draft.lifecycle import DraftLifecycleManager
from draft.picks import complete_pick
from draft_repo import DraftRepo
from app.schemas.draft import (
    AdvancePickRequest,
    CompletePickRequest,
    DraftCreateRequest,
    UpdateActivePickRequest,
)
from app.services.error_facade import _draft_error_response

router = APIRouter()


# Fixed paths first: /draft/{draft_id} would otherwise capture them.


@router.get("/draft")
async def api_list_drafts():
    with DraftRepo(state.get_db_path()) as repo:
        drafts = DraftLifecycleManager(repo).list_drafts()
        return {"value": [d.to_dict() for d in drafts]}


@router.get("/draft/active")
async def api_get_active_draft():
    try:
        with DraftRepo(state.get_db_path()) as repo:
            draft = DraftLifecycleManager(repo).get_active_draft()
            return {"value": draft.to_dict()}
    except DraftError as exc:
        return _draft_error_response(exc)


@router.get("/draft/currentPick")
async def api_get_current_pick():
    try:
        with DraftRepo(state.get_db_path()) as repo:
            return {"value": DraftLifecycleManager(repo).get_current_pick()}
    except DraftError as exc:
        return _draft_error_response(exc)


@router.get("/draft/activePick")
async def api_get_active_pick():
    try:
        with DraftRepo(state.get_db_path()) as repo:
            return {"value": DraftLifecycleManager(repo).get_active_pick()}
    except DraftError as exc:
        return _draft_error_response(exc)


@router.post("/draft/advancePick")
async def api_advance_pick(req: Optional[AdvancePickRequest] = None):
    skip_completed = bool(req.skip_completed) if req is not None else False
    try:
        with DraftRepo(state.get_db_path()) as repo:
            return {"value": DraftLifecycleManager(repo).advance(skip_completed=skip_completed)}
    except DraftError as exc:
        return _draft_error_response(exc)


@router.post("/draft/updateActivePick")
async def api_update_active_pick(req: UpdateActivePickRequest):
    try:
        with DraftRepo(state.get_db_path()) as repo:
            return {"value": DraftLifecycleManager(repo).set_active(req.overall_pick_number)}
    except DraftError as exc:
        return _draft_error_response(exc)


@router.post("/draft")
async def api_create_draft(req: DraftCreateRequest):
    try:
        with DraftRepo(state.get_db_path()) as repo:
            draft = DraftLifecycleManager(repo).create_draft(
                year=req.year,
                type=req.type,
                is_snake_draft=req.is_snake_draft,
                initial_rounds=req.initial_rounds,
                draft_order=req.draft_order,
            )
            return {"value": draft.to_dict()}
    except DraftError as exc:
        return _draft_error_response(exc)


@router.post("/draft/pick")
async def api_complete_pick(req: CompletePickRequest):
    try:
        with DraftRepo(state.get_db_path()) as repo:
            result = complete_pick(
                repo,
                overall_pick_number=req.overall_pick_number,
                player_id=req.player_id,
                manager_id=req.manager_id,
                draft_id=req.draft_id,
            )
            return {"value": result}
    except DraftError as exc:
        return _draft_error_response(exc)


@router.get("/draft/{draft_id}")
async def api_get_draft(draft_id: str):
    try:
        with DraftRepo(state.get_db_path()) as repo:
            return {"value": DraftLifecycleManager(repo).get_draft(draft_id).to_dict()}
    except DraftError as exc:
        return _draft_error_response(exc)


@router.get("/draft/{draft_id}/board")
async def api_get_board(draft_id: str):
    try:
        with DraftRepo(state.get_db_path()) as repo:
            draft = DraftLifecycleManager(repo).get_draft(draft_id)
            return {"value": build_board(draft)}
    except DraftError as exc:
        return _draft_error_response(exc)


@router.post("/draft/{draft_id}/addRound")
async def api_add_round(draft_id: str):
    try:
        with DraftRepo(state.get_db_path()) as repo:
            return {"value": DraftLifecycleManager(repo).add_round(draft_id).to_dict()}
    except DraftError as exc:
        return _draft_error_response(exc)


@router.post("/draft/{draft_id}/removeRound")
async def api_remove_round(draft_id: str):
    try:
        with DraftRepo(state.get_db_path()) as repo:
            return {"value": DraftLifecycleManager(repo).remove_round(draft_id).to_dict()}
    except DraftError as exc:
        return _draft_error_response(exc)


@router.post("/draft/{draft_id}/toggleActive")
async def api_toggle_active(draft_id: str):
    try:
        with DraftRepo(state.get_db_path()) as repo:
            return {"value": DraftLifecycleManager(repo).toggle_active(draft_id).to_dict()}
    except DraftError as exc:
        return _draft_error_response(exc)


@router.post("/draft/{draft_id}/reset")
async def api_reset_draft(draft_id: str):
    try:
        with DraftRepo(state.get_db_path()) as repo:
            return {"value": DraftLifecycleManager(repo).reset(draft_id).to_dict()}
    except DraftError as exc:
        return _draft_error_response(exc)


@router.delete("/draft/{draft_id}")
async def api_delete_draft(draft_id: str):
    try:
        with DraftRepo(state.get_db_path()) as repo:
            DraftLifecycleManager(repo).delete_draft(draft_id)
            return {"value": {"draft_id": draft_id, "deleted": True}}
    except DraftError as exc:
        return _draft_error_response(exc)
