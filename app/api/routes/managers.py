from __future__ import annotations

import logging

from fastapi import APIRouter

import state
from draft.errors import INVALID_REQUEST, DraftError, RuleViolation
from draft_repo import DraftRepo
from schema import MANAGER_ID_PREFIX, new_id
from app.schemas.managers import ManagerUpsertRequest
from app.services.error_facade import _draft_error_response

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/managers")
async def api_list_managers():
    with DraftRepo(state.get_db_path()) as repo:
        return {"value": repo.list_managers()}


@router.post("/managers")
async def api_upsert_manager(req: ManagerUpsertRequest):
    manager_id = req.id or new_id(MANAGER_ID_PREFIX)
    try:
        with DraftRepo(state.get_db_path()) as repo:
            try:
                manager = repo.upsert_manager(
                    manager_id,
                    name=req.name,
                    team_name=req.team_name,
                    is_user=req.is_user,
                    email=req.email,
                )
            except ValueError as exc:
                raise RuleViolation(INVALID_REQUEST, str(exc), {"manager_id": manager_id}) from exc
        logger.info("manager saved: manager_id=%s", manager["id"])
        return {"value": manager}
    except DraftError as exc:
        return _draft_error_response(exc)
