from __future__ import annotations

from fastapi import APIRouter

import state
from draft.errors import DraftError
from draft_repo import DraftRepo
from trades.ledger import TradeLedger
from trades.models import serialize_trade
from app.schemas.trades import TradeCreateRequest
from app.services.error_facade import _draft_error_response

router = APIRouter()


@router.get("/trades")
async def api_list_trades():
    with DraftRepo(state.get_db_path()) as repo:
        trades = TradeLedger(repo).list_trades()
        return {"value": [serialize_trade(t) for t in trades]}


@router.get("/trades/{trade_id}")
async def api_get_trade(trade_id: str):
    try:
        with DraftRepo(state.get_db_path()) as repo:
            return {"value": serialize_trade(TradeLedger(repo).get_trade(trade_id))}
    except DraftError as exc:
        return _draft_error_response(exc)


@router.post("/trades")
async def api_create_trade(req: TradeCreateRequest):
    try:
        with DraftRepo(state.get_db_path()) as repo:
            trade = TradeLedger(repo).create_trade(req.parties, req.notes)
            return {"value": serialize_trade(trade)}
    except DraftError as exc:
        return _draft_error_response(exc)


@router.delete("/trades/{trade_id}")
async def api_cancel_trade(trade_id: str):
    try:
        with DraftRepo(state.get_db_path()) as repo:
            return {"value": serialize_trade(TradeLedger(repo).cancel_trade(trade_id))}
    except DraftError as exc:
        return _draft_error_response(exc)


@router.delete("/trades/{trade_id}/permanent")
async def api_delete_trade(trade_id: str):
    try:
        with DraftRepo(state.get_db_path()) as repo:
            return {"value": TradeLedger(repo).delete_trade(trade_id)}
    except DraftError as exc:
        return _draft_error_response(exc)
