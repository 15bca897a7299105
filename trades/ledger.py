from __future__ import annotations

"""TradeLedger: create / cancel / delete trades of draft picks.

Ownership lives in each pick's traded_to chain (pick_transfers rows). A trade
appends one entry per traded pick; cancelling it removes exactly those
entries, and only when each is still the tail of its chain. Trades that
happened later must be cancelled first (most recent first).
"""

import logging
from typing import Any, Dict, List, Optional

import config
from draft.locks import draft_write_lock
from draft_repo import DraftRepo, _utc_now_iso
from schema import TRADE_ID_PREFIX, new_id, normalize_trade_id

from .apply import apply_trade_to_db, revert_trade_in_db
from .errors import (
    DEAL_INVALIDATED,
    PICK_NOT_FOUND,
    TRADE_ALREADY_CANCELLED,
    TRADE_NOT_FOUND,
    NotFoundError,
    TradeError,
)
from .models import (
    TRADE_STATUS_ACTIVE,
    Trade,
    canonicalize_parties,
    parse_trade_proposal,
    trade_from_row,
)
from .rules import build_trade_context
from .validator import validate_trade

logger = logging.getLogger(__name__)


class TradeLedger:
    def __init__(self, repo: DraftRepo, *, lock_timeout_s: Optional[float] = None) -> None:
        self.repo = repo
        self.lock_timeout_s = config.LOCK_TIMEOUT_S if lock_timeout_s is None else lock_timeout_s

    def _lock(self, reason: str):
        return draft_write_lock(reason=reason, timeout_s=self.lock_timeout_s)

    @staticmethod
    def _trade_id(value: Any) -> str:
        try:
            return normalize_trade_id(value)
        except ValueError as exc:
            raise TradeError(DEAL_INVALIDATED, str(exc), {"trade_id": value}) from exc

    # ------------------------
    # Reads
    # ------------------------

    def get_trade(self, trade_id: Any) -> Trade:
        tid = self._trade_id(trade_id)
        row = self.repo.get_trade_row(tid)
        if row is None:
            raise NotFoundError(TRADE_NOT_FOUND, "Trade not found", {"trade_id": tid})
        return trade_from_row(row)

    def list_trades(self) -> List[Trade]:
        return [trade_from_row(r) for r in self.repo.list_trade_rows()]

    def current_owner(self, draft_id: str, overall_pick_number: int) -> str:
        draft = self.repo.get_draft(draft_id)
        found = draft.find_pick(overall_pick_number) if draft is not None else None
        if found is None:
            raise NotFoundError(
                PICK_NOT_FOUND,
                "Pick not found",
                {"draft_id": draft_id, "overall_pick_number": int(overall_pick_number)},
            )
        return found[1].current_owner

    # ------------------------
    # Writes
    # ------------------------

    def create_trade(self, parties: Any, notes: Any = None) -> Trade:
        proposal = parse_trade_proposal(parties, notes)
        trade_id = new_id(TRADE_ID_PREFIX)
        with self._lock(f"CREATE_TRADE:{trade_id}"):
            with self.repo.transaction():
                ctx = build_trade_context(self.repo)
                validate_trade(proposal, ctx)
                proposal = canonicalize_parties(proposal)
                trade = Trade(
                    trade_id=trade_id,
                    parties=proposal.parties,
                    notes=proposal.notes,
                    status=TRADE_STATUS_ACTIVE,
                    created_at=_utc_now_iso(),
                )
                result = apply_trade_to_db(self.repo, trade)
        logger.info(
            "trade created: trade_id=%s parties=%s pick_moves=%s",
            trade_id,
            proposal.manager_ids,
            result["pick_moves"],
        )
        return self.get_trade(trade_id)

    def cancel_trade(self, trade_id: Any) -> Trade:
        tid = self._trade_id(trade_id)
        with self._lock(f"CANCEL_TRADE:{tid}"):
            with self.repo.transaction():
                trade = self.get_trade(tid)
                if not trade.is_active:
                    raise TradeError(
                        TRADE_ALREADY_CANCELLED,
                        "Trade is already cancelled",
                        {"trade_id": tid, "cancelled_at": trade.cancelled_at},
                    )
                restored = revert_trade_in_db(self.repo, trade, cancelled_at=_utc_now_iso())
        logger.info("trade cancelled: trade_id=%s restored=%s", tid, restored)
        return self.get_trade(tid)

    def delete_trade(self, trade_id: Any) -> Dict[str, Any]:
        """Remove a trade from history, cancelling it first if still active."""
        tid = self._trade_id(trade_id)
        with self._lock(f"DELETE_TRADE:{tid}"):
            with self.repo.transaction():
                trade = self.get_trade(tid)
                was_active = trade.is_active
                if was_active:
                    self.cancel_trade(tid)
                self.repo.delete_trade_row(tid)
        logger.info("trade deleted: trade_id=%s cancelled_first=%s", tid, was_active)
        return {"trade_id": tid, "deleted": True, "cancelled_first": was_active}
