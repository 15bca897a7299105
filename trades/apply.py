from __future__ import annotations

"""Write side of the trade ledger.

apply_trade_to_db()  : insert the trade + append each receiver to its pick's chain
revert_trade_in_db() : verify every chain tail belongs to the trade, then pop them

Both run inside one DraftRepo.transaction(); callers hold draft_write_lock.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional

from draft_repo import DraftRepo

from .errors import TRADE_UNWIND_OUT_OF_ORDER, TradeError
from .models import Trade, TRADE_STATUS_ACTIVE, TRADE_STATUS_CANCELLED, serialize_parties


@dataclass(frozen=True)
class _PickMove:
    draft_id: str
    overall_pick_number: int
    from_manager: str
    to_manager: str


def _collect_pick_moves(trade: Trade) -> List[_PickMove]:
    moves: List[_PickMove] = []
    for sender, asset in trade.as_proposal().pick_assets():
        if asset.to_manager_id is None:
            raise ValueError(f"stored trade asset has no receiver: trade_id={trade.trade_id}")
        moves.append(
            _PickMove(
                draft_id=asset.draft_id,
                overall_pick_number=int(asset.overall_pick_number),
                from_manager=sender,
                to_manager=asset.to_manager_id,
            )
        )
    return moves


def apply_trade_to_db(repo: DraftRepo, trade: Trade) -> Dict[str, object]:
    moves = _collect_pick_moves(trade)
    with repo.transaction():
        repo.insert_trade(
            trade.trade_id,
            parties=serialize_parties(trade.parties),
            notes=trade.notes,
            status=TRADE_STATUS_ACTIVE,
            created_at=trade.created_at,
        )
        for mv in moves:
            repo.append_pick_transfer(
                mv.draft_id,
                mv.overall_pick_number,
                manager_id=mv.to_manager,
                trade_id=trade.trade_id,
            )
    return {
        "trade_id": trade.trade_id,
        "pick_moves": [
            {
                "draft_id": mv.draft_id,
                "overall_pick_number": mv.overall_pick_number,
                "from_manager_id": mv.from_manager,
                "to_manager_id": mv.to_manager,
            }
            for mv in moves
        ],
    }


def revert_trade_in_db(repo: DraftRepo, trade: Trade, *, cancelled_at: str) -> List[Dict[str, object]]:
    """Unwind a trade's pick moves. Verifies everything before the first delete.

    Picks whose draft was deleted since the trade have no chain left; they are
    skipped. A pick already used keeps its completion and player_draft_status
    row; only ownership is restored.
    """
    moves = _collect_pick_moves(trade)
    removals: List[Dict[str, object]] = []
    with repo.transaction():
        for mv in moves:
            draft = repo.get_draft(mv.draft_id)
            if draft is None:
                continue
            found = draft.find_pick(mv.overall_pick_number)
            if found is None:
                continue
            _, pick = found
            details = {
                "trade_id": trade.trade_id,
                "draft_id": mv.draft_id,
                "overall_pick_number": mv.overall_pick_number,
            }
            chain = repo.get_pick_transfers(mv.draft_id, mv.overall_pick_number)
            tail: Optional[Dict[str, object]] = chain[-1] if chain else None
            if tail is None or tail["trade_id"] != trade.trade_id or tail["manager_id"] != mv.to_manager:
                raise TradeError(
                    TRADE_UNWIND_OUT_OF_ORDER,
                    "A later trade moved this pick; cancel that trade first",
                    dict(
                        details,
                        expected_owner=mv.to_manager,
                        current_owner=pick.current_owner,
                        tail_trade_id=tail["trade_id"] if tail else None,
                    ),
                )
            removals.append(
                {
                    "draft_id": mv.draft_id,
                    "overall_pick_number": mv.overall_pick_number,
                    "seq": tail["seq"],
                    "restored_owner": chain[-2]["manager_id"] if len(chain) > 1 else pick.manager_id,
                }
            )

        for r in removals:
            repo.delete_pick_transfer(r["draft_id"], r["overall_pick_number"], r["seq"])
        repo.set_trade_status(trade.trade_id, TRADE_STATUS_CANCELLED, cancelled_at=cancelled_at)
    return [
        {
            "draft_id": r["draft_id"],
            "overall_pick_number": r["overall_pick_number"],
            "restored_owner": r["restored_owner"],
        }
        for r in removals
    ]
