from __future__ import annotations

"""Draft board view (pure).

Rounds in on-the-clock order with display pick numbers and current owners.
Used by GET /draft/{id}/board and by DraftRepo.export_board.
"""

from typing import Any, Dict, List

from .order import display_pick_number, is_reversed_round, round_traversal
from .types import Draft


def build_board(draft: Draft) -> Dict[str, Any]:
    rounds: List[Dict[str, Any]] = []
    for rnd in draft.rounds:
        picks = []
        for p in round_traversal(rnd, draft.is_snake_draft):
            picks.append(
                {
                    "pick_number": p.pick_number,
                    "display_pick": display_pick_number(
                        p.pick_number, rnd.round_number, draft.manager_count, draft.is_snake_draft
                    ),
                    "overall_pick_number": p.overall_pick_number,
                    "manager_id": p.manager_id,
                    "current_owner": p.current_owner,
                    "traded_to": list(p.traded_to),
                    "is_complete": p.is_complete,
                    "is_current": p.overall_pick_number == draft.current.overall_pick_number,
                    "is_active": p.overall_pick_number == draft.active.overall_pick_number,
                }
            )
        rounds.append(
            {
                "round_number": rnd.round_number,
                "reversed": is_reversed_round(rnd.round_number, draft.is_snake_draft),
                "picks": picks,
            }
        )
    return {
        "draft_id": draft.draft_id,
        "year": draft.year,
        "is_snake_draft": draft.is_snake_draft,
        "current": draft.current.to_dict(),
        "active": draft.active.to_dict(),
        "rounds": rounds,
    }


def board_records(draft: Draft) -> List[Dict[str, Any]]:
    """Flat rows (one per pick) for tabular export."""
    records: List[Dict[str, Any]] = []
    for rnd in build_board(draft)["rounds"]:
        for p in rnd["picks"]:
            records.append(
                {
                    "round": rnd["round_number"],
                    "pick": p["pick_number"],
                    "display_pick": p["display_pick"],
                    "overall_pick": p["overall_pick_number"],
                    "original_manager": p["manager_id"],
                    "current_owner": p["current_owner"],
                    "trade_hops": len(p["traded_to"]),
                    "is_complete": p["is_complete"],
                }
            )
    return records
