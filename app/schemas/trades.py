from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel


class TradeCreateRequest(BaseModel):
    # [{"manager_id": "...", "assets": [{"type": "DraftPick", "draft_id": "...",
    #   "overall_pick_number": 7, "to_manager_id": "..."}]}]
    parties: List[Dict[str, Any]]
    notes: Optional[str] = None
