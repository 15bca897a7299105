from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel


class DraftCreateRequest(BaseModel):
    year: int
    type: str = "standard"
    is_snake_draft: bool = False
    initial_rounds: int = 1
    draft_order: List[str]


class AdvancePickRequest(BaseModel):
    skip_completed: bool = False


class UpdateActivePickRequest(BaseModel):
    overall_pick_number: int


class CompletePickRequest(BaseModel):
    overall_pick_number: int
    player_id: str
    manager_id: Optional[str] = None
    draft_id: Optional[str] = None  # defaults to the active draft
