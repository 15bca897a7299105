from __future__ import annotations

from typing import Optional

from pydantic import BaseModel


class ManagerUpsertRequest(BaseModel):
    id: Optional[str] = None  # generated when omitted
    name: str
    team_name: Optional[str] = None
    is_user: bool = False
    email: Optional[str] = None
