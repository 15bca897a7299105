from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Protocol, Tuple

from draft.types import Draft, DraftPosition
from draft_repo import DraftRepo


@dataclass
class TradeContext:
    repo: DraftRepo
    active_draft: Optional[Draft]
    extra: dict[str, Any] = field(default_factory=dict)
    _drafts: Dict[str, Optional[Draft]] = field(default_factory=dict)

    def get_draft(self, draft_id: str) -> Optional[Draft]:
        if self.active_draft is not None and self.active_draft.draft_id == draft_id:
            return self.active_draft
        if draft_id not in self._drafts:
            self._drafts[draft_id] = self.repo.get_draft(draft_id)
        return self._drafts[draft_id]

    def find_pick(self, draft_id: str, overall_pick_number: int) -> Optional[Tuple[int, DraftPosition]]:
        draft = self.get_draft(draft_id)
        if draft is None:
            return None
        return draft.find_pick(overall_pick_number)


class Rule(Protocol):
    rule_id: str
    priority: int
    enabled: bool

    def validate(self, proposal: Any, ctx: TradeContext) -> None:
        ...


def build_trade_context(repo: DraftRepo, *, extra: Optional[dict[str, Any]] = None) -> TradeContext:
    return TradeContext(repo=repo, active_draft=repo.get_active_draft(), extra=dict(extra or {}))
