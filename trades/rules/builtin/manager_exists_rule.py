from __future__ import annotations

from dataclasses import dataclass

from ...errors import MANAGER_NOT_FOUND, NotFoundError
from ...models import TradeProposal
from ..base import TradeContext


@dataclass
class ManagerExistsRule:
    rule_id: str = "manager_exists"
    priority: int = 25
    enabled: bool = True

    def validate(self, proposal: TradeProposal, ctx: TradeContext) -> None:
        missing = ctx.repo.find_missing_managers(proposal.manager_ids)
        if missing:
            raise NotFoundError(
                MANAGER_NOT_FOUND,
                "Unknown manager in trade",
                {"rule": self.rule_id, "manager_ids": missing},
            )
