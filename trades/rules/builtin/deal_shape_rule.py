from __future__ import annotations

from dataclasses import dataclass

from ...errors import DUPLICATE_PARTY, PARTY_HAS_NO_ASSETS, TOO_FEW_PARTIES, TradeError
from ...models import TradeProposal
from ..base import TradeContext


@dataclass
class DealShapeRule:
    rule_id: str = "deal_shape"
    priority: int = 10
    enabled: bool = True

    def validate(self, proposal: TradeProposal, ctx: TradeContext) -> None:
        managers = proposal.manager_ids

        # A) A trade must involve at least two parties.
        if len(managers) < 2:
            raise TradeError(
                TOO_FEW_PARTIES,
                "Trade must include at least 2 parties",
                {"rule": self.rule_id, "parties": managers},
            )

        # B) One entry per manager.
        seen: set[str] = set()
        duplicates: list[str] = []
        for manager_id in managers:
            if manager_id in seen and manager_id not in duplicates:
                duplicates.append(manager_id)
            seen.add(manager_id)
        if duplicates:
            raise TradeError(
                DUPLICATE_PARTY,
                "Trade parties must be unique",
                {"rule": self.rule_id, "parties": managers, "duplicates": duplicates},
            )

        # C) Every party gives something.
        empty = [p.manager_id for p in proposal.parties if not p.assets]
        if empty:
            raise TradeError(
                PARTY_HAS_NO_ASSETS,
                "Each party must send at least one asset",
                {"rule": self.rule_id, "parties": managers, "empty_parties": empty},
            )
