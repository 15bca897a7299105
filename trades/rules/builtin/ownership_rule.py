from __future__ import annotations

from dataclasses import dataclass

from ...errors import NOT_PICK_OWNER, TradeError
from ...models import TradeProposal
from ..base import TradeContext


@dataclass
class OwnershipRule:
    rule_id: str = "ownership"
    # Runs after pick availability: every pick here exists in the active draft.
    priority: int = 50
    enabled: bool = True

    def validate(self, proposal: TradeProposal, ctx: TradeContext) -> None:
        for sender, asset in proposal.pick_assets():
            found = ctx.find_pick(asset.draft_id, asset.overall_pick_number)
            if found is None:
                continue
            _, pick = found
            owner = pick.current_owner
            if owner != sender:
                raise TradeError(
                    NOT_PICK_OWNER,
                    "Sending party does not own the pick",
                    {
                        "rule": self.rule_id,
                        "sender": sender,
                        "current_owner": owner,
                        "draft_id": asset.draft_id,
                        "overall_pick_number": int(asset.overall_pick_number),
                    },
                )
